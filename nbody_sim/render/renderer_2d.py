"""2D trajectory renderer using matplotlib."""

from pathlib import Path
from typing import List, Optional, Tuple
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from nbody_sim.render.base import Renderer


class Renderer2D(Renderer):
    """Off-screen 2D renderer.

    Each ``render`` call records one frame. The figure shows the trail of
    every recorded frame and the latest positions, coloured by speed.
    """

    def __init__(
        self,
        figsize: Tuple[int, int] = (8, 8),
        dpi: int = 100,
        show_trails: bool = True,
        trail_length: Optional[int] = None,
        color_by_velocity: bool = True,
        size_by_mass: bool = False,
        title: str = "N-body Simulation (2D)"
    ):
        """Initialize 2D renderer.

        Args:
            figsize: Figure size (width, height)
            dpi: Dots per inch
            show_trails: Whether to draw previous positions
            trail_length: Number of frames to keep (None keeps all)
            color_by_velocity: Color particles by velocity magnitude
            size_by_mass: Size particles by mass
            title: Axes title
        """
        self.figsize = figsize
        self.dpi = dpi
        self.show_trails = show_trails
        self.trail_length = trail_length
        self.color_by_velocity = color_by_velocity
        self.size_by_mass = size_by_mass
        self.title = title

        self.fig: Optional[Figure] = None
        self.ax = None
        self.canvas: Optional[FigureCanvasAgg] = None
        self.trails: List[np.ndarray] = []
        self.frame_count = 0

    def _initialize(self):
        if self.fig is None:
            self.fig = Figure(figsize=self.figsize, dpi=self.dpi)
            self.canvas = FigureCanvasAgg(self.fig)
            self.ax = self.fig.add_subplot(1, 1, 1)

    def render(self, positions: np.ndarray, velocities: Optional[np.ndarray] = None, masses: Optional[np.ndarray] = None):
        """Record and draw one frame."""
        self._initialize()
        pos_2d = np.asarray(positions, dtype=np.float64)[:, :2]

        self.trails.append(pos_2d.copy())
        if self.trail_length is not None and len(self.trails) > self.trail_length:
            self.trails.pop(0)
        self.frame_count += 1

        if self.color_by_velocity and velocities is not None:
            vel_mag = np.linalg.norm(np.asarray(velocities), axis=1)
            colors = (vel_mag - vel_mag.min()) / (vel_mag.max() - vel_mag.min() + 1e-10)
            cmap = "viridis"
        else:
            colors = "tab:blue"
            cmap = None

        if self.size_by_mass and masses is not None:
            masses_np = np.asarray(masses).flatten()
            sizes = 10 + 50 * (masses_np / masses_np.max())
        else:
            sizes = 12.0

        self.ax.clear()
        self.ax.set_aspect('equal')
        self.ax.set_xlabel('x (m)')
        self.ax.set_ylabel('y (m)')
        self.ax.set_title(self.title)
        self.ax.grid(True, alpha=0.3)

        if self.show_trails and len(self.trails) > 1:
            # (frames, n, 2) -> one polyline per particle
            history = np.stack(self.trails)
            for part in range(history.shape[1]):
                self.ax.plot(history[:, part, 0], history[:, part, 1], 'k-', alpha=0.3, linewidth=0.6)

        self.ax.scatter(
            pos_2d[:, 0], pos_2d[:, 1],
            c=colors, s=sizes, cmap=cmap,
            alpha=0.8, edgecolors='black', linewidths=0.5
        )

    def save(self, output_path: str):
        """Write the current figure to an image file (format from suffix)."""
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")
        self.fig.savefig(Path(output_path))

    def capture_frame(self) -> np.ndarray:
        """Capture current frame as image array."""
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")
        self.canvas.draw()
        return np.asarray(self.canvas.buffer_rgba())[:, :, :3].copy()

    def clear(self):
        """Forget recorded frames."""
        self.trails = []
        self.frame_count = 0
        if self.ax is not None:
            self.ax.clear()

    def close(self):
        """Release the figure."""
        self.fig = None
        self.ax = None
        self.canvas = None
        self.trails = []
