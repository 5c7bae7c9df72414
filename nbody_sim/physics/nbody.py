"""Particle state for 2D N-body systems."""

from typing import Iterator, NamedTuple, Tuple
import numpy as np


DIM = 2  # Two-dimensional system


class Particle(NamedTuple):
    """Read-only view of one particle's state."""
    mass: float
    position: np.ndarray
    velocity: np.ndarray


class ParticleSystem:
    """Ordered, fixed-size collection of point masses.

    Positions and velocities are mutable (N, 2) float64 arrays; masses are a
    read-only (N,) array. Index order is the particle's identity for the whole
    run.
    """

    def __init__(self, positions, velocities, masses):
        """Initialize particle state.

        Args:
            positions: Array-like of shape (n, 2)
            velocities: Array-like of shape (n, 2)
            masses: Array-like of shape (n,), strictly positive

        Raises:
            ValueError: If shapes disagree, n < 1, or values are invalid
        """
        positions = np.array(positions, dtype=np.float64)
        velocities = np.array(velocities, dtype=np.float64)
        masses = np.array(masses, dtype=np.float64).reshape(-1)

        n = masses.shape[0]
        if n < 1:
            raise ValueError("A particle system needs at least one particle")
        if positions.shape != (n, DIM):
            raise ValueError(f"positions must have shape ({n}, {DIM}), got {positions.shape}")
        if velocities.shape != (n, DIM):
            raise ValueError(f"velocities must have shape ({n}, {DIM}), got {velocities.shape}")
        if not (np.all(np.isfinite(positions)) and np.all(np.isfinite(velocities))):
            raise ValueError("positions and velocities must be finite")
        if not np.all(np.isfinite(masses)) or np.any(masses <= 0.0):
            raise ValueError("masses must be finite and strictly positive")

        masses.setflags(write=False)
        self._positions = positions
        self._velocities = velocities
        self._masses = masses

    @property
    def n_particles(self) -> int:
        return self._masses.shape[0]

    @property
    def positions(self) -> np.ndarray:
        """Current positions (n, 2). Shared, not copied."""
        return self._positions

    @property
    def velocities(self) -> np.ndarray:
        """Current velocities (n, 2). Shared, not copied."""
        return self._velocities

    @property
    def masses(self) -> np.ndarray:
        """Particle masses (n,). Read-only."""
        return self._masses

    def __len__(self) -> int:
        return self.n_particles

    def __iter__(self) -> Iterator[Particle]:
        for index in range(self.n_particles):
            yield self.particle(index)

    def particle(self, index: int) -> Particle:
        """Return a copy of one particle's state."""
        return Particle(
            float(self._masses[index]),
            self._positions[index].copy(),
            self._velocities[index].copy(),
        )

    def update(self, index: int, position, velocity):
        """Overwrite the position and velocity of one particle.

        Args:
            index: Particle index
            position: New position (2,)
            velocity: New velocity (2,)
        """
        if not 0 <= index < self.n_particles:
            raise IndexError(f"particle index {index} out of range for {self.n_particles} particles")
        self._positions[index] = position
        self._velocities[index] = velocity

    def update_block(self, start: int, stop: int, positions, velocities):
        """Overwrite the state of the contiguous index range [start, stop).

        Args:
            start: First index (inclusive)
            stop: Last index (exclusive)
            positions: New positions (stop - start, 2)
            velocities: New velocities (stop - start, 2)
        """
        if not 0 <= start <= stop <= self.n_particles:
            raise IndexError(f"block [{start}, {stop}) out of range for {self.n_particles} particles")
        self._positions[start:stop] = positions
        self._velocities[start:stop] = velocities

    def copy(self) -> "ParticleSystem":
        """Return an independent snapshot of this system."""
        return ParticleSystem(self._positions, self._velocities, self._masses)

    def get_state(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Get current state (positions, velocities, masses).

        Returns:
            Tuple of (positions, velocities, masses) as numpy array copies
        """
        return (
            self._positions.copy(),
            self._velocities.copy(),
            self._masses.copy(),
        )
