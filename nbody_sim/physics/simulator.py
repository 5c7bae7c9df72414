"""Main simulator controller."""

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple
import logging
import time
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.backends.serial_backend import SerialBackend
from nbody_sim.errors import ConfigError
from nbody_sim.physics.diagnostics import EnergyMonitor, EnergyReport
from nbody_sim.physics.force_calculator import ForceField
from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import EulerIntegrator
from nbody_sim.physics.nbody import DIM, ParticleSystem

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a fixed-length run."""
    steps: int
    elapsed_seconds: float
    energies: List[Tuple[int, EnergyReport]] = field(default_factory=list)


class Simulator:
    """Main simulation controller.

    Sequences force evaluation and integration for a fixed number of steps.
    Within a step, force evaluation finishes for every particle before any
    particle is integrated, and integration finishes before the next step
    (or any diagnostic) starts.
    """

    def __init__(
        self,
        system: ParticleSystem,
        dt: float,
        backend: Optional[Backend] = None,
        integrator: Optional[Integrator] = None,
        force_field: Optional[ForceField] = None,
        energy_monitor: Optional[EnergyMonitor] = None,
    ):
        """Initialize simulator.

        Args:
            system: Particle system, advanced in place
            dt: Time step (must be positive)
            backend: Execution backend (default: serial)
            integrator: Integrator to use (default: Euler)
            force_field: Force field (default: Newtonian gravity, SI units)
            energy_monitor: Energy diagnostics (default: same G as force_field)
        """
        if not (np.isfinite(dt) and dt > 0):
            raise ConfigError(f"dt must be positive and finite, got {dt}")
        self.system = system
        self.dt = float(dt)
        self.backend = backend or SerialBackend()
        self.integrator = integrator or EulerIntegrator()
        self.force_field = force_field or ForceField()
        self.energy_monitor = energy_monitor or EnergyMonitor(G=self.force_field.G)

        self.time = 0.0
        self.step_count = 0
        self._forces = np.empty((system.n_particles, DIM), dtype=np.float64)

        # Callbacks
        self.on_step_callback: Optional[Callable] = None
        self.on_energy_callback: Optional[Callable] = None
        self.on_output_callback: Optional[Callable] = None

    @property
    def forces(self) -> np.ndarray:
        """Forces from the most recent force evaluation (n, 2)."""
        return self._forces

    def step(self):
        """Perform one simulation step."""
        self.force_field.compute_forces(self.system, self.backend, out=self._forces)
        self.integrator.step(self.system, self._forces, self.dt, self.backend)
        self.step_count += 1
        self.time = self.step_count * self.dt

        if self.on_step_callback:
            self.on_step_callback(self)

    def run(self, n_steps: int, output_freq: int = 1, compute_energy: bool = True) -> RunResult:
        """Run simulation for a fixed number of steps.

        Diagnostics fire at step 0 and at every step divisible by
        ``output_freq``. The elapsed time covers the whole loop, including the
        step 0 diagnostics.

        Args:
            n_steps: Number of steps to run (non-negative)
            output_freq: Step interval between diagnostics (positive)
            compute_energy: Whether to compute energies at output steps

        Returns:
            RunResult with step count, elapsed wall-clock time and energies
        """
        if n_steps < 0:
            raise ConfigError(f"n_steps must be non-negative, got {n_steps}")
        if output_freq < 1:
            raise ConfigError(f"output_freq must be positive, got {output_freq}")

        logger.info(
            "Running %d steps for %d particles (dt=%g, integrator=%s, backend=%s x%d)",
            n_steps, self.system.n_particles, self.dt, self.integrator.name,
            self.backend.name, self.backend.workers,
        )
        result = RunResult(steps=0, elapsed_seconds=0.0)

        start = time.perf_counter()
        self._emit(0, compute_energy, result)
        for step in range(1, n_steps + 1):
            self.step()
            if step % output_freq == 0:
                self._emit(step, compute_energy, result)
        result.elapsed_seconds = time.perf_counter() - start
        result.steps = n_steps

        logger.info("Finished %d steps in %.3f s", n_steps, result.elapsed_seconds)
        return result

    def _emit(self, step: int, compute_energy: bool, result: RunResult):
        """Run the diagnostics and output callbacks for one output step."""
        if compute_energy:
            report = self.energy_monitor.compute_energies(self.system)
            result.energies.append((step, report))
            if self.on_energy_callback:
                self.on_energy_callback(self, step, report)
        if self.on_output_callback:
            self.on_output_callback(self, step)

    def get_state(self):
        """Get current simulation state.

        Returns:
            Tuple of (positions, velocities, masses, time, step_count)
        """
        pos, vel, mass = self.system.get_state()
        return pos, vel, mass, self.time, self.step_count

    def get_energy(self) -> float:
        """Get current total energy (kinetic + potential)."""
        return self.energy_monitor.compute_energies(self.system).total

    def get_kinetic_energy(self) -> float:
        """Get current kinetic energy."""
        return self.energy_monitor.kinetic_energy(self.system)

    def get_potential_energy(self) -> float:
        """Get current potential energy."""
        return self.energy_monitor.potential_energy(self.system)
