"""Euler method integrator (baseline, O(h) accuracy)."""

from typing import Optional
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.backends.serial_backend import SerialBackend
from nbody_sim.physics.nbody import DIM, ParticleSystem
from nbody_sim.physics.integrators.base import Integrator


class EulerIntegrator(Integrator):
    """Explicit (forward) Euler method - first-order integrator.
    
    Energy drifts over long runs; that is the expected behaviour of the
    scheme and is left uncorrected.
    """
    
    @property
    def name(self) -> str:
        return "euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def step(
        self,
        system: ParticleSystem,
        forces: np.ndarray,
        dt: float,
        backend: Optional[Backend] = None,
    ) -> None:
        """Euler step: r_new = r + v*dt, v_new = v + (dt/m)*F.
        
        The position update uses the old velocity. Each particle depends only
        on its own state and its own force, so blocks are updated
        independently.
        
        Args:
            system: Particle system, updated in place
            forces: (n, 2) forces at the current state
            dt: Time step (must be positive)
            backend: Execution backend (serial if None)
        """
        if not (np.isfinite(dt) and dt > 0):
            raise ValueError(f"dt must be positive and finite, got {dt}")
        n = system.n_particles
        if forces.shape != (n, DIM):
            raise ValueError(f"forces must have shape ({n}, {DIM}), got {forces.shape}")
        if backend is None:
            backend = SerialBackend()
        
        positions = system.positions
        velocities = system.velocities
        masses = system.masses
        
        def advance(start: int, stop: int):
            old_velocities = velocities[start:stop]
            fact_a = dt / masses[start:stop]
            new_positions = positions[start:stop] + dt * old_velocities
            new_velocities = old_velocities + fact_a[:, np.newaxis] * forces[start:stop]
            system.update_block(start, stop, new_positions, new_velocities)
        
        backend.parallel_for(advance, n)
