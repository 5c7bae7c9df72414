"""Direct-summation gravitational force calculation.

Every particle's net force is computed independently from one consistent
snapshot of positions and masses. The per-particle arithmetic is the same
whichever worker owns the index, so results do not depend on worker count.
"""

import logging
from typing import Optional
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.backends.serial_backend import SerialBackend
from nbody_sim.physics.nbody import DIM, ParticleSystem

logger = logging.getLogger(__name__)

GRAVITATIONAL_CONSTANT = 6.673e-11  # m^3 / (kg * s^2)


class ForceField:
    """All-pairs Newtonian gravity in two dimensions.

    Force on particle i:

        F_i = sum_{k != i} G * m_i * m_k * (s_k - s_i) / |s_k - s_i|^3

    A pair at exactly zero separation contributes nothing, so coincident
    particles never produce NaN or Inf.
    """

    def __init__(self, G: float = GRAVITATIONAL_CONSTANT):
        """Initialize force field.

        Args:
            G: Gravitational constant
        """
        self._G = float(G)

    @property
    def G(self) -> float:
        return self._G

    def compute_forces(
        self,
        system: ParticleSystem,
        backend: Optional[Backend] = None,
        out: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Compute the net force on every particle.

        Reads the system without modifying it. Each worker writes only the
        rows of ``out`` for the indices it owns.

        Args:
            system: Particle system snapshot
            backend: Execution backend (serial if None)
            out: Optional (n, 2) buffer to fill; allocated if None

        Returns:
            (n, 2) array of force vectors
        """
        n = system.n_particles
        if out is None:
            out = np.empty((n, DIM), dtype=np.float64)
        elif out.shape != (n, DIM):
            raise ValueError(f"force buffer must have shape ({n}, {DIM}), got {out.shape}")
        if backend is None:
            backend = SerialBackend()

        positions = system.positions
        masses = system.masses

        def accumulate(start: int, stop: int):
            for index in range(start, stop):
                out[index] = self.compute_force(index, positions, masses)

        backend.parallel_for(accumulate, n)
        return out

    def compute_force(self, index: int, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """Net force on one particle due to all the others.

        Args:
            index: Particle index
            positions: (n, 2) positions
            masses: (n,) masses

        Returns:
            (2,) force vector
        """
        # diff[k] = s_k - s_i; the self term has zero length and drops out
        diff = positions - positions[index]
        dist = np.sqrt(diff[:, 0] * diff[:, 0] + diff[:, 1] * diff[:, 1])
        dist_cubed = dist * dist * dist
        separated = dist != 0.0

        fact = np.zeros_like(dist)
        np.divide(self._G * masses[index] * masses, dist_cubed, out=fact, where=separated)

        # Only I/O inside the parallel region; off unless DEBUG logging is enabled
        if logger.isEnabledFor(logging.DEBUG):
            for k in np.flatnonzero(~separated):
                if k != index:
                    logger.debug("Particles %d and %d are at the same position", index, k)

        force = np.empty(DIM, dtype=np.float64)
        force[0] = np.sum(fact * diff[:, 0])
        force[1] = np.sum(fact * diff[:, 1])
        return force

    def pair_force(self, i: int, k: int, positions: np.ndarray, masses: np.ndarray) -> np.ndarray:
        """Force on particle i due to particle k alone.

        Returns a zero vector for i == k or coincident positions.
        """
        diff = positions[k] - positions[i]
        dist = float(np.sqrt(diff[0] * diff[0] + diff[1] * diff[1]))
        if i == k or dist == 0.0:
            return np.zeros(DIM, dtype=np.float64)
        fact = self._G * masses[i] * masses[k] / (dist * dist * dist)
        return fact * diff
