"""Diagnostics for N-body simulations."""

from dataclasses import dataclass
import numpy as np
from nbody_sim.physics.force_calculator import GRAVITATIONAL_CONSTANT
from nbody_sim.physics.nbody import ParticleSystem


@dataclass(frozen=True)
class EnergyReport:
    """Kinetic and potential energy of a system at one instant."""
    kinetic: float
    potential: float

    @property
    def total(self) -> float:
        return self.kinetic + self.potential


class EnergyMonitor:
    """Compute energy diagnostics matching the force law.

    All methods are read-only queries over the current state; calling them
    never affects the dynamics.
    """

    def __init__(self, G: float = GRAVITATIONAL_CONSTANT):
        """Initialize diagnostics.

        Args:
            G: Gravitational constant (must match the force field)
        """
        self._G = float(G)

    @property
    def G(self) -> float:
        return self._G

    def kinetic_energy(self, system: ParticleSystem) -> float:
        """Total kinetic energy: 0.5 * sum(m_i * |v_i|^2)."""
        velocities = system.velocities
        speed_sq = velocities[:, 0] * velocities[:, 0] + velocities[:, 1] * velocities[:, 1]
        return float(0.5 * np.sum(system.masses * speed_sq))

    def potential_energy(self, system: ParticleSystem) -> float:
        """Total potential energy over unique pairs.

        U = -G * sum_{i<j} m_i * m_j / |s_i - s_j|

        Pairs at zero separation are left out of the sum, as in the force
        calculation.
        """
        positions = system.positions
        masses = system.masses
        n = system.n_particles

        U = 0.0
        for i in range(n - 1):
            diff = positions[i] - positions[i + 1:]
            dist = np.sqrt(diff[:, 0] * diff[:, 0] + diff[:, 1] * diff[:, 1])
            separated = dist > 0.0
            U -= float(np.sum(self._G * masses[i] * masses[i + 1:][separated] / dist[separated]))
        return U

    def compute_energies(self, system: ParticleSystem) -> EnergyReport:
        """Compute kinetic and potential energy.

        Args:
            system: Particle system

        Returns:
            EnergyReport snapshot
        """
        return EnergyReport(
            kinetic=self.kinetic_energy(system),
            potential=self.potential_energy(system),
        )

    def center_of_mass_velocity(self, system: ParticleSystem) -> np.ndarray:
        """Mass-weighted mean velocity (2,)."""
        masses = system.masses
        return np.sum(masses[:, np.newaxis] * system.velocities, axis=0) / np.sum(masses)

    def angular_momentum(self, system: ParticleSystem) -> float:
        """Total angular momentum about the origin.

        For 2D: L_z = sum(m_i * (x_i * v_y_i - y_i * v_x_i))

        Returns:
            Signed L_z
        """
        positions = system.positions
        velocities = system.velocities
        L_z = np.sum(system.masses * (positions[:, 0] * velocities[:, 1] -
                                      positions[:, 1] * velocities[:, 0]))
        return float(L_z)
