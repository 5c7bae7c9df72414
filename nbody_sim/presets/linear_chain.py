"""Deterministic line-of-particles preset."""

import numpy as np
from nbody_sim.physics.nbody import DIM, ParticleSystem
from nbody_sim.presets.base import Preset


class LinearChain(Preset):
    """Equal masses at equal spacing along the x-axis.
    
    Particle i sits at (i * gap, 0). Every particle moves parallel to the
    y-axis with the same speed: even indices in +y, odd indices in -y.
    """
    
    def __init__(
        self,
        n_particles: int = 100,
        mass: float = 5.0e24,
        gap: float = 1.0e5,
        speed: float = 3.0e4
    ):
        """Initialize linear chain preset.
        
        Args:
            n_particles: Number of particles
            mass: Mass of every particle (kg)
            gap: Spacing along the x-axis (m)
            speed: Initial speed along the y-axis (m/s)
        """
        super().__init__(n_particles)
        if mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")
        self.mass = mass
        self.gap = gap
        self.speed = speed
    
    @property
    def name(self) -> str:
        return "linear"
    
    def generate(self) -> ParticleSystem:
        """Generate linear chain initial conditions."""
        n = self.n_particles
        index = np.arange(n)
        
        positions = np.zeros((n, DIM))
        positions[:, 0] = index * self.gap
        
        velocities = np.zeros((n, DIM))
        velocities[:, 1] = np.where(index % 2 == 0, self.speed, -self.speed)
        
        masses = np.full(n, self.mass)
        
        return ParticleSystem(positions, velocities, masses)
