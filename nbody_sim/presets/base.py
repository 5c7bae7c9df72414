"""Base class for initial-condition presets."""

from abc import ABC, abstractmethod
from nbody_sim.physics.nbody import ParticleSystem


class Preset(ABC):
    """Abstract base class for generated initial conditions."""
    
    def __init__(self, n_particles: int = 100):
        """Initialize preset.
        
        Args:
            n_particles: Number of particles (must be positive)
        """
        if n_particles < 1:
            raise ValueError(f"n_particles must be positive, got {n_particles}")
        self.n_particles = n_particles
    
    @abstractmethod
    def generate(self) -> ParticleSystem:
        """Generate initial conditions.
        
        Returns:
            New ParticleSystem
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
