"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Optional
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.physics.nbody import ParticleSystem


class Integrator(ABC):
    """Abstract interface for numerical integrators."""
    
    @abstractmethod
    def step(
        self,
        system: ParticleSystem,
        forces: np.ndarray,
        dt: float,
        backend: Optional[Backend] = None,
    ) -> None:
        """Advance every particle by one time step, in place.
        
        Args:
            system: Particle system (state at the end of the previous step)
            forces: (n, 2) forces evaluated on that state
            dt: Time step
            backend: Execution backend
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass
    
    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler)."""
        pass
