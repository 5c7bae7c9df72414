"""
N-body Simulator - direct-summation 2D gravity with explicit Euler steps.

Features:
- All-pairs force evaluation (O(N^2)) split across a fixed worker pool
- Explicit Euler integration
- Kinetic/potential energy diagnostics
- Deterministic or ingested initial conditions
- CLI with console output and trajectory plots
"""

__version__ = "0.1.0"

from nbody_sim.physics.simulator import Simulator
from nbody_sim.physics.nbody import ParticleSystem
from nbody_sim.backends.factory import get_backend, list_available_backends

__all__ = [
    "Simulator",
    "ParticleSystem",
    "get_backend",
    "list_available_backends",
]
