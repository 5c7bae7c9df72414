"""Numerical integrators for N-body simulations."""

from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import EulerIntegrator

__all__ = ["Integrator", "EulerIntegrator"]
