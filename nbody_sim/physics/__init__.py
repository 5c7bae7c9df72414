"""Physics engine for N-body simulations."""

from nbody_sim.physics.nbody import Particle, ParticleSystem
from nbody_sim.physics.force_calculator import ForceField, GRAVITATIONAL_CONSTANT
from nbody_sim.physics.diagnostics import EnergyMonitor, EnergyReport
from nbody_sim.physics.simulator import Simulator, RunResult

__all__ = [
    "Particle",
    "ParticleSystem",
    "ForceField",
    "GRAVITATIONAL_CONSTANT",
    "EnergyMonitor",
    "EnergyReport",
    "Simulator",
    "RunResult",
]
