"""I/O utilities for initial conditions and console output."""

from nbody_sim.io.ingest import read_initial_conditions, load_initial_conditions
from nbody_sim.io.reporting import ConsoleReporter, format_energy, format_state, format_elapsed

__all__ = [
    "read_initial_conditions",
    "load_initial_conditions",
    "ConsoleReporter",
    "format_energy",
    "format_state",
    "format_elapsed",
]
