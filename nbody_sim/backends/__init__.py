"""Execution backends for the per-timestep parallel regions."""

from nbody_sim.backends.base import Backend
from nbody_sim.backends.factory import get_backend, list_available_backends

__all__ = ["Backend", "get_backend", "list_available_backends"]
