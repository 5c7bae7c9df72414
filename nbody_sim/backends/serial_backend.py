"""Serial backend implementation."""

from typing import Callable
from nbody_sim.backends.base import Backend


class SerialBackend(Backend):
    """Single-worker backend (baseline, always available)."""
    
    @property
    def name(self) -> str:
        return "serial"
    
    @property
    def workers(self) -> int:
        return 1
    
    def parallel_for(self, func: Callable[[int, int], None], n: int) -> None:
        for start, stop in self.partition(n):
            func(start, stop)
