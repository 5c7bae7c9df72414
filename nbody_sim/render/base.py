"""Interface for trajectory plots driven by the simulator's output steps."""

from abc import ABC, abstractmethod


class Renderer(ABC):
    """Records one frame per output step and writes the result to a file.

    The CLI calls ``render`` from the simulator's output callback, ``save``
    once after the run and ``close`` last.
    """

    @abstractmethod
    def render(self, positions, velocities=None, masses=None):
        """Record the particle state of one output step."""
        pass

    @abstractmethod
    def save(self, output_path: str):
        """Write everything recorded so far to ``output_path``."""
        pass

    @abstractmethod
    def close(self):
        pass
