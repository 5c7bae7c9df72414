"""Abstract base class for execution backends."""

from abc import ABC, abstractmethod
from typing import Callable, List, Tuple


class Backend(ABC):
    """Abstract interface for the per-timestep parallel regions.
    
    A backend splits a particle index range into contiguous, disjoint blocks
    and runs a block function over every block. ``parallel_for`` returns only
    once every block has finished, so each call is a full barrier.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this backend."""
        pass
    
    @property
    @abstractmethod
    def workers(self) -> int:
        """Return the number of workers (fixed for the backend's lifetime)."""
        pass
    
    @abstractmethod
    def parallel_for(self, func: Callable[[int, int], None], n: int) -> None:
        """Run ``func(start, stop)`` over a partition of ``range(n)``.
        
        Args:
            func: Block function; must only write the indices it is given
            n: Number of indices
        """
        pass
    
    def partition(self, n: int) -> List[Tuple[int, int]]:
        """Split ``range(n)`` into at most ``workers`` contiguous blocks.
        
        Args:
            n: Number of indices
            
        Returns:
            List of (start, stop) pairs, in index order, none of them empty
        """
        n_blocks = min(self.workers, n)
        if n_blocks <= 0:
            return []
        base, extra = divmod(n, n_blocks)
        blocks = []
        start = 0
        for block in range(n_blocks):
            stop = start + base + (1 if block < extra else 0)
            blocks.append((start, stop))
            start = stop
        return blocks
    
    def close(self) -> None:
        """Release backend resources."""
        pass
    
    def __enter__(self):
        return self
    
    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
