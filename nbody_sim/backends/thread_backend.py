"""Thread pool backend implementation."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable
from nbody_sim.backends.base import Backend

logger = logging.getLogger(__name__)


class ThreadPoolBackend(Backend):
    """Fixed-size thread pool backend.
    
    The pool is created once and reused for every parallel region of the run.
    NumPy releases the GIL inside its array kernels, so blocks of particles
    make progress concurrently.
    """
    
    def __init__(self, workers: int = 2):
        """Initialize thread pool backend.
        
        Args:
            workers: Number of worker threads (must be positive)
        """
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self._workers = int(workers)
        self._executor = ThreadPoolExecutor(
            max_workers=self._workers,
            thread_name_prefix="nbody-worker",
        )
        logger.info("Started thread pool with %d workers", self._workers)
    
    @property
    def name(self) -> str:
        return "threads"
    
    @property
    def workers(self) -> int:
        return self._workers
    
    def parallel_for(self, func: Callable[[int, int], None], n: int) -> None:
        if self._executor is None:
            raise RuntimeError("Thread pool backend is closed")
        futures = [
            self._executor.submit(func, start, stop)
            for start, stop in self.partition(n)
        ]
        # Barrier: every block finishes before any error is surfaced
        wait(futures)
        for future in futures:
            future.result()
    
    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            logger.debug("Thread pool shut down")
