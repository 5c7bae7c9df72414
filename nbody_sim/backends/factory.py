"""Backend factory for creating execution backends."""

from typing import List, Optional
from nbody_sim.backends.base import Backend
from nbody_sim.backends.serial_backend import SerialBackend
from nbody_sim.backends.thread_backend import ThreadPoolBackend


def list_available_backends() -> List[str]:
    """List all available backends.
    
    Returns:
        List of backend names that can be instantiated
    """
    return ["serial", "threads"]


def get_backend(name: Optional[str] = None, workers: int = 1) -> Backend:
    """Get a backend instance.
    
    Args:
        name: Backend name ('serial', 'threads'). If None, picks 'threads'
            when more than one worker is requested and 'serial' otherwise.
        workers: Number of workers
        
    Returns:
        Backend instance
        
    Raises:
        ValueError: If the backend is unknown or the worker count is invalid
    """
    if workers < 1:
        raise ValueError(f"workers must be positive, got {workers}")
    
    if name is None:
        name = "threads" if workers > 1 else "serial"
    
    name_lower = name.lower()
    
    if name_lower == "serial":
        if workers != 1:
            raise ValueError(f"Serial backend runs a single worker, got workers={workers}")
        return SerialBackend()
    elif name_lower == "threads":
        return ThreadPoolBackend(workers)
    else:
        available = list_available_backends()
        raise ValueError(f"Unknown backend '{name}'. Available: {available}")
