"""Reading initial conditions from text input."""

import logging
import math
from pathlib import Path
from typing import Iterable, Iterator, TextIO
import numpy as np
from nbody_sim.errors import IngestError
from nbody_sim.physics.nbody import DIM, ParticleSystem

logger = logging.getLogger(__name__)

FIELDS = ("mass", "x-coordinate", "y-coordinate", "x-velocity", "y-velocity")

PROMPT = (
    "For each particle, enter (in order):\n"
    "   its mass, its x-coord, its y-coord, its x-velocity, its y-velocity\n"
)


def _tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from line.split()


def read_initial_conditions(stream: TextIO, n_particles: int) -> ParticleSystem:
    """Read mass, position and velocity for each particle.
    
    Input is whitespace-separated numbers, five per particle (mass, x, y,
    vx, vy) in particle order. Line breaks are not significant. Anything
    after the last particle is ignored.
    
    Args:
        stream: Text stream to read from
        n_particles: Number of particles to read
        
    Returns:
        New ParticleSystem
        
    Raises:
        IngestError: If a field is missing, not a finite number, or a mass
            is not positive
    """
    if n_particles < 1:
        raise IngestError(f"n_particles must be positive, got {n_particles}")
    
    positions = np.empty((n_particles, DIM))
    velocities = np.empty((n_particles, DIM))
    masses = np.empty(n_particles)
    
    tokens = _tokens(stream)
    for part in range(n_particles):
        values = []
        for field in FIELDS:
            token = next(tokens, None)
            if token is None:
                raise IngestError(
                    f"Error reading {field} for particle {part}: unexpected end of input",
                    particle=part, field=field,
                )
            try:
                value = float(token)
            except ValueError:
                raise IngestError(
                    f"Error reading {field} for particle {part}: {token!r} is not a number",
                    particle=part, field=field,
                ) from None
            if not math.isfinite(value):
                raise IngestError(
                    f"Error reading {field} for particle {part}: {token!r} is not finite",
                    particle=part, field=field,
                )
            values.append(value)
        
        mass, x, y, vx, vy = values
        if mass <= 0.0:
            raise IngestError(
                f"Error reading mass for particle {part}: mass must be positive, got {mass}",
                particle=part, field="mass",
            )
        masses[part] = mass
        positions[part] = (x, y)
        velocities[part] = (vx, vy)
    
    logger.debug("Read initial conditions for %d particles", n_particles)
    return ParticleSystem(positions, velocities, masses)


def load_initial_conditions(input_path: str, n_particles: int) -> ParticleSystem:
    """Read initial conditions from a text file.
    
    Args:
        input_path: Path to the input file
        n_particles: Number of particles to read
        
    Returns:
        New ParticleSystem
    """
    input_path = Path(input_path)
    try:
        with open(input_path, 'r') as f:
            return read_initial_conditions(f, n_particles)
    except OSError as exc:
        raise IngestError(f"Cannot read initial conditions from {input_path}: {exc}") from exc
