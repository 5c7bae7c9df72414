"""Configuration management."""

import json
import math
import yaml
from typing import Optional
from pathlib import Path
from dataclasses import dataclass, asdict, fields
from nbody_sim.backends.factory import list_available_backends
from nbody_sim.errors import ConfigError
from nbody_sim.physics.force_calculator import GRAVITATIONAL_CONSTANT

INIT_MODES = ("generate", "ingest")
INIT_MODE_ALIASES = {"g": "generate", "i": "ingest"}
_FLOAT_FIELDS = ("dt", "G")


def normalize_init_mode(mode):
    """Map the short aliases g/i to generate/ingest."""
    if isinstance(mode, str):
        mode = mode.lower()
        return INIT_MODE_ALIASES.get(mode, mode)
    return mode


@dataclass
class SimulationConfig:
    """Simulation configuration."""
    # Simulation parameters
    n_particles: int = 100
    n_steps: int = 1000
    dt: float = 0.01
    output_freq: int = 100
    G: float = GRAVITATIONAL_CONSTANT

    # Execution
    workers: int = 1
    backend: Optional[str] = None

    # Initial conditions
    init_mode: str = "generate"
    input_path: Optional[str] = None

    # Output
    report_energy: bool = True
    report_state: bool = False
    plot_path: Optional[str] = None

    def __post_init__(self):
        self.init_mode = normalize_init_mode(self.init_mode)

    def validate(self) -> "SimulationConfig":
        """Check every parameter.

        Returns:
            self, for chaining

        Raises:
            ConfigError: On the first invalid parameter
        """
        if not _is_int(self.n_particles) or self.n_particles <= 0:
            raise ConfigError(f"Number of particles must be a positive integer, got {self.n_particles!r}")
        if not _is_int(self.n_steps) or self.n_steps < 0:
            raise ConfigError(f"Number of timesteps must be a non-negative integer, got {self.n_steps!r}")
        if not _is_real(self.dt):
            raise ConfigError(f"Timestep size must be a number, got {type(self.dt).__name__} {self.dt!r}")
        if not math.isfinite(self.dt) or not self.dt > 0:
            raise ConfigError(f"Timestep size must be positive and finite, got {self.dt!r}")
        if not _is_int(self.output_freq) or self.output_freq <= 0:
            raise ConfigError(f"Output frequency must be a positive integer, got {self.output_freq!r}")
        if not _is_int(self.workers) or self.workers <= 0:
            raise ConfigError(f"Number of threads must be a positive integer, got {self.workers!r}")
        if not _is_real(self.G):
            raise ConfigError(f"Gravitational constant must be a number, got {type(self.G).__name__} {self.G!r}")
        if not math.isfinite(self.G) or not self.G > 0:
            raise ConfigError(f"Gravitational constant must be positive and finite, got {self.G!r}")
        if self.init_mode not in INIT_MODES:
            raise ConfigError(f"Unknown initial-condition mode {self.init_mode!r}. Use one of {list(INIT_MODES)} (or g/i)")
        if self.backend is not None and self.backend not in list_available_backends():
            raise ConfigError(f"Unknown backend {self.backend!r}. Available: {list_available_backends()}")
        if self.backend == "serial" and self.workers != 1:
            raise ConfigError(f"The serial backend runs one worker, got {self.workers} threads")
        return self


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        SimulationConfig object (not yet validated)
    """
    config_path = Path(config_path)

    try:
        with open(config_path, 'r') as f:
            if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot parse config file {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys in {config_path}: {unknown}")

    # YAML 1.1 reads exponent floats without a dot (1e-3) as strings
    for key in _FLOAT_FIELDS:
        if isinstance(data.get(key), str):
            try:
                data[key] = float(data[key])
            except ValueError:
                raise ConfigError(f"{key} in {config_path} must be a number, got {data[key]!r}") from None

    return SimulationConfig(**data)


def save_config(config: SimulationConfig, output_path: str):
    """Save configuration to file.

    Args:
        config: SimulationConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            yaml.safe_dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
