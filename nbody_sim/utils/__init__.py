"""Utility functions for configuration."""

from nbody_sim.utils.config import load_config, save_config, SimulationConfig

__all__ = ["load_config", "save_config", "SimulationConfig"]
