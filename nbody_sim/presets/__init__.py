"""Initial-condition generators."""

from nbody_sim.presets.base import Preset
from nbody_sim.presets.linear_chain import LinearChain

__all__ = ["Preset", "LinearChain"]
