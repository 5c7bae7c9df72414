"""Off-screen plotting of particle trajectories."""

from nbody_sim.render.renderer_2d import Renderer2D

__all__ = ["Renderer2D"]
