"""Tests for the trajectory renderer."""

import numpy as np
import pytest
from nbody_sim.presets import LinearChain
from nbody_sim.render import Renderer2D
from nbody_sim.render.base import Renderer


def test_render_and_save(tmp_path):
    """Test rendering a few frames and saving a PNG."""
    system = LinearChain(4).generate()
    renderer = Renderer2D(figsize=(4, 4), dpi=50)
    
    for shift in range(3):
        renderer.render(system.positions + shift * 1.0e3, system.velocities, system.masses)
    path = tmp_path / "frame.png"
    renderer.save(str(path))
    
    assert renderer.frame_count == 3
    assert len(renderer.trails) == 3
    assert path.exists()
    renderer.close()


def test_capture_frame_shape():
    """Test captured frames are RGB images of the figure size."""
    system = LinearChain(3).generate()
    renderer = Renderer2D(figsize=(4, 3), dpi=50, size_by_mass=True)
    renderer.render(system.positions, system.velocities, system.masses)
    
    frame = renderer.capture_frame()
    
    assert frame.shape == (150, 200, 3)
    assert frame.dtype == np.uint8


def test_trail_length_limit():
    """Test old frames are dropped beyond the trail length."""
    system = LinearChain(2).generate()
    renderer = Renderer2D(trail_length=2)
    
    for _ in range(5):
        renderer.render(system.positions)
    
    assert len(renderer.trails) == 2
    assert renderer.frame_count == 5
    renderer.clear()
    assert renderer.trails == []


def test_save_before_render():
    with pytest.raises(RuntimeError):
        Renderer2D().save("unused.png")


def test_renderer_interface():
    """Test the plot renderer implements render, save and close."""
    assert isinstance(Renderer2D(), Renderer)
    
    class RenderOnly(Renderer):
        def render(self, positions, velocities=None, masses=None):
            pass
    
    with pytest.raises(TypeError):
        RenderOnly()
