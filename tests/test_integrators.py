"""Tests for integrators."""

import numpy as np
import pytest
from nbody_sim.backends.thread_backend import ThreadPoolBackend
from nbody_sim.physics.integrators import EulerIntegrator
from nbody_sim.physics.nbody import ParticleSystem
from nbody_sim.presets import LinearChain


def test_euler_properties():
    """Test integrator name and order."""
    integrator = EulerIntegrator()
    
    assert integrator.name == "euler"
    assert integrator.order == 1


@pytest.mark.parametrize("n_particles", [1, 2, 5, 16])
def test_euler_position_uses_old_velocity(n_particles):
    """Test the position update uses the velocity from before the step."""
    system = LinearChain(n_particles).generate()
    before = system.copy()
    forces = np.full((n_particles, 2), 1.0e20)
    dt = 0.5
    
    EulerIntegrator().step(system, forces, dt)
    
    assert np.array_equal(system.positions, before.positions + dt * before.velocities)


def test_euler_velocity_update():
    """Test v_new = v + (dt / m) * F."""
    positions = np.array([[0.0, 0.0], [1.0, 1.0]])
    velocities = np.array([[1.0, -1.0], [0.0, 2.0]])
    masses = np.array([2.0, 4.0])
    system = ParticleSystem(positions, velocities, masses)
    forces = np.array([[4.0, 0.0], [-8.0, 2.0]])
    
    EulerIntegrator().step(system, forces, dt=0.25)
    
    assert np.allclose(system.velocities, [[1.5, -1.0], [-0.5, 2.125]])
    assert np.allclose(system.positions, [[0.25, -0.25], [1.0, 1.5]])
    # Masses are never touched
    assert np.array_equal(system.masses, masses)


def test_euler_zero_force_keeps_velocity():
    """Test free particles move in straight lines."""
    system = LinearChain(4).generate()
    before = system.copy()
    
    EulerIntegrator().step(system, np.zeros((4, 2)), dt=2.0)
    
    assert np.array_equal(system.velocities, before.velocities)


def test_euler_rejects_bad_arguments():
    """Test non-positive dt and misshapen forces are rejected."""
    system = LinearChain(3).generate()
    integrator = EulerIntegrator()
    
    with pytest.raises(ValueError):
        integrator.step(system, np.zeros((3, 2)), dt=0.0)
    with pytest.raises(ValueError):
        integrator.step(system, np.zeros((3, 2)), dt=-1.0)
    with pytest.raises(ValueError):
        integrator.step(system, np.zeros((3, 2)), dt=float("nan"))
    with pytest.raises(ValueError):
        integrator.step(system, np.zeros((2, 2)), dt=1.0)


def test_euler_threaded_matches_serial():
    """Test block updates give the same result as a serial update."""
    rng = np.random.default_rng(5)
    positions = rng.normal(size=(23, 2))
    velocities = rng.normal(size=(23, 2))
    masses = rng.uniform(1.0, 3.0, size=23)
    forces = rng.normal(size=(23, 2))
    serial = ParticleSystem(positions, velocities, masses)
    threaded = serial.copy()
    
    EulerIntegrator().step(serial, forces, dt=0.1)
    with ThreadPoolBackend(4) as backend:
        EulerIntegrator().step(threaded, forces, dt=0.1, backend=backend)
    
    assert np.array_equal(serial.positions, threaded.positions)
    assert np.array_equal(serial.velocities, threaded.velocities)
