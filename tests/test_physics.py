"""Tests for particle state and force calculation."""

import numpy as np
import pytest
from nbody_sim.backends.thread_backend import ThreadPoolBackend
from nbody_sim.physics.force_calculator import ForceField, GRAVITATIONAL_CONSTANT
from nbody_sim.physics.nbody import ParticleSystem
from nbody_sim.presets import LinearChain


def test_particle_system_initialization():
    """Test particle system initialization."""
    positions = np.array([[0.0, 0.0], [1.0, 0.0]])
    velocities = np.array([[0.0, 0.0], [0.0, 1.0]])
    masses = np.array([1.0, 2.0])
    
    system = ParticleSystem(positions, velocities, masses)
    
    assert system.n_particles == 2
    assert len(system) == 2
    assert np.allclose(system.positions, positions)
    
    particle = system.particle(1)
    assert particle.mass == 2.0
    assert np.allclose(particle.position, [1.0, 0.0])
    assert np.allclose(particle.velocity, [0.0, 1.0])
    
    # Construction copies its inputs
    positions[0, 0] = 99.0
    assert system.positions[0, 0] == 0.0


def test_particle_system_rejects_bad_input():
    """Test invalid shapes and masses are rejected."""
    with pytest.raises(ValueError):
        ParticleSystem(np.zeros((0, 2)), np.zeros((0, 2)), np.zeros(0))
    with pytest.raises(ValueError):
        ParticleSystem(np.zeros((2, 3)), np.zeros((2, 3)), np.ones(2))
    with pytest.raises(ValueError):
        ParticleSystem(np.zeros((2, 2)), np.zeros((2, 2)), [1.0, 0.0])
    with pytest.raises(ValueError):
        ParticleSystem(np.zeros((2, 2)), np.zeros((2, 2)), [1.0, -1.0])
    with pytest.raises(ValueError):
        ParticleSystem([[np.nan, 0.0]], [[0.0, 0.0]], [1.0])


def test_masses_are_read_only():
    """Test masses cannot be modified after construction."""
    system = LinearChain(3).generate()
    
    with pytest.raises(ValueError):
        system.masses[0] = 1.0


def test_particle_update():
    """Test updating one particle leaves the others untouched."""
    system = LinearChain(3).generate()
    before = system.copy()
    
    system.update(1, [5.0, 6.0], [7.0, 8.0])
    
    assert np.allclose(system.positions[1], [5.0, 6.0])
    assert np.allclose(system.velocities[1], [7.0, 8.0])
    assert np.array_equal(system.positions[[0, 2]], before.positions[[0, 2]])
    assert np.array_equal(system.velocities[[0, 2]], before.velocities[[0, 2]])
    
    with pytest.raises(IndexError):
        system.update(3, [0.0, 0.0], [0.0, 0.0])


def test_force_calculation():
    """Test gravitational force between two particles."""
    positions = np.array([[0.0, 0.0], [3.0, 4.0]])
    velocities = np.zeros((2, 2))
    masses = np.array([2.0, 3.0])
    system = ParticleSystem(positions, velocities, masses)
    
    forces = ForceField(G=1.0).compute_forces(system)
    
    # |F| = G m1 m2 / r^2 = 6 / 25, directed from particle 0 towards particle 1
    expected = 6.0 / 25.0 * np.array([3.0, 4.0]) / 5.0
    assert np.allclose(forces[0], expected)
    assert np.allclose(forces[1], -expected)


def test_default_gravitational_constant():
    """Test the default constant is the SI value."""
    assert ForceField().G == GRAVITATIONAL_CONSTANT == 6.673e-11


def test_newtons_third_law():
    """Test pairwise forces are equal and opposite."""
    rng = np.random.default_rng(7)
    positions = rng.uniform(-1.0e6, 1.0e6, size=(6, 2))
    masses = rng.uniform(1.0e22, 1.0e24, size=6)
    field = ForceField()
    
    for i in range(6):
        for k in range(6):
            if i == k:
                continue
            f_ik = field.pair_force(i, k, positions, masses)
            f_ki = field.pair_force(k, i, positions, masses)
            assert np.allclose(f_ik, -f_ki, rtol=1e-12, atol=0.0)
            assert np.linalg.norm(f_ik) > 0


def test_net_force_matches_pairwise_sum():
    """Test the net force is the sum over every other particle."""
    rng = np.random.default_rng(3)
    positions = rng.uniform(-1.0, 1.0, size=(5, 2))
    velocities = np.zeros((5, 2))
    masses = rng.uniform(1.0, 2.0, size=5)
    system = ParticleSystem(positions, velocities, masses)
    field = ForceField(G=1.0)
    
    forces = field.compute_forces(system)
    
    for i in range(5):
        expected = sum(field.pair_force(i, k, positions, masses) for k in range(5) if k != i)
        assert np.allclose(forces[i], expected, rtol=1e-12)
    # Internal forces cancel
    assert np.allclose(forces.sum(axis=0), 0.0, atol=1e-12)


def test_coincident_particles_contribute_no_force():
    """Test that a pair at zero separation contributes zero force.
    
    Coincident point masses are physically singular. The force field skips
    such pairs instead of producing NaN or Inf; only the remaining pairs
    contribute.
    """
    positions = np.array([[0.0, 0.0], [0.0, 0.0], [2.0, 0.0]])
    velocities = np.zeros((3, 2))
    masses = np.array([1.0, 1.0, 1.0])
    system = ParticleSystem(positions, velocities, masses)
    field = ForceField(G=1.0)
    
    forces = field.compute_forces(system)
    
    assert np.all(np.isfinite(forces))
    # Particles 0 and 1 only feel particle 2: G*1*1/2^2 along +x
    assert np.allclose(forces[0], [0.25, 0.0])
    assert np.allclose(forces[1], [0.25, 0.0])
    assert np.allclose(forces[2], [-0.5, 0.0])
    assert np.array_equal(field.pair_force(0, 1, positions, masses), [0.0, 0.0])


def test_single_particle_has_zero_force():
    """Test N=1 gives an empty sum."""
    system = LinearChain(1).generate()
    
    forces = ForceField().compute_forces(system)
    
    assert forces.shape == (1, 2)
    assert np.array_equal(forces, np.zeros((1, 2)))


def test_force_calculation_does_not_mutate_state():
    """Test force evaluation only reads the system."""
    system = LinearChain(8).generate()
    before = system.copy()
    
    ForceField().compute_forces(system)
    
    assert np.array_equal(system.positions, before.positions)
    assert np.array_equal(system.velocities, before.velocities)


def test_forces_fill_caller_buffer():
    """Test every row of a caller-provided buffer is overwritten."""
    system = LinearChain(5).generate()
    field = ForceField()
    out = np.full((5, 2), np.nan)
    
    result = field.compute_forces(system, out=out)
    
    assert result is out
    assert np.all(np.isfinite(out))
    with pytest.raises(ValueError):
        field.compute_forces(system, out=np.empty((4, 2)))


def test_forces_identical_across_worker_counts():
    """Test the threaded force evaluation is bit-identical to serial."""
    rng = np.random.default_rng(11)
    positions = rng.uniform(-1.0e6, 1.0e6, size=(37, 2))
    velocities = np.zeros((37, 2))
    masses = rng.uniform(1.0e22, 1.0e24, size=37)
    system = ParticleSystem(positions, velocities, masses)
    field = ForceField()
    
    serial = field.compute_forces(system)
    with ThreadPoolBackend(5) as backend:
        threaded = field.compute_forces(system, backend)
    
    assert np.array_equal(serial, threaded)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
