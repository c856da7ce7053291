"""Unit tests for spring-damper forces and wind fields."""

import numpy as np
import pytest

from orbweb.core.forces import spring_damper_force, strand_forces
from orbweb.core.web import Particle, SilkStrand
from orbweb.core.wind import LoopyWind, OscillatingWind, StillAir, create_default_wind


class TestSpringDamperForce:
    """Tests for spring_damper_force."""

    def test_at_rest_is_zero(self):
        a = Particle(position=[0.0, 0.0, 0.0])
        b = Particle(position=[1.0, 0.0, 0.0])
        strand = SilkStrand(0, 1, length=1.0, stiffness=5.0, damping=0.5)
        assert np.allclose(spring_damper_force(a, b, strand), 0.0)

    def test_stretched_pulls_together(self):
        a = Particle(position=[0.0, 0.0, 0.0])
        b = Particle(position=[2.0, 0.0, 0.0])
        strand = SilkStrand(0, 1, length=1.0, stiffness=3.0, damping=0.0)
        force = spring_damper_force(a, b, strand)
        # d = -2 x̂, stiffness * (1 - 2) / 2 = -1.5 → +3 x̂
        assert np.allclose(force, [3.0, 0.0, 0.0])

    def test_compressed_pushes_apart(self):
        a = Particle(position=[0.0, 0.0, 0.0])
        b = Particle(position=[0.5, 0.0, 0.0])
        strand = SilkStrand(0, 1, length=1.0, stiffness=1.0, damping=0.0)
        force = spring_damper_force(a, b, strand)
        assert force[0] < 0.0

    def test_damping_opposes_separation(self):
        a = Particle(position=[0.0, 0.0, 0.0], velocity=[-1.0, 0.0, 0.0])
        b = Particle(position=[1.0, 0.0, 0.0])
        strand = SilkStrand(0, 1, length=1.0, stiffness=0.0, damping=0.4)
        force = spring_damper_force(a, b, strand)
        # Moving apart: damping pulls a back toward b
        assert np.allclose(force, [0.4, 0.0, 0.0])

    def test_coincident_particles_do_not_divide_by_zero(self):
        a = Particle(position=[1.0, 1.0, 1.0])
        b = Particle(position=[1.0, 1.0, 1.0])
        strand = SilkStrand(0, 1, length=1.0, stiffness=1.0, damping=1.0)
        force = spring_damper_force(a, b, strand)
        assert np.all(np.isfinite(force))
        assert np.allclose(force, 0.0)

    def test_symmetry(self, rng):
        for _ in range(20):
            a = Particle(position=rng.normal(size=3), velocity=rng.normal(size=3))
            b = Particle(position=rng.normal(size=3), velocity=rng.normal(size=3))
            strand = SilkStrand(0, 1, length=rng.uniform(0.1, 2.0),
                                stiffness=rng.uniform(0.1, 5.0), damping=rng.uniform(0.0, 1.0))
            assert np.allclose(spring_damper_force(a, b, strand),
                               -spring_damper_force(b, a, strand))


class TestStrandForces:
    """Tests for the vectorized strand_forces."""

    def test_matches_scalar_version(self, rng):
        n = 6
        particles = [Particle(position=rng.normal(size=3), velocity=rng.normal(size=3)) for _ in range(n)]
        strands = [SilkStrand(i, (i + 1) % n, length=rng.uniform(0.2, 1.5),
                              stiffness=rng.uniform(0.5, 2.0), damping=rng.uniform(0.0, 0.5))
                   for i in range(n)]

        positions = np.array([p.position for p in particles])
        velocities = np.array([p.velocity for p in particles])
        forces = strand_forces(
            positions,
            velocities,
            np.array([s.start for s in strands]),
            np.array([s.end for s in strands]),
            np.array([s.length for s in strands]),
            np.array([s.stiffness for s in strands]),
            np.array([s.damping for s in strands]),
        )

        for i, strand in enumerate(strands):
            expected = spring_damper_force(particles[strand.start], particles[strand.end], strand)
            assert np.allclose(forces[i], expected)


class TestWind:
    """Tests for wind fields."""

    def test_default_wind(self):
        assert isinstance(create_default_wind(), OscillatingWind)

    def test_oscillating_wind_value(self):
        wind = OscillatingWind()
        t = 1.3
        force = wind(t, np.array([0.0, 2.0, 0.0]), 0.05)
        expected = np.array([0.8 * np.sin(t), 0.05 * np.sin(0.1 * t), 0.1 * np.sin(0.3 * t)]) * (2.0 * 0.05)
        assert np.allclose(force, expected)

    def test_oscillating_wind_scales_with_height(self):
        wind = OscillatingWind()
        positions = np.array([[0.0, 0.0, 0.0], [0.0, 1.0, 0.0], [5.0, 2.0, -1.0]])
        forces = wind(0.7, positions, 1.0)
        assert forces.shape == (3, 3)
        assert np.allclose(forces[0], 0.0)
        assert np.allclose(forces[2], 2.0 * forces[1])

    def test_loopy_wind(self):
        wind = LoopyWind()
        force = wind(0.0, np.array([1.0, 2.0, 0.5]), 0.1)
        assert np.allclose(force, np.array([2.0 / 0.5, -1.0 / 0.5, 0.5 / 4.0]) * 0.1)

    def test_loopy_wind_floors_z(self):
        wind = LoopyWind()
        force = wind(0.0, np.array([1.0, 2.0, 0.0]), 1.0)
        assert np.allclose(force, [2.0 / 0.1, -1.0 / 0.1, 0.0])

    def test_still_air(self):
        positions = np.ones((4, 3))
        assert np.array_equal(StillAir()(3.0, positions, 1.0), np.zeros((4, 3)))
