"""
Unit tests for gravity and motion integration.

Tests cover:
- Acceleration magnitude and direction
- Independence from satellite mass
- Degenerate distances
- Explicit Euler position/orientation updates
"""

import numpy as np
import pytest

from gravity_well.core.physics import gravitational_acceleration, apply_gravity, integrate_motion
from gravity_well.core.store import Kind, OrbitBounds

G = 6.674e-11


def _place_satellite(world, pos, vel=(0.0, 0.0), omega=0.0, mass=None):
    return world.store.spawn(
        Kind.SATELLITE,
        pos=np.array(pos, dtype=float),
        vel=np.array(vel, dtype=float),
        angular_velocity=omega,
        mass=world.config.satellite_mass if mass is None else mass,
        radius=world.config.satellite_radius,
        orbit=OrbitBounds(),
    )


class TestGravitationalAcceleration:
    """Tests for the acceleration formula."""

    def test_magnitude(self):
        M = 1.0e16
        delta = np.array([300.0, 400.0])  # d = 500
        acc = gravitational_acceleration(G, M, 10.0, delta)
        expected = G * M / 500.0 ** 2
        assert np.linalg.norm(acc) == pytest.approx(expected, rel=1e-12)

    def test_independent_of_satellite_mass(self):
        M = 1.9e16
        delta = np.array([-120.0, 75.0])
        light = gravitational_acceleration(G, M, 1.0, delta)
        heavy = gravitational_acceleration(G, M, 1.0e6, delta)
        np.testing.assert_allclose(light, heavy, rtol=1e-12)

    def test_points_towards_primary(self):
        delta = np.array([3.0, 4.0])
        acc = gravitational_acceleration(G, 1.0e16, 1.0, delta)
        unit = acc / np.linalg.norm(acc)
        np.testing.assert_allclose(unit, [0.6, 0.8], atol=1e-12)

    @pytest.mark.parametrize("delta", [(-1.0, 0.0), (0.0, -1.0), (-5.0, -5.0), (2.0, -7.0)])
    def test_direction_in_every_quadrant(self, delta):
        delta = np.array(delta)
        acc = gravitational_acceleration(G, 1.0e16, 1.0, delta)
        assert np.dot(acc, delta) > 0
        np.testing.assert_allclose(acc / np.linalg.norm(acc), delta / np.linalg.norm(delta), atol=1e-12)

    def test_zero_distance_is_skipped(self):
        assert gravitational_acceleration(G, 1.0e16, 1.0, np.zeros(2)) is None

    def test_below_min_distance_is_skipped(self):
        delta = np.array([1e-4, 0.0])
        assert gravitational_acceleration(G, 1.0e16, 1.0, delta, min_distance_sq=1e-6) is None


class TestApplyGravity:
    """Tests for the gravity stage."""

    def test_velocity_incremented_by_acc_dt(self, world):
        center = world.region.center
        h = _place_satellite(world, center + np.array([-200.0, 0.0]))
        cfg = world.config

        apply_gravity(world, 0.5)

        expected = cfg.gravitational_constant * cfg.primary_mass / 200.0 ** 2 * 0.5
        assert world.store.vel[h][0] == pytest.approx(expected)
        assert world.store.vel[h][1] == pytest.approx(0.0, abs=1e-12)

    def test_two_masses_same_velocity_change(self, world):
        center = world.region.center
        a = _place_satellite(world, center + np.array([0.0, 250.0]), mass=1.0)
        b = _place_satellite(world, center + np.array([0.0, 250.0]), mass=5000.0)
        apply_gravity(world, 1.0)
        np.testing.assert_allclose(world.store.vel[a], world.store.vel[b])

    def test_coincident_satellite_skipped(self, world):
        h = _place_satellite(world, world.region.center, vel=(1.0, 2.0))
        skipped = apply_gravity(world, 1.0)
        assert skipped == 1
        np.testing.assert_array_equal(world.store.vel[h], [1.0, 2.0])

    def test_moons_ignore_gravity(self, world):
        moon = world.store.spawn(Kind.MOON, pos=world.region.center + np.array([100.0, 0.0]),
                                 vel=np.array([0.0, 3.0]), angular_velocity=0.0,
                                 mass=1.0, radius=1.0)
        apply_gravity(world, 1.0)
        np.testing.assert_array_equal(world.store.vel[moon], [0.0, 3.0])


class TestIntegrateMotion:
    """Tests for the motion stage."""

    def test_position_and_angle_advance(self, world):
        h = _place_satellite(world, (100.0, 100.0), vel=(10.0, -4.0), omega=2.0)
        integrate_motion(world, 0.25)
        np.testing.assert_allclose(world.store.pos[h], [102.5, 99.0])
        assert world.store.angle[h] == pytest.approx(0.5)

    def test_primary_never_moves(self, world):
        before = world.store.pos[world.primary].copy()
        integrate_motion(world, 10.0)
        np.testing.assert_array_equal(world.store.pos[world.primary], before)

    def test_moons_keep_moving(self, world):
        moon = world.store.spawn(Kind.MOON, pos=np.array([0.0, 0.0]), vel=np.array([1.0, 1.0]),
                                 angular_velocity=-1.0, mass=1.0, radius=1.0)
        integrate_motion(world, 2.0)
        np.testing.assert_allclose(world.store.pos[moon], [2.0, 2.0])
        assert world.store.angle[moon] == pytest.approx(-2.0)
