# src/gravity_well/core/physics.py

from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from .store import Kind
if TYPE_CHECKING:
    from .world import World


def gravitational_acceleration(
    g: float,
    primary_mass: float,
    satellite_mass: float,
    delta: np.ndarray,
    min_distance_sq: float = 0.0,
) -> np.ndarray | None:
    """
    Acceleration a satellite feels towards the primary.

    `delta` is primary position minus satellite position. The force is divided
    back by the satellite's own mass, so the result only depends on the
    primary's mass and the distance. Returns None when the squared distance is
    at or below `min_distance_sq`.
    """
    d2 = float(delta[0] ** 2 + delta[1] ** 2)
    if d2 <= min_distance_sq or d2 == 0.0:
        return None
    force = g * primary_mass * satellite_mass / d2
    accel = force / satellite_mass
    # direction from the degree->radian converted offsets
    theta = np.arctan2(np.radians(delta[1]), np.radians(delta[0]))
    return np.array([accel * np.cos(theta), accel * np.sin(theta)], dtype=float)


def apply_gravity(world: World, dt: float) -> int:
    """Integrate the primary's pull into every satellite's velocity. Returns the number skipped."""
    store = world.store
    cfg = world.config
    primary = store.primary
    p_pos = store.pos[primary]
    p_mass = store.mass[primary]

    skipped = 0
    for h in store.query(Kind.SATELLITE):
        acc = gravitational_acceleration(
            cfg.gravitational_constant,
            p_mass,
            store.mass[h],
            p_pos - store.pos[h],
            cfg.min_distance_sq,
        )
        if acc is None:
            skipped += 1
            continue
        store.vel[h] += acc * dt
    return skipped


def integrate_motion(world: World, dt: float) -> None:
    """Explicit Euler step for position and orientation."""
    store = world.store
    for h, vel in store.vel.items():
        store.pos[h] += vel * dt
    for h, omega in store.angular_velocity.items():
        store.angle[h] += omega * dt
