# src/gravity_well/core/orbit.py

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional
import math

from .store import Handle, Kind, OrbitBounds
from .events import CaptureEvent
from .collisions import distance
if TYPE_CHECKING:
    from .world import World


def between(x: float, lower: float, upper: float) -> bool:
    """True if lower < x < upper. Reversed bounds are never satisfied."""
    return lower < x < upper


def eccentricity(r_min: float, r_max: float) -> float:
    total = r_max + r_min
    if total == 0:
        return math.nan
    return (r_max - r_min) / total


def is_elliptical(r_min: Optional[float], r_max: Optional[float]) -> bool:
    if r_min is None or r_max is None:
        return False
    e = eccentricity(r_min, r_max)
    return 0.0 < e < 1.0


def update_bounds(bounds: OrbitBounds, dist: float, floor: float, ceiling: float) -> bool:
    """
    Fold one distance observation into `bounds`. Returns True if a bound moved.

    A new closest approach wins over a new farthest point; only one bound moves
    per observation. Farthest points are only counted inside `ceiling`.
    """
    r_min = math.inf if bounds.r_min is None else bounds.r_min
    if between(dist, floor, r_min):
        bounds.r_min = dist
        return True

    r_max = -math.inf if bounds.r_max is None else bounds.r_max
    if between(dist, r_min, ceiling) and dist > r_max:
        bounds.r_max = dist
        return True
    return False


def capture(world: World, handle: Handle) -> Handle:
    """Replace a satellite with a moon carrying the same kinematic state."""
    store = world.store
    bounds = store.orbit[handle]
    moon = store.spawn(
        Kind.MOON,
        pos=store.pos[handle],
        vel=store.vel[handle],
        angular_velocity=store.angular_velocity[handle],
        angle=store.angle[handle],
        mass=store.mass[handle],
        radius=store.radius[handle],
        sprite_key=world.appearance.sample(Kind.MOON, world.rng),
        t=world.time,
        reason="captured",
    )
    store.despawn(handle, reason="captured", t=world.time)
    world.record(CaptureEvent(
        t=world.time,
        satellite=handle,
        moon=moon,
        r_min=bounds.r_min,
        r_max=bounds.r_max,
        eccentricity=eccentricity(bounds.r_min, bounds.r_max),
    ))
    return moon


def track_orbits(world: World) -> List[Handle]:
    """Update every satellite's apsis bounds and capture the elliptical ones. Returns the new moons."""
    store = world.store
    cfg = world.config
    primary = store.primary
    floor = store.radius[primary] + cfg.satellite_radius
    ceiling = world.region.half_extent_limit(cfg.satellite_radius)

    moons: List[Handle] = []
    for h in store.query(Kind.SATELLITE):
        bounds = store.orbit[h]
        update_bounds(bounds, distance(store.pos[h], store.pos[primary]), floor, ceiling)
        bounds.check()
        if is_elliptical(bounds.r_min, bounds.r_max):
            moons.append(capture(world, h))
    return moons
