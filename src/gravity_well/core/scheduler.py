# src/gravity_well/core/scheduler.py

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np

from .store import Handle, Kind, OrbitBounds
if TYPE_CHECKING:
    from .world import World


@dataclass
class SpawnTimer:
    """
    Repeating interval timer.

    `tick` accumulates elapsed time in whole nanoseconds; when one or more
    intervals are crossed the timer is due for that tick only. Extra intervals
    crossed in a single tick do not queue up extra spawns.
    """
    interval: float = 1.0
    _interval_ns: int = 0
    _elapsed_ns: int = 0
    _due: bool = False

    def __post_init__(self):
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        self._interval_ns = _to_ns(self.interval)
        if self._interval_ns <= 0:
            raise ValueError(f"interval must be at least one nanosecond, got {self.interval}")

    @property
    def elapsed(self) -> float:
        """Seconds accumulated towards the next interval."""
        return self._elapsed_ns / 1e9

    def tick(self, elapsed_seconds: float) -> None:
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed time must be non-negative, got {elapsed_seconds}")
        self._elapsed_ns += _to_ns(elapsed_seconds)
        self._due = self._elapsed_ns >= self._interval_ns
        if self._due:
            self._elapsed_ns %= self._interval_ns

    def is_due(self) -> bool:
        return self._due

    def reset(self) -> None:
        self._elapsed_ns = 0
        self._due = False


def _to_ns(seconds: float) -> int:
    return int(round(seconds * 1_000_000_000))


def sample_spawn_position(rng: np.random.Generator, width: float, height: float) -> np.ndarray:
    """Random point on one of the region's edges."""
    extent = (width, height)
    axis = int(rng.integers(2))
    other = 1 - axis
    pos = np.zeros(2, dtype=float)
    pos[axis] = extent[axis] if rng.random() < 0.5 else 0.0
    pos[other] = rng.random() * extent[other]
    return pos


def sample_velocity(rng: np.random.Generator, max_speed: float) -> np.ndarray:
    return rng.uniform(-max_speed, max_speed, size=2)


def sample_angular_velocity(rng: np.random.Generator, max_angular_speed: float) -> float:
    magnitude = rng.random() * max_angular_speed
    return magnitude if rng.random() < 0.5 else -magnitude


def spawn_satellite(world: World) -> Handle:
    cfg = world.config
    return world.store.spawn(
        Kind.SATELLITE,
        pos=sample_spawn_position(world.rng, world.region.width, world.region.height),
        vel=sample_velocity(world.rng, cfg.max_speed),
        angular_velocity=sample_angular_velocity(world.rng, cfg.max_angular_speed),
        mass=cfg.satellite_mass,
        radius=cfg.satellite_radius,
        orbit=OrbitBounds(),
        sprite_key=world.appearance.sample(Kind.SATELLITE, world.rng),
        t=world.time,
        reason="scheduled",
    )


def run_spawn_scheduler(world: World, dt: float) -> Handle | None:
    world.spawn_timer.tick(dt)
    if world.spawn_timer.is_due():
        return spawn_satellite(world)
    return None
