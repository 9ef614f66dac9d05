# src/gravity_well/core/store.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
import numpy as np

from .events import BaseEvent, SpawnEvent, DestroyEvent


class Kind(str, Enum):
    PRIMARY = "primary"
    SATELLITE = "satellite"
    MOON = "moon"


@dataclass(frozen=True)
class Handle:
    """Generational handle. A reused slot always carries a newer generation."""
    index: int
    generation: int

    def __repr__(self) -> str:
        return f"Handle({self.index}v{self.generation})"


@dataclass
class OrbitBounds:
    """
    Closest and farthest observed distances from the primary.

    Both bounds start unset (None) and are filled in by the orbit tracker.
    """
    r_min: Optional[float] = None
    r_max: Optional[float] = None

    @property
    def observed(self) -> bool:
        return self.r_min is not None and self.r_max is not None

    def check(self) -> None:
        if self.observed and self.r_min > self.r_max:
            raise ValueError(f"OrbitBounds invariant broken: r_min={self.r_min} > r_max={self.r_max}")


@dataclass
class EntityStore:
    """
    Attribute tables addressed by generational handles.

    Removals are buffered: `despawn` only marks a handle, `flush` applies the
    marks. Spawns take effect immediately.
    """
    kind: Dict[Handle, Kind] = field(default_factory=dict)
    pos: Dict[Handle, np.ndarray] = field(default_factory=dict)
    vel: Dict[Handle, np.ndarray] = field(default_factory=dict)
    angle: Dict[Handle, float] = field(default_factory=dict)
    angular_velocity: Dict[Handle, float] = field(default_factory=dict)
    mass: Dict[Handle, float] = field(default_factory=dict)
    radius: Dict[Handle, float] = field(default_factory=dict)
    orbit: Dict[Handle, OrbitBounds] = field(default_factory=dict)
    sprite_key: Dict[Handle, str] = field(default_factory=dict)
    _generations: List[int] = field(default_factory=list)
    _free: List[int] = field(default_factory=list)
    _pending: Dict[Handle, str] = field(default_factory=dict)
    _pending_t: float = 0.0
    _events: List[BaseEvent] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.kind)

    def _allocate(self) -> Handle:
        if self._free:
            index = self._free.pop()
            self._generations[index] += 1
        else:
            index = len(self._generations)
            self._generations.append(0)
        return Handle(index, self._generations[index])

    def spawn(
        self,
        kind: Kind,
        *,
        pos: np.ndarray,
        vel: np.ndarray | None = None,
        angular_velocity: float | None = None,
        mass: float | None = None,
        radius: float | None = None,
        angle: float = 0.0,
        orbit: OrbitBounds | None = None,
        sprite_key: str | None = None,
        t: float = 0.0,
        reason: str = "unknown",
    ) -> Handle:
        if mass is not None and mass <= 0:
            raise ValueError(f"mass must be positive, got {mass}")
        if radius is not None and radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        if orbit is not None and kind is not Kind.SATELLITE:
            raise ValueError(f"only satellites track orbits, got {kind.value}")

        handle = self._allocate()
        self.kind[handle] = kind
        self.pos[handle] = np.asarray(pos, dtype=float).copy()
        self.angle[handle] = float(angle)
        if vel is not None:
            self.vel[handle] = np.asarray(vel, dtype=float).copy()
        if angular_velocity is not None:
            self.angular_velocity[handle] = float(angular_velocity)
        if mass is not None:
            self.mass[handle] = float(mass)
        if radius is not None:
            self.radius[handle] = float(radius)
        if orbit is not None:
            self.orbit[handle] = orbit
        if sprite_key is not None:
            self.sprite_key[handle] = sprite_key

        self._events.append(SpawnEvent(
            t=t,
            handle=handle,
            kind=kind,
            pos=self.pos[handle].copy(),
            vel=None if vel is None else self.vel[handle].copy(),
            angular_velocity=self.angular_velocity.get(handle),
            mass=self.mass.get(handle),
            sprite_key=sprite_key,
            reason=reason,
        ))
        return handle

    def despawn(self, handle: Handle, reason: str = "unknown", t: float = 0.0) -> bool:
        """Mark `handle` for removal. Returns False if it was already marked or is gone."""
        if handle not in self.kind or handle in self._pending:
            return False
        if self.kind[handle] is Kind.PRIMARY:
            raise ValueError("the primary never despawns")
        self._pending[handle] = reason
        self._pending_t = t
        return True

    def flush(self) -> List[Handle]:
        removed = list(self._pending)
        for handle, reason in self._pending.items():
            kind = self.kind.pop(handle)
            for table in (self.pos, self.vel, self.angle, self.angular_velocity,
                          self.mass, self.radius, self.orbit, self.sprite_key):
                table.pop(handle, None)
            self._free.append(handle.index)
            self._events.append(DestroyEvent(t=self._pending_t, handle=handle, kind=kind, reason=reason))
        self._pending.clear()
        return removed

    def is_alive(self, handle: Handle) -> bool:
        return handle in self.kind

    def is_marked(self, handle: Handle) -> bool:
        return handle in self._pending

    def query(self, *kinds: Kind) -> List[Handle]:
        """Snapshot of live, unmarked handles of the given kinds (all kinds if none given)."""
        return [
            h for h, k in self.kind.items()
            if (not kinds or k in kinds) and h not in self._pending
        ]

    def count(self, kind: Kind) -> int:
        return sum(1 for k in self.kind.values() if k is kind)

    @property
    def primary(self) -> Handle:
        primaries = [h for h, k in self.kind.items() if k is Kind.PRIMARY]
        if len(primaries) != 1:
            raise LookupError(f"expected exactly one primary, found {len(primaries)}")
        return primaries[0]

    def record(self, event: BaseEvent) -> None:
        self._events.append(event)

    def drain_events(self) -> List[BaseEvent]:
        events, self._events = self._events, []
        return events
