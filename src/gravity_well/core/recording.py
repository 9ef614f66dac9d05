# src/gravity_well/core/recording.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, Tuple
from pathlib import Path
import pickle
import lzma
import numpy as np
if TYPE_CHECKING:
    from .world import World
    from .events import BaseEvent
    from .store import Handle, EntityStore


@dataclass
class EntityStaticSnapshot:
    """Properties that never change over an entity's life, stored once per handle."""
    handle: "Handle"
    kind: str
    mass: float | None
    radius: float | None
    sprite_key: str | None = None


@dataclass
class EntityStateSnapshot:
    """Per-frame dynamic state of an entity."""
    pos: Tuple[float, float]
    vel: Tuple[float, float] | None
    angle: float


@dataclass
class EventSnapshot:
    t: float
    type: str               # e.g. "SpawnEvent", "DestroyEvent", "CaptureEvent"
    a_id: "Handle | None" = None
    b_id: "Handle | None" = None
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class FrameSnapshot:
    t: float
    entities: dict["Handle", EntityStateSnapshot]
    events: list[EventSnapshot] = field(default_factory=list)


@dataclass
class SimulationRecording:
    """
    Frozen record of a full simulation run.

    `meta` holds config, version, seed, etc.
    """
    frames: list[FrameSnapshot] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    static: Dict["Handle", EntityStaticSnapshot] = field(default_factory=dict)

    def add_frame(self, frame: FrameSnapshot) -> None:
        self.frames.append(frame)

    @property
    def times(self) -> list[float]:
        return [f.t for f in self.frames]

    @property
    def t_end(self) -> float | None:
        """Time of the last frame, or None if no frames."""
        if not self.frames:
            return None
        return self.frames[-1].t

    def iter_events(self) -> Iterator[EventSnapshot]:
        """Iterate over all EventSnapshots in time order."""
        for frame in self.frames:
            for ev in frame.events:
                yield ev

    def save(self, path: str | Path) -> None:
        path = Path(path)
        with lzma.open(path, "wb") as f:
            pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    @classmethod
    def load(cls, path: str | Path) -> "SimulationRecording":
        path = Path(path)
        with lzma.open(path, "rb") as f:
            rec = pickle.load(f)
        if not isinstance(rec, cls):
            raise TypeError(f"{path} does not hold a {cls.__name__}")
        return rec


def make_static_snapshot(store: "EntityStore", handle: "Handle") -> EntityStaticSnapshot:
    return EntityStaticSnapshot(
        handle=handle,
        kind=store.kind[handle].value,
        mass=store.mass.get(handle),
        radius=store.radius.get(handle),
        sprite_key=store.sprite_key.get(handle),
    )


def make_state_snapshot(store: "EntityStore", handle: "Handle") -> EntityStateSnapshot:
    pos = np.asarray(store.pos[handle], dtype=float)
    vel = store.vel.get(handle)
    return EntityStateSnapshot(
        pos=(float(pos[0]), float(pos[1])),
        vel=None if vel is None else (float(vel[0]), float(vel[1])),
        angle=float(store.angle[handle]),
    )


def snapshot_world(world: "World", t: float,
    events: list["BaseEvent"],
    *,
    static_registry: Dict["Handle", EntityStaticSnapshot]
) -> FrameSnapshot:

    store = world.store
    states: Dict["Handle", EntityStateSnapshot] = {}

    for handle in store.query():
        # static snapshot exactly once per handle
        if handle not in static_registry:
            static_registry[handle] = make_static_snapshot(store, handle)
        states[handle] = make_state_snapshot(store, handle)

    event_snaps = [
        EventSnapshot(
            t=e.t,
            type=type(e).__name__,
            a_id=e.a_id,
            b_id=e.b_id,
            payload=e.to_payload_dict(),
        )
        for e in events
    ]
    return FrameSnapshot(t=t, entities=states, events=event_snaps)
