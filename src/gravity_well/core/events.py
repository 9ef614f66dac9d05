# src/gravity_well/core/events.py

from __future__ import annotations
from dataclasses import dataclass
from abc import ABC
from typing import TYPE_CHECKING
import numpy as np
if TYPE_CHECKING:
    from .store import Handle, Kind


@dataclass(kw_only=True)
class BaseEvent(ABC):
    """Marker base class so you can type on 'list[BaseEvent]'."""
    t: float  # simulation time when this event occurred
    a_id: Handle | None = None
    b_id: Handle | None = None

    def to_payload_dict(self) -> dict:
        """Convert event-specific data to a serializable dict."""
        return {}


@dataclass(kw_only=True)
class SpawnEvent(BaseEvent):
    handle: Handle
    kind: Kind
    pos: np.ndarray        # (2,)
    vel: np.ndarray | None = None
    angular_velocity: float | None = None
    mass: float | None = None
    sprite_key: str | None = None
    reason: str = "unknown"

    def __post_init__(self):
        self.a_id = self.handle

    def to_payload_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "pos": self.pos.tolist(),
            "vel": None if self.vel is None else self.vel.tolist(),
            "angular_velocity": self.angular_velocity,
            "mass": self.mass,
            "sprite_key": self.sprite_key,
            "reason": self.reason,
        }


@dataclass(kw_only=True)
class DestroyEvent(BaseEvent):
    handle: Handle
    kind: Kind
    reason: str = "unknown"

    def __post_init__(self):
        self.a_id = self.handle

    def to_payload_dict(self) -> dict:
        payload = super().to_payload_dict()
        payload.update({
            "kind": self.kind.value,
            "reason": self.reason,
        })
        return payload


@dataclass(kw_only=True)
class CaptureEvent(BaseEvent):
    satellite: Handle
    moon: Handle
    r_min: float
    r_max: float
    eccentricity: float

    def __post_init__(self):
        self.a_id = self.satellite
        self.b_id = self.moon

    def to_payload_dict(self) -> dict:
        return {
            "r_min": self.r_min,
            "r_max": self.r_max,
            "eccentricity": self.eccentricity,
        }
