# src/gravity_well/core/__init__.py

from .config import SimConfig, ConfigurationError
from .store import EntityStore, Handle, Kind, OrbitBounds
from .world import World, run_simulation
from .scheduler import SpawnTimer, spawn_satellite
from .physics import gravitational_acceleration, apply_gravity, integrate_motion
from .collisions import collide_with_primary, collide_satellites
from .boundary import Region, despawn_off_region
from .orbit import between, eccentricity, is_elliptical, update_bounds, capture, track_orbits
from .recording import FrameSnapshot, SimulationRecording
from .events import (
    BaseEvent,
    SpawnEvent,
    DestroyEvent,
    CaptureEvent,
)

__all__ = [
    "SimConfig",
    "ConfigurationError",
    "EntityStore",
    "Handle",
    "Kind",
    "OrbitBounds",
    "World",
    "run_simulation",
    "SpawnTimer",
    "spawn_satellite",
    "gravitational_acceleration",
    "apply_gravity",
    "integrate_motion",
    "collide_with_primary",
    "collide_satellites",
    "Region",
    "despawn_off_region",
    "between",
    "eccentricity",
    "is_elliptical",
    "update_bounds",
    "capture",
    "track_orbits",
    "FrameSnapshot",
    "SimulationRecording",
    "BaseEvent",
    "SpawnEvent",
    "DestroyEvent",
    "CaptureEvent",
]
