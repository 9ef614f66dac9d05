# src/gravity_well/core/world.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle
from gravity_well.utils import plotting
from gravity_well.utils.random import rng as named_rng

from .config import SimConfig
from .store import EntityStore, Handle, Kind
from .boundary import Region, despawn_off_region
from .scheduler import SpawnTimer, run_spawn_scheduler
from .physics import apply_gravity, integrate_motion
from .collisions import collide_with_primary, collide_satellites
from .orbit import track_orbits
from .events import BaseEvent
from .appearances import SpriteAppearancePolicy
from .recording import SimulationRecording, EntityStaticSnapshot, snapshot_world


@dataclass
class World:
    config: SimConfig
    rng: np.random.Generator = field(default_factory=lambda: named_rng("physics"))
    store: EntityStore = field(default_factory=EntityStore)
    time: float = 0.0
    region: Region = field(init=False)
    spawn_timer: SpawnTimer = field(init=False)
    appearance: SpriteAppearancePolicy = field(init=False)

    def __post_init__(self):
        self.config.validate()
        self.region = Region(float(self.config.width), float(self.config.height))
        self.spawn_timer = SpawnTimer(self.config.spawn_interval)
        self.appearance = SpriteAppearancePolicy.from_config(self.config)
        self.store.spawn(
            Kind.PRIMARY,
            pos=self.region.center,
            mass=self.config.primary_mass,
            radius=self.config.primary_radius,
            t=self.time,
            reason="init",
        )

    @property
    def primary(self) -> Handle:
        return self.store.primary

    @property
    def n_bodies(self) -> int:
        return len(self.store)

    def counts(self) -> Dict[str, int]:
        return {kind.value: self.store.count(kind) for kind in Kind}

    def record(self, event: BaseEvent) -> None:
        self.store.record(event)

    def step(self, dt: float) -> List[BaseEvent]:
        """
        Advance the world by dt. Stages run in a fixed order:
        - spawn scheduler
        - gravity
        - motion
        - collisions (primary, then satellite pairs)
        - boundary exit
        - orbit tracking and capture

        Removals requested by a stage are flushed when that stage ends.
        Returns every event produced during the tick.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        store = self.store
        self.time += dt

        run_spawn_scheduler(self, dt)
        store.flush()

        apply_gravity(self, dt)
        integrate_motion(self, dt)
        store.flush()

        satellites = store.query(Kind.SATELLITE)
        collide_with_primary(self)
        collide_satellites(self, satellites)
        store.flush()

        despawn_off_region(self)
        store.flush()

        track_orbits(self)
        store.flush()

        return store.drain_events()

    def plot(self, ax=None, delta=0, include_boundary=True):
        """
        Plot the world: region in gray, entities colored by kind.
        """
        if include_boundary:
            if ax is None:
                fig, ax = self.region.plot(delta=delta, edgecolor="gray", linewidth=2, linestyle="--")
            else:
                fig = ax.figure
                self.region.plot(ax=ax, delta=delta, edgecolor="gray", linewidth=2, linestyle="--")
        else:
            if ax is None:
                fig, ax = plt.subplots()
            else:
                fig = ax.figure

        for h, kind in self.store.kind.items():
            pos = self.store.pos[h]
            ax.add_patch(Circle(
                (pos[0], pos[1]),
                self.store.radius.get(h, 1.0),
                edgecolor="black",
                facecolor=plotting.kind_color(kind),
                linewidth=.35,
            ))

        return fig, ax


def run_simulation(
    world: World,
    n_steps: int,
    dt: float,
    log_interval: int = 600,
    *,
    record_events: bool = True,
) -> SimulationRecording:
    """
    Step the world forward n_steps and record snapshots for the rendering layer.
    """
    recording = SimulationRecording()
    static: dict[Handle, EntityStaticSnapshot] = {}
    for step in range(n_steps):
        events = world.step(dt)
        snapshot = snapshot_world(world,
                                  t=world.time,
                                  events=events if record_events else [],
                                  static_registry=static)
        recording.add_frame(snapshot)
        if log_interval and (step + 1) % log_interval == 0:
            counts = world.counts()
            print(f"Simulated {world.time:.3f} seconds / {n_steps*dt:.3f} seconds...")
            print(f"Satellites: {counts['satellite']}, moons: {counts['moon']}")
    recording.static.update(static)
    return recording
