# src/gravity_well/core/collisions.py

from __future__ import annotations
from itertools import combinations
from typing import TYPE_CHECKING, Iterable, List, Set
import numpy as np

from .store import Handle, Kind
if TYPE_CHECKING:
    from .world import World


def distance(a_pos: np.ndarray, b_pos: np.ndarray) -> float:
    dx = float(b_pos[0] - a_pos[0])
    dy = float(b_pos[1] - a_pos[1])
    return float(np.sqrt(dx * dx + dy * dy))


def collide_with_primary(world: World) -> List[Handle]:
    """Mark every satellite touching the primary. Returns the marked handles."""
    store = world.store
    primary = store.primary
    reach = world.config.satellite_radius + store.radius[primary]

    hit: List[Handle] = []
    for h in store.query(Kind.SATELLITE):
        if distance(store.pos[h], store.pos[primary]) <= reach:
            if store.despawn(h, reason="primary_collision", t=world.time):
                hit.append(h)
    return hit


def collide_satellites(world: World, candidates: Iterable[Handle] | None = None) -> List[Handle]:
    """
    Mark both satellites of every touching pair.

    `candidates` are the satellites alive when the collision stage began; pass
    them in so satellites the primary pass already marked still take their
    partners with them. Each unordered pair is examined once, and a satellite
    matched in this pass is not matched again.
    """
    store = world.store
    reach = 2 * world.config.satellite_radius
    if candidates is None:
        candidates = store.query(Kind.SATELLITE)

    matched: Set[Handle] = set()
    hit: List[Handle] = []
    for a, b in combinations(list(candidates), 2):
        if a in matched or b in matched:
            continue
        if distance(store.pos[a], store.pos[b]) <= reach:
            matched.update((a, b))
            for h in (a, b):
                if store.despawn(h, reason="mutual_collision", t=world.time):
                    hit.append(h)
    return hit
