# gravity_well/utils/random.py

from __future__ import annotations

from typing import Dict
import numpy as np

_master_seed: int | None = None
_rngs: Dict[str, np.random.Generator] = {}


def seed_all(seed: int | None) -> None:
    """
    Set the master seed for every named stream.

    - If seed is None: streams are entropy-seeded (non-reproducible).
    - Resets cached named streams, so call it before building a World.
    """
    global _master_seed
    _master_seed = seed
    _rngs.clear()


def rng(name: str = "physics") -> np.random.Generator:
    """
    Return a named RNG stream. Draws are order-dependent within a stream and
    independent across streams.
    """
    if name not in _rngs:
        if _master_seed is None:
            _rngs[name] = np.random.default_rng()
        else:
            ss = np.random.SeedSequence([_master_seed, _stable_int(name)])
            _rngs[name] = np.random.default_rng(ss)
    return _rngs[name]


def _stable_int(name: str) -> int:
    """Fold a stream name into 32 bits without relying on Python's salted hash()."""
    h = 2166136261
    for b in name.encode("utf-8"):
        h ^= b
        h = (h * 16777619) & 0xFFFFFFFF
    return h
