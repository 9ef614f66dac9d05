# src/gravity_well/core/appearances.py

from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np

from .store import Kind


@dataclass(frozen=True)
class SpriteAppearancePolicy:
    """Picks a sprite key per kind. The rendering layer maps keys to textures."""
    sprite_keys: dict[Kind, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config) -> "SpriteAppearancePolicy":
        return cls({
            Kind.SATELLITE: tuple(config.satellite_sprites),
            Kind.MOON: tuple(config.moon_sprites),
        })

    def sample(self, kind: Kind, rng: np.random.Generator, *, override: str | None = None) -> str | None:
        if override is not None:
            return override
        keys = self.sprite_keys.get(kind, ())
        if not keys:
            return None
        return str(rng.choice(keys))
