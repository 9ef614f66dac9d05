# src/gravity_well/core/config.py

from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional


class ConfigurationError(ValueError):
    """Raised at startup when the simulation cannot be initialised."""


@dataclass
class SimConfig:
    width: Optional[float] = 1280.0
    height: Optional[float] = 720.0
    gravitational_constant: float = 6.674e-11
    primary_mass: float = 1.9e16
    primary_radius: float = 50.0
    satellite_mass: float = 1.0e3
    satellite_radius: float = 10.0
    spawn_interval: float = 1.0
    max_speed: float = 100.0
    max_angular_speed: float = 3.0
    min_distance_sq: float = 1e-6
    satellite_sprites: tuple[str, ...] = ("asteroid_1", "asteroid_2", "asteroid_3")
    moon_sprites: tuple[str, ...] = ("moon_1", "moon_2")

    @classmethod
    def from_args(cls, args, base: "SimConfig | None" = None) -> "SimConfig":
        kwargs = {f.name: getattr(base, f.name) for f in fields(cls)} if base is not None else {}
        for f in fields(cls):
            name = f.name
            value = getattr(args, name, None)
            if value is not None:
                kwargs[name] = tuple(value) if name.endswith("_sprites") else value
        return cls(**kwargs)

    @classmethod
    def from_dict(cls, data: dict) -> "SimConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {sorted(unknown)}")
        kwargs = {k: tuple(v) if k.endswith("_sprites") else v for k, v in data.items()}
        return cls(**kwargs)

    @classmethod
    def from_preset(cls, preset_path: str | Path) -> "SimConfig":
        from gravity_well.utils.preset_loader import load_preset
        return cls.from_dict(load_preset(preset_path).resolved.get("sim", {}))

    @property
    def region(self) -> tuple[float, float]:
        return (self.width, self.height)

    def validate(self) -> None:
        """Raise ConfigurationError if the world cannot be built from this config."""
        if self.width is None or self.height is None:
            raise ConfigurationError("No region size available")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Region size must be positive, got {self.width}x{self.height}")
        for name in ("gravitational_constant", "primary_mass", "primary_radius",
                     "satellite_mass", "satellite_radius", "spawn_interval"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.max_speed < 0 or self.max_angular_speed < 0:
            raise ConfigurationError("max_speed and max_angular_speed must be non-negative")
