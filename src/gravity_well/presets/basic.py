from __future__ import annotations
import numpy as np
from gravity_well.core import World, SimConfig
from gravity_well.utils.random import rng


def make_config(args=None, preset: str | None = None) -> SimConfig:
    """Preset values first, command line overrides on top."""
    preset = preset if preset is not None else getattr(args, "preset", None)
    config = SimConfig.from_preset(preset) if preset else SimConfig()
    if args is not None:
        config = SimConfig.from_args(args, base=config)
    config.validate()
    return config


def make_world(sim_config: SimConfig, generator: np.random.Generator | None = None) -> World:
    print(f"Region {sim_config.width:g}x{sim_config.height:g}, "
          f"spawning every {sim_config.spawn_interval:g}s")
    return World(config=sim_config, rng=generator if generator is not None else rng("physics"))
