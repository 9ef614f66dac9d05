"""
Pytest configuration for the gravity well tests.

Makes the src/ package importable without an install and provides small,
deterministic worlds.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from gravity_well.core import SimConfig, World  # noqa: E402


@pytest.fixture
def config():
    """Square 1000x1000 region with the default bodies."""
    return SimConfig(width=1000.0, height=1000.0)


@pytest.fixture
def still_config():
    """Satellites spawn at rest and gravity is negligible, so tests can place them by hand."""
    return SimConfig(
        width=1000.0,
        height=1000.0,
        gravitational_constant=1e-30,
        max_speed=0.0,
        max_angular_speed=0.0,
    )


@pytest.fixture
def world(config):
    return World(config=config, rng=np.random.default_rng(1234))


@pytest.fixture
def still_world(still_config):
    return World(config=still_config, rng=np.random.default_rng(1234))
