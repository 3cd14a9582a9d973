"""Shared test fixtures for archipelago tests."""

import pytest

from archipelago.config import WorldConfig
from archipelago.generator import WorldGenerator
from archipelago.islands import Island, IslandType


def _make_island(**overrides) -> Island:
    fields = {
        "x": 0.0,
        "z": 0.0,
        "radius": 40.0,
        "height_multiplier": 1.0,
        "noise_offset_x": 0.0,
        "noise_offset_z": 0.0,
        "edge_falloff": 1.0,
        "type": IslandType.TROPICAL,
    }
    fields.update(overrides)
    return Island(**fields)


@pytest.fixture
def island_factory():
    """Build islands at the origin with neutral parameters, for hand-built worlds."""
    return _make_island


@pytest.fixture
def default_config() -> WorldConfig:
    """Default config with seed 12345."""
    return WorldConfig()


@pytest.fixture
def default_world(default_config: WorldConfig) -> WorldGenerator:
    """Generated default archipelago."""
    return WorldGenerator(default_config).generate()


@pytest.fixture
def ocean_world() -> WorldGenerator:
    """Generated world without islands."""
    return WorldGenerator(island_count=0).generate()


@pytest.fixture
def single_island_world() -> WorldGenerator:
    """Generated world with one central island."""
    return WorldGenerator(seed=2024, island_count=1).generate()
