"""Deterministic procedural island world generation.

A seed and a WorldConfig produce a set of islands and a continuous
height/color field that can be sampled at any world coordinate.
"""

from .colors import color_at
from .config import WorldConfig, find_config, list_configs, load_config
from .exceptions import ArchipelagoError, InvalidMapError, PresetNotFoundError
from .generator import Heightmap, SpawnPosition, WorldGenerator
from .islands import Island, IslandPlacer, IslandType, poisson_disk
from .noise import NoiseEngine, canonicalize_seed, hash_string
from .persistence import load_map, save_map
from .validation import ValidationResult, validate_islands

__all__ = [
    "ArchipelagoError",
    "Heightmap",
    "InvalidMapError",
    "Island",
    "IslandPlacer",
    "IslandType",
    "NoiseEngine",
    "PresetNotFoundError",
    "SpawnPosition",
    "ValidationResult",
    "WorldConfig",
    "WorldGenerator",
    "canonicalize_seed",
    "color_at",
    "find_config",
    "hash_string",
    "list_configs",
    "load_config",
    "load_map",
    "poisson_disk",
    "save_map",
    "validate_islands",
]
