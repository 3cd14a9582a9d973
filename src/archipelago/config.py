"""World generation configuration models and TOML loading."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .exceptions import PresetNotFoundError

CONFIGS_DIR = Path(__file__).parent / "configs"


class WorldConfig(BaseModel):
    """Complete world generation configuration.

    Water and atmosphere values are carried for renderers; the generator only
    reads ``water_height`` (as a color threshold), ``max_terrain_height`` and
    ``ocean_depth``.
    """

    seed: int | float | str = Field(default=12345, description="Reproducibility key")
    world_size: float = Field(default=400, gt=0, description="Side of the square world")
    resolution: int = Field(default=120, ge=1, description="Sampling grid density")

    island_count: int = Field(default=8, description="Requested islands (<= 0 for ocean)")
    min_island_size: float = Field(default=25, gt=0, description="Minimum island radius")
    max_island_size: float = Field(default=70, gt=0, description="Maximum island radius")

    noise_frequency: float = Field(default=2.5, description="Terrain noise frequency")
    noise_octaves: int = Field(default=5, ge=1, description="Number of fBm octaves")
    noise_lacunarity: float = Field(default=2.2, description="Frequency multiplier per octave")
    noise_persistence: float = Field(default=0.45, description="Amplitude multiplier per octave")

    water_height: float = Field(default=-1.0, description="Sea surface height")
    wave_height: float = Field(default=1.2, description="Wave amplitude (renderer only)")
    wave_speed: float = Field(default=0.7, description="Wave speed (renderer only)")

    max_terrain_height: float = Field(default=35, gt=0, description="Peak terrain height")
    ocean_depth: float = Field(default=-15, description="Open ocean floor height")
    fog_density: float = Field(default=0.004, description="Fog density (renderer only)")

    def with_overrides(self, **overrides: Any) -> "WorldConfig":
        """Return a validated copy with the given fields replaced."""
        return WorldConfig.model_validate({**self.model_dump(), **overrides})


def load_config(config_path: Path) -> WorldConfig:
    """Load configuration from a TOML file.

    Keys missing from the file keep their defaults.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed WorldConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return WorldConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. Bundled presets: archipelago/configs/{name}.toml

    Args:
        name: Preset name or path.

    Returns:
        Path to the config file.

    Raises:
        PresetNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise PresetNotFoundError(f"Config file not found: {name}")

    config_path = CONFIGS_DIR / f"{name.replace('-', '_')}.toml"
    if config_path.exists():
        return config_path

    raise PresetNotFoundError(
        f"Preset '{name}' not found in {CONFIGS_DIR}. "
        f"Available presets: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List bundled preset names."""
    if not CONFIGS_DIR.exists():
        return []
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.toml"))
