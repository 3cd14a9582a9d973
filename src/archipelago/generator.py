"""World generation orchestration and the height/color sampling API."""

import math
from typing import Any

import numpy as np
import structlog
from numpy.typing import NDArray
from pydantic import BaseModel

from .colors import RGB, color_at
from .config import WorldConfig
from .islands import Island, IslandPlacer
from .noise import NoiseEngine

logger = structlog.get_logger()

# Height synthesis constants
SLOPE_RADIUS_FACTOR = 1.8
INTERIOR_END = 0.4
BEACH_END = 0.7
BEACH_DROP = 0.85
UNDERWATER_FACTOR = 0.15
MIN_ELEVATION_FACTOR = 0.01
DETAIL_START = 0.25
DETAIL_FREQUENCY = 3.0
DETAIL_AMPLITUDE = 0.8
SEABED_BLEND_CUTOFF = 0.5
SEABED_FREQUENCY = 0.01
SEABED_AMPLITUDE = 3.0

# Spawn constants
SPAWN_CLEARANCE = 5.0
SPAWN_MIN_HEIGHT = 10.0
RANDOM_SPAWN_CLEARANCE = 2.0
FALLBACK_SPAWN_HEIGHT = 50.0


class SpawnPosition(BaseModel, frozen=True):
    """World-space spawn point."""

    x: float
    y: float
    z: float


def smoothstep(b: float) -> float:
    """Cubic Hermite ease, b^2 (3 - 2b)."""
    return b * b * (3 - 2 * b)


def elevation_factor(t: float) -> float:
    """Radial elevation profile over normalized slope distance t.

    0-0.4 is the island interior at full height, 0.4-0.7 the beach dropping
    to 15%, 0.7-1.0 the underwater slope falling to zero. Both bands meet at
    0.15 for t = 0.7.
    """
    if t < INTERIOR_END:
        return 1.0
    if t < BEACH_END:
        s = (t - INTERIOR_END) / (BEACH_END - INTERIOR_END)
        return 1.0 - math.pow(s, 0.7) * BEACH_DROP
    s = (t - BEACH_END) / (1.0 - BEACH_END)
    return UNDERWATER_FACTOR * (1.0 - math.pow(s, 0.5))


class Heightmap:
    """Regular grid of heights and colors sampled from a generated world."""

    def __init__(
        self,
        heights: NDArray[np.float64],
        colors: NDArray[np.uint8],
        xs: NDArray[np.float64],
        zs: NDArray[np.float64],
        config: WorldConfig,
    ):
        self.heights = heights
        self.colors = colors
        self.xs = xs
        self.zs = zs
        self.config = config

    @property
    def shape(self) -> tuple[int, int]:
        return self.heights.shape

    def land_fraction(self, water_height: float | None = None) -> float:
        """Fraction of samples above the water surface."""
        if water_height is None:
            water_height = self.config.water_height
        return float(np.mean(self.heights > water_height))


class WorldGenerator:
    """Seeded island world with a stateless height field.

    ``generate()`` is the only operation that builds state; afterwards any
    number of readers may sample heights and colors concurrently, provided
    no ``generate()``, ``reseed()`` or ``set_config()`` runs at the same
    time. Sampling before ``generate()`` sees an empty ocean.
    """

    def __init__(self, config: WorldConfig | None = None, **overrides: Any):
        self._config = (config or WorldConfig()).with_overrides(**overrides)
        self.noise = NoiseEngine(self._config.seed)
        self._islands: tuple[Island, ...] = ()

    @property
    def config(self) -> WorldConfig:
        return self._config.model_copy()

    def set_config(self, **overrides: Any) -> None:
        """Merge new options into the config. Call generate() to apply."""
        self._config = self._config.with_overrides(**overrides)

    def reseed(self, seed: int | float | str) -> None:
        """Reseed the noise stream. Call generate() to rebuild islands."""
        self._config = self._config.with_overrides(seed=seed)
        self.noise.reseed(seed)

    def generate(self) -> "WorldGenerator":
        """Build the island set from the current config and seed."""
        self.noise.reseed(self._config.seed)
        placer = IslandPlacer(self._config, self.noise)
        self._islands = tuple(placer.place_islands())

        logger.info(
            "world_generated",
            seed=self.noise.seed,
            requested=self._config.island_count,
            islands=len(self._islands),
        )
        return self

    def get_islands(self) -> list[Island]:
        """Snapshot of the placed islands, in placement order."""
        return list(self._islands)

    def closest_island(self, x: float, z: float) -> Island | None:
        """Nearest island center to (x, z), or None in an empty world."""
        closest: Island | None = None
        closest_dist = math.inf
        for island in self._islands:
            dist = island.distance_to(x, z)
            if dist < closest_dist:
                closest_dist = dist
                closest = island
        return closest

    def get_height_at(self, x: float, z: float) -> float:
        """Terrain height at world coordinates (x, z).

        Only the island with the largest blend weight shapes the height, so
        overlapping slopes never stack. Far from every island a low
        frequency seabed texture is added. Coordinates are not clamped.
        """
        config = self._config
        noise = self.noise
        max_height = config.max_terrain_height
        ocean_depth = config.ocean_depth
        frequency = config.noise_frequency

        highest_blend = 0.0
        blended_height = ocean_depth

        for island in self._islands:
            slope_radius = island.radius * SLOPE_RADIUS_FACTOR
            dist = island.distance_to(x, z)
            if dist > slope_radius:
                continue

            t = dist / slope_radius
            factor = elevation_factor(t)
            if factor < MIN_ELEVATION_FACTOR:
                continue

            nx = (x + island.noise_offset_x) / island.radius * frequency
            nz = (z + island.noise_offset_z) / island.radius * frequency

            raw = noise.fbm(
                nx, nz, config.noise_octaves, config.noise_lacunarity, config.noise_persistence
            )
            raw = (raw + 1) / 2

            detail = 0.0
            if DETAIL_START < t < BEACH_END:
                detail = noise.noise_2d(nx * DETAIL_FREQUENCY, nz * DETAIL_FREQUENCY) * DETAIL_AMPLITUDE

            island_height = (raw * max_height * island.height_multiplier + detail) * factor

            blend = max(0.0, 1 - t)
            if blend > highest_blend:
                highest_blend = blend
                blended_height = ocean_depth + (island_height - ocean_depth) * smoothstep(blend)

        if highest_blend < SEABED_BLEND_CUTOFF:
            seabed = noise.fbm(x * SEABED_FREQUENCY, z * SEABED_FREQUENCY, 3, 2.0, 0.5)
            blended_height += seabed * SEABED_AMPLITUDE * (1 - highest_blend)

        return blended_height

    def sample_height(self, x: float, z: float) -> float:
        """Alias of get_height_at."""
        return self.get_height_at(x, z)

    def get_color_at(self, x: float, z: float, height: float | None = None) -> RGB:
        """Terrain color at (x, z), using the closest island's type."""
        if height is None:
            height = self.get_height_at(x, z)
        config = self._config
        closest = self.closest_island(x, z)
        return color_at(
            height,
            max(0.0, height) / config.max_terrain_height,
            closest.type if closest else None,
            config.water_height,
            config.ocean_depth,
        )

    def get_spawn_position(self) -> SpawnPosition:
        """Spawn above the first island, at least 10 units up."""
        if not self._islands:
            return SpawnPosition(x=0.0, y=FALLBACK_SPAWN_HEIGHT, z=0.0)

        main_island = self._islands[0]
        y = self.get_height_at(main_island.x, main_island.z) + SPAWN_CLEARANCE
        return SpawnPosition(x=main_island.x, y=max(y, SPAWN_MIN_HEIGHT), z=main_island.z)

    def get_random_spawn_position(self, rng: np.random.Generator) -> SpawnPosition:
        """Spawn at a random point within half the radius of a random island.

        Draws from the given generator, leaving the world stream untouched.
        """
        if not self._islands:
            return SpawnPosition(x=0.0, y=FALLBACK_SPAWN_HEIGHT, z=0.0)

        island = self._islands[int(rng.integers(len(self._islands)))]
        angle = rng.random() * math.pi * 2
        dist = rng.random() * island.radius * 0.5
        x = island.x + math.cos(angle) * dist
        z = island.z + math.sin(angle) * dist
        y = self.get_height_at(x, z) + RANDOM_SPAWN_CLEARANCE
        return SpawnPosition(x=x, y=y, z=z)

    def sample_grid(self, resolution: int | None = None) -> Heightmap:
        """Sample heights and colors on a regular grid covering the world.

        The grid has ``resolution + 1`` vertices per side spanning
        ``[-world_size / 2, world_size / 2]``; rows follow z, columns x.

        Args:
            resolution: Cells per side, defaults to config.resolution.

        Returns:
            Heightmap with heights, colors and coordinate vectors.

        Raises:
            ValueError: If resolution is less than 1.
        """
        config = self._config
        if resolution is None:
            resolution = config.resolution
        elif resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")
        half_size = config.world_size / 2
        xs = np.linspace(-half_size, half_size, resolution + 1)
        zs = np.linspace(-half_size, half_size, resolution + 1)

        heights = np.empty((zs.size, xs.size), dtype=np.float64)
        colors = np.empty((zs.size, xs.size, 3), dtype=np.uint8)

        for row, z in enumerate(zs):
            for col, x in enumerate(xs):
                h = self.get_height_at(float(x), float(z))
                heights[row, col] = h
                colors[row, col] = self.get_color_at(float(x), float(z), height=h)

        logger.debug(
            "grid_sampled",
            resolution=resolution,
            min_height=round(float(heights.min()), 2),
            max_height=round(float(heights.max()), 2),
        )
        return Heightmap(heights=heights, colors=colors, xs=xs, zs=zs, config=config)
