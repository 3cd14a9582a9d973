"""Island placement: Poisson-disk centers and per-island parameters."""

import math
from enum import Enum

import structlog
from pydantic import BaseModel

from .config import WorldConfig
from .noise import NoiseEngine

logger = structlog.get_logger()

# Placement constants
POISSON_ATTEMPTS = 30
SPACING_FACTOR = 2.5
FIRST_POINT_EXTENT = 0.8
BORDER_EXTENT = 0.95
EDGE_FALLOFF_EXTENT = 0.85
NOISE_OFFSET_RANGE = 100.0
HEIGHT_MULTIPLIER_RANGE = (0.7, 1.4)
SINGLE_ISLAND_HEIGHT_MULTIPLIER = 1.5


class IslandType(str, Enum):
    """Island biome, which selects the high-terrain color bands."""

    TROPICAL = "tropical"
    ROCKY = "rocky"
    SANDY = "sandy"


class Island(BaseModel, frozen=True):
    """Immutable description of one placed island."""

    x: float
    z: float
    radius: float
    height_multiplier: float
    noise_offset_x: float
    noise_offset_z: float
    edge_falloff: float
    type: IslandType

    def distance_to(self, x: float, z: float) -> float:
        """Planar distance from the island center to (x, z)."""
        dx = x - self.x
        dz = z - self.z
        return math.sqrt(dx * dx + dz * dz)


def placement_spacing(config: WorldConfig) -> float:
    """Minimum center-to-center distance used for multi-island worlds."""
    return (config.min_island_size + config.max_island_size) / 2 * SPACING_FACTOR


def poisson_disk(
    noise: NoiseEngine,
    world_size: float,
    spacing: float,
    attempts: int = POISSON_ATTEMPTS,
) -> list[tuple[float, float]]:
    """Generate well-spaced points with Bridson's algorithm.

    Points are confined to the central 95% of a square world centered on the
    origin. A background grid with cells of ``spacing / sqrt(2)`` holds at
    most one point per cell, so a 5x5 neighborhood scan finds every point
    that could be too close. The grid and active list only live for this
    call.

    Args:
        noise: Engine whose random stream drives sampling.
        world_size: Side length of the world.
        spacing: Minimum distance between any two points.
        attempts: Candidates tried around an active point before retiring it.

    Returns:
        List of (x, z) points in acceptance order.
    """
    half_size = world_size / 2
    cell_size = spacing / math.sqrt(2)
    grid_w = math.ceil(world_size / cell_size)
    grid = [-1] * (grid_w * grid_w)
    points: list[tuple[float, float]] = []
    spacing_sq = spacing * spacing
    limit = half_size * BORDER_EXTENT

    def cell_of(x: float, z: float) -> tuple[int, int]:
        return (
            math.floor((x + half_size) / cell_size),
            math.floor((z + half_size) / cell_size),
        )

    def in_grid(gx: int, gz: int) -> bool:
        return 0 <= gx < grid_w and 0 <= gz < grid_w

    first_x = noise.random_range(-half_size * FIRST_POINT_EXTENT, half_size * FIRST_POINT_EXTENT)
    first_z = noise.random_range(-half_size * FIRST_POINT_EXTENT, half_size * FIRST_POINT_EXTENT)
    points.append((first_x, first_z))
    gx, gz = cell_of(first_x, first_z)
    if in_grid(gx, gz):
        grid[gz * grid_w + gx] = 0

    active = [0]

    while active:
        active_idx = math.floor(noise.random() * len(active))
        px, pz = points[active[active_idx]]
        found = False

        for _ in range(attempts):
            angle = noise.random() * math.pi * 2
            dist = noise.random_range(spacing, spacing * 2)
            nx = px + math.cos(angle) * dist
            nz = pz + math.sin(angle) * dist

            if abs(nx) > limit or abs(nz) > limit:
                continue

            gx, gz = cell_of(nx, nz)
            if not in_grid(gx, gz):
                continue

            if _too_close(nx, nz, gx, gz, grid, grid_w, points, spacing_sq):
                continue

            points.append((nx, nz))
            grid[gz * grid_w + gx] = len(points) - 1
            active.append(len(points) - 1)
            found = True
            break

        if not found:
            active.pop(active_idx)

    return points


def _too_close(
    x: float,
    z: float,
    gx: int,
    gz: int,
    grid: list[int],
    grid_w: int,
    points: list[tuple[float, float]],
    spacing_sq: float,
) -> bool:
    """Check the 5x5 cell neighborhood for a point closer than the spacing."""
    for dz in range(-2, 3):
        cz = gz + dz
        if cz < 0 or cz >= grid_w:
            continue
        for dx in range(-2, 3):
            cx = gx + dx
            if cx < 0 or cx >= grid_w:
                continue
            neighbor_idx = grid[cz * grid_w + cx]
            if neighbor_idx < 0:
                continue
            ox, oz = points[neighbor_idx]
            ddx = x - ox
            ddz = z - oz
            if ddx * ddx + ddz * ddz < spacing_sq:
                return True
    return False


class IslandPlacer:
    """Places islands for one generation pass.

    Every random draw comes from the shared engine, in a fixed order:
    Poisson sampling first, then per island radius, height multiplier,
    noise offsets and type.
    """

    def __init__(self, config: WorldConfig, noise: NoiseEngine):
        self.config = config
        self.noise = noise

    def determine_island_type(self) -> IslandType:
        """Weighted draw: 50% tropical, 30% rocky, 20% sandy."""
        r = self.noise.random()
        if r < 0.5:
            return IslandType.TROPICAL
        if r < 0.8:
            return IslandType.ROCKY
        return IslandType.SANDY

    def place_islands(self) -> list[Island]:
        """Place islands according to the config.

        Returns:
            Islands in placement order. May hold fewer than the requested
            count when the world fills up.
        """
        config = self.config
        noise = self.noise

        if config.island_count <= 0:
            logger.debug("ocean_world", island_count=config.island_count)
            return []

        if config.island_count == 1:
            radius = noise.random_range(config.min_island_size, config.max_island_size)
            island = Island(
                x=0.0,
                z=0.0,
                radius=radius,
                height_multiplier=SINGLE_ISLAND_HEIGHT_MULTIPLIER,
                noise_offset_x=noise.random_range(-NOISE_OFFSET_RANGE, NOISE_OFFSET_RANGE),
                noise_offset_z=noise.random_range(-NOISE_OFFSET_RANGE, NOISE_OFFSET_RANGE),
                edge_falloff=1.0,
                type=IslandType.ROCKY,
            )
            return [island]

        half_size = config.world_size / 2
        spacing = placement_spacing(config)
        candidates = poisson_disk(noise, config.world_size, spacing)
        target_count = min(config.island_count, len(candidates))

        if target_count < config.island_count:
            logger.info(
                "poisson_saturated",
                requested=config.island_count,
                available=len(candidates),
                spacing=round(spacing, 2),
            )

        islands: list[Island] = []
        for x, z in candidates[:target_count]:
            radius = noise.random_range(config.min_island_size, config.max_island_size)
            height_multiplier = noise.random_range(*HEIGHT_MULTIPLIER_RANGE)
            noise_offset_x = noise.random_range(-NOISE_OFFSET_RANGE, NOISE_OFFSET_RANGE)
            noise_offset_z = noise.random_range(-NOISE_OFFSET_RANGE, NOISE_OFFSET_RANGE)

            dist_from_center = math.sqrt(x * x + z * z)
            edge_falloff = max(0.0, 1 - dist_from_center / (half_size * EDGE_FALLOFF_EXTENT))

            islands.append(
                Island(
                    x=x,
                    z=z,
                    radius=radius,
                    height_multiplier=height_multiplier,
                    noise_offset_x=noise_offset_x,
                    noise_offset_z=noise_offset_z,
                    edge_falloff=edge_falloff,
                    type=self.determine_island_type(),
                )
            )

        return islands
