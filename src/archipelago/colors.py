"""Terrain color mapping by height band and island type."""

import math

from .islands import IslandType

RGB = tuple[int, int, int]

# Underwater and shoreline band colors
DEEP_FLOOR_DARK: RGB = (0x0D, 0x1F, 0x2E)
DEEP_FLOOR: RGB = (0x1A, 0x3D, 0x5C)
UNDERWATER_SAND: RGB = (0x8B, 0x73, 0x55)
WET_SAND: RGB = (0xC9, 0xA8, 0x6C)
DRY_SAND: RGB = (0xE8, 0xD4, 0xA8)
LOW_GRASS: RGB = (0x4A, 0x8C, 0x3F)

# High terrain bands: (upper normalized height, color); last entry is the cap
ELEVATION_BANDS: dict[IslandType, list[tuple[float, RGB]]] = {
    IslandType.TROPICAL: [
        (0.2, (0x4A, 0x8C, 0x3F)),  # lush green
        (0.4, (0x3A, 0x7A, 0x30)),  # darker green
        (0.6, (0x5A, 0x60, 0x50)),  # rocky
        (0.8, (0x8A, 0x88, 0x80)),  # gray rock
        (math.inf, (0xFF, 0xFF, 0xFF)),  # snow
    ],
    IslandType.ROCKY: [
        (0.2, (0x5A, 0x6A, 0x50)),  # moss
        (0.5, (0x6A, 0x6A, 0x60)),  # gray rock
        (math.inf, (0x8A, 0x88, 0x80)),  # light rock
    ],
    IslandType.SANDY: [
        (0.3, (0xD4, 0xC4, 0x9A)),  # sand
        (0.6, (0xC4, 0xB4, 0x8A)),  # darker sand
        (math.inf, (0xA0, 0xA0, 0x90)),  # rock
    ],
}


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def lerp_rgb(a: RGB, b: RGB, t: float) -> RGB:
    """Linear blend between two colors, rounding half up per channel."""
    return (
        math.floor(a[0] + (b[0] - a[0]) * t + 0.5),
        math.floor(a[1] + (b[1] - a[1]) * t + 0.5),
        math.floor(a[2] + (b[2] - a[2]) * t + 0.5),
    )


def color_at(
    height: float,
    normalized_height: float,
    island_type: IslandType | str | None,
    water_height: float,
    ocean_depth: float,
) -> RGB:
    """Map a terrain sample to an RGB color.

    Bands are checked from the ocean floor upwards; above the beach the
    island type picks a discrete palette keyed on normalized height.

    Args:
        height: Terrain height at the sample.
        normalized_height: ``max(0, height) / max_terrain_height``.
        island_type: Type of the closest island, None for tropical. Unknown
            names color all high terrain as low grass.
        water_height: Sea surface height.
        ocean_depth: Open ocean floor height.

    Returns:
        (r, g, b) tuple with channels in 0-255.
    """
    if height < ocean_depth + 2:
        t = _clamp01((height - ocean_depth) / 2)
        return lerp_rgb(DEEP_FLOOR_DARK, DEEP_FLOOR, t)
    if height < water_height - 1:
        t = _clamp01((height - (water_height - 5)) / 4)
        return lerp_rgb(DEEP_FLOOR, UNDERWATER_SAND, t * 0.5)
    if height < water_height + 0.5:
        t = _clamp01((height - (water_height - 1)) / 1.5)
        return lerp_rgb(WET_SAND, DRY_SAND, t)
    if height < water_height + 2:
        t = _clamp01((height - (water_height + 0.5)) / 1.5)
        return lerp_rgb(DRY_SAND, LOW_GRASS, t)

    try:
        bands = ELEVATION_BANDS[IslandType(island_type or IslandType.TROPICAL)]
    except ValueError:
        # Unknown type names get plain low grass
        return LOW_GRASS
    for upper, color in bands:
        if normalized_height < upper:
            return color
    return bands[-1][1]
