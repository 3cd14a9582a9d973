"""Map persistence: save and load sampled worlds."""

import json
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import WorldConfig
from .exceptions import InvalidMapError
from .generator import Heightmap
from .islands import Island

logger = structlog.get_logger()

MAP_FORMAT_VERSION = 1


def save_map(
    path: Path,
    heightmap: Heightmap,
    islands: list[Island],
    config: WorldConfig,
) -> None:
    """Save a sampled world to disk.

    Uses numpy's compressed .npz format for efficient storage.

    Args:
        path: Output path (should end with .npz).
        heightmap: Sampled heights and colors.
        islands: Placed islands.
        config: Generation configuration used.
    """
    islands_data = [island.model_dump(mode="json") for island in islands]

    metadata = {
        "version": MAP_FORMAT_VERSION,
        "seed": config.seed,
        "world_size": config.world_size,
        "resolution": heightmap.shape[0] - 1,
        "island_count": len(islands),
        "config": config.model_dump(mode="json"),
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        heights=heightmap.heights,
        colors=heightmap.colors,
        islands=json.dumps(islands_data).encode("utf-8"),
        metadata=json.dumps(metadata).encode("utf-8"),
    )

    file_size = path.stat().st_size / 1024
    logger.info("map_saved", path=str(path), size_kb=round(file_size, 1))


def load_map(
    path: Path,
) -> tuple[NDArray[np.float64], NDArray[np.uint8], list[Island], dict]:
    """Load a sampled world from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (heights, colors, islands, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        InvalidMapError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Map file not found: {path}")

    with np.load(path) as data:
        for key in ("heights", "colors"):
            if key not in data:
                raise InvalidMapError(f"Invalid map file: missing '{key}' array")
        heights = data["heights"]
        colors = data["colors"]

        islands: list[Island] = []
        if "islands" in data:
            islands_data = json.loads(data["islands"].tobytes().decode("utf-8"))
            islands = [Island.model_validate(item) for item in islands_data]

        metadata: dict = {}
        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))

    if heights.shape != colors.shape[:2]:
        raise InvalidMapError(
            f"Invalid map file: heights {heights.shape} and colors {colors.shape} disagree"
        )

    logger.info("map_loaded", path=str(path), shape=heights.shape, islands=len(islands))
    return heights, colors, islands, metadata
