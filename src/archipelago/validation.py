"""Post-generation validation of island layouts."""

import numpy as np
import structlog
from scipy.spatial.distance import pdist

from .config import WorldConfig
from .islands import Island, placement_spacing

logger = structlog.get_logger()

# Slack for floating point error in distance checks
SPACING_TOLERANCE = 1e-6


class ValidationResult:
    """Result of island layout validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_islands(
    islands: list[Island],
    config: WorldConfig,
    spacing: float | None = None,
) -> ValidationResult:
    """Validate placed islands against the placement constraints.

    Args:
        islands: Islands returned by the generator.
        config: Configuration used for generation.
        spacing: Minimum center spacing, defaults to the placement spacing.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    if spacing is None:
        spacing = placement_spacing(config)

    # Check 1: Requested count
    _check_count(islands, config.island_count, result)

    # Check 2: Pairwise spacing
    _check_spacing(islands, spacing, result)

    # Check 3: Radii within the configured range
    _check_radii(islands, config, result)

    # Check 4: Centers inside the world
    _check_bounds(islands, config.world_size, result)

    if result.passed:
        logger.info("islands_validated", islands=len(islands), warnings=len(result.warnings))
    else:
        logger.warning("island_validation_failed", errors=result.errors)

    for warning in result.warnings:
        logger.warning("island_validation_warning", message=warning)

    return result


def _check_count(
    islands: list[Island],
    requested: int,
    result: ValidationResult,
) -> None:
    """Fewer islands than requested is expected when the world saturates."""
    expected = max(0, requested)
    if len(islands) > expected:
        result.add_error(f"Placed {len(islands)} islands, more than requested {expected}")
    elif len(islands) < expected:
        result.add_warning(f"Placed {len(islands)} of {expected} requested islands")


def _check_spacing(
    islands: list[Island],
    spacing: float,
    result: ValidationResult,
) -> None:
    """Check every island pair is at least the spacing apart."""
    if len(islands) < 2:
        return

    centers = np.array([(island.x, island.z) for island in islands], dtype=np.float64)
    distances = pdist(centers)
    too_close = int(np.sum(distances < spacing - SPACING_TOLERANCE))

    if too_close > 0:
        result.add_error(
            f"{too_close} island pairs closer than {spacing:.2f} "
            f"(minimum {float(distances.min()):.2f})"
        )


def _check_radii(
    islands: list[Island],
    config: WorldConfig,
    result: ValidationResult,
) -> None:
    """Check radii lie within the configured size range."""
    low = min(config.min_island_size, config.max_island_size)
    high = max(config.min_island_size, config.max_island_size)
    out_of_range = [island for island in islands if not low <= island.radius <= high]

    if out_of_range:
        result.add_error(f"{len(out_of_range)} islands with radius outside [{low}, {high}]")


def _check_bounds(
    islands: list[Island],
    world_size: float,
    result: ValidationResult,
) -> None:
    """Check island centers lie inside the world square."""
    half_size = world_size / 2
    outside = sum(
        1 for island in islands if abs(island.x) > half_size or abs(island.z) > half_size
    )

    if outside > 0:
        result.add_error(f"{outside} island centers outside the world bounds")
