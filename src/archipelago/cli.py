"""Command-line interface for world generation."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a procedural island world"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--preset", type=str, default=None, help="Bundled preset name (see --list-presets)"
    )
    source.add_argument(
        "--config", type=str, default=None, help="Path to a TOML config file"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List bundled presets and exit"
    )
    parser.add_argument(
        "--seed", type=str, default=None, help="Seed, number or text (default: from config)"
    )
    parser.add_argument(
        "--islands", type=int, default=None, help="Requested island count"
    )
    parser.add_argument(
        "--resolution", type=int, default=None, help="Grid cells per side"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="saves/world.npz",
        help="Output path (default: saves/world.npz)",
    )
    parser.add_argument(
        "--preview",
        type=str,
        default=None,
        help="Also write a color preview PNG to this path",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def _parse_seed(value: str) -> int | str:
    try:
        return int(value)
    except ValueError:
        return value


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for world generation."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    # Import here to avoid slow startup for --help
    from .config import WorldConfig, find_config, list_configs, load_config
    from .exceptions import PresetNotFoundError
    from .generator import WorldGenerator
    from .persistence import save_map
    from .validation import validate_islands

    if args.list_presets:
        for name in list_configs():
            print(name)
        return 0

    try:
        if args.preset or args.config:
            config = load_config(find_config(args.preset or args.config))
        else:
            config = WorldConfig()
    except PresetNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    overrides: dict = {}
    if args.seed is not None:
        overrides["seed"] = _parse_seed(args.seed)
    if args.islands is not None:
        overrides["island_count"] = args.islands
    if args.resolution is not None:
        overrides["resolution"] = args.resolution
    config = config.with_overrides(**overrides)

    output_path = Path(args.output)
    if output_path.suffix != ".npz":
        output_path = output_path.with_suffix(".npz")

    print(f"Generating {config.world_size:g}x{config.world_size:g} world with seed {config.seed}")
    print(f"Output: {output_path}")
    print()

    start_time = time.time()
    generator = WorldGenerator(config).generate()
    islands = generator.get_islands()
    validation = validate_islands(islands, config)
    heightmap = generator.sample_grid()
    gen_time = time.time() - start_time

    print(f"Generation complete in {gen_time:.1f}s")
    print(f"  islands: {len(islands)} of {max(0, config.island_count)} requested")
    for i, island in enumerate(islands):
        print(
            f"    #{i}: {island.type.value:<8} at ({island.x:7.1f}, {island.z:7.1f}) "
            f"r={island.radius:5.1f} x{island.height_multiplier:.2f}"
        )
    print(f"  land fraction: {heightmap.land_fraction():.1%}")
    print(
        f"  height range: {heightmap.heights.min():.1f} .. {heightmap.heights.max():.1f}"
    )
    spawn = generator.get_spawn_position()
    print(f"  spawn: ({spawn.x:.1f}, {spawn.y:.1f}, {spawn.z:.1f})")
    if not validation.passed:
        for error in validation.errors:
            print(f"  validation error: {error}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    save_map(output_path, heightmap, islands, config)
    print(f"Saved to {output_path}")

    if args.preview:
        from PIL import Image

        preview_path = Path(args.preview)
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(heightmap.colors).save(preview_path)
        print(f"Preview saved to {preview_path}")

    return 0 if validation.passed else 2


if __name__ == "__main__":
    sys.exit(main())
