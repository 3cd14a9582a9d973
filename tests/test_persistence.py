"""Tests for map persistence."""

from pathlib import Path

import numpy as np
import pytest

from archipelago.exceptions import InvalidMapError
from archipelago.generator import WorldGenerator
from archipelago.persistence import load_map, save_map


@pytest.fixture
def small_world() -> WorldGenerator:
    """Generated world with a few islands."""
    return WorldGenerator(seed=321, island_count=3).generate()


class TestSaveLoad:
    """Tests for saving and loading maps."""

    def test_round_trip(self, small_world: WorldGenerator, tmp_path: Path) -> None:
        """Saved arrays and islands load back unchanged."""
        heightmap = small_world.sample_grid(resolution=12)
        islands = small_world.get_islands()
        path = tmp_path / "world.npz"

        save_map(path, heightmap, islands, small_world.config)
        heights, colors, loaded_islands, metadata = load_map(path)

        np.testing.assert_array_equal(heights, heightmap.heights)
        np.testing.assert_array_equal(colors, heightmap.colors)
        assert loaded_islands == islands
        assert metadata["version"] == 1
        assert metadata["resolution"] == 12
        assert metadata["config"]["seed"] == 321
        assert "generated_at" in metadata

    def test_metadata_summary_fields(self, small_world: WorldGenerator, tmp_path: Path) -> None:
        """Seed and sizes are stored at the top level of the metadata."""
        heightmap = small_world.sample_grid(resolution=6)
        islands = small_world.get_islands()
        path = tmp_path / "summary.npz"

        save_map(path, heightmap, islands, small_world.config)
        _, _, _, metadata = load_map(path)

        assert metadata["seed"] == 321
        assert metadata["world_size"] == 400
        assert metadata["resolution"] == 6
        assert metadata["island_count"] == len(islands)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_map(tmp_path / "missing.npz")

    def test_missing_heights(self, tmp_path: Path) -> None:
        """Files without heights are rejected."""
        path = tmp_path / "bad.npz"
        np.savez(path, colors=np.zeros((2, 2, 3), dtype=np.uint8))
        with pytest.raises(InvalidMapError):
            load_map(path)

    def test_mismatched_shapes(self, tmp_path: Path) -> None:
        """Heights and colors must cover the same grid."""
        path = tmp_path / "bad.npz"
        np.savez(
            path,
            heights=np.zeros((3, 3)),
            colors=np.zeros((2, 2, 3), dtype=np.uint8),
        )
        with pytest.raises(InvalidMapError):
            load_map(path)

    def test_invalid_map_is_value_error(self, tmp_path: Path) -> None:
        """InvalidMapError is a ValueError."""
        path = tmp_path / "bad.npz"
        np.savez(path, other=np.zeros(1))
        with pytest.raises(ValueError):
            load_map(path)

    def test_optional_sections(self, tmp_path: Path) -> None:
        """Islands and metadata are optional."""
        path = tmp_path / "bare.npz"
        np.savez(
            path,
            heights=np.zeros((2, 2)),
            colors=np.zeros((2, 2, 3), dtype=np.uint8),
        )
        _, _, islands, metadata = load_map(path)
        assert islands == []
        assert metadata == {}
