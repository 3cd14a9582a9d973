"""Tests for the command-line interface."""

from pathlib import Path

import numpy as np
import pytest
import structlog

from archipelago.cli import main
from archipelago.persistence import load_map


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo the CLI's global logging configuration after each test."""
    yield
    structlog.reset_defaults()


class TestMain:
    """Tests for the CLI entry point."""

    def test_generate_and_save(self, tmp_path: Path, capsys) -> None:
        """Generates a world, saves it and writes a preview."""
        output = tmp_path / "out" / "world.npz"
        preview = tmp_path / "out" / "preview.png"

        code = main([
            "--seed", "7",
            "--islands", "3",
            "--resolution", "8",
            "--output", str(output),
            "--preview", str(preview),
        ])

        assert code == 0
        assert output.exists()
        assert preview.exists()
        heights, colors, islands, metadata = load_map(output)
        assert heights.shape == (9, 9)
        assert colors.shape == (9, 9, 3)
        assert 1 <= len(islands) <= 3
        assert metadata["config"]["seed"] == 7
        assert "Generation complete" in capsys.readouterr().out

    def test_output_suffix_added(self, tmp_path: Path) -> None:
        """Output paths get the .npz suffix."""
        code = main([
            "--islands", "0",
            "--resolution", "4",
            "--output", str(tmp_path / "ocean"),
        ])
        assert code == 0
        heights, _, islands, _ = load_map(tmp_path / "ocean.npz")
        assert islands == []
        assert np.all(heights < 0)

    def test_preset(self, tmp_path: Path) -> None:
        """Presets select the configuration."""
        output = tmp_path / "single.npz"
        code = main([
            "--preset", "single_big_island",
            "--resolution", "4",
            "--output", str(output),
        ])
        assert code == 0
        _, _, islands, metadata = load_map(output)
        assert len(islands) == 1
        assert metadata["config"]["world_size"] == 600

    def test_text_seed(self, tmp_path: Path) -> None:
        """Non-numeric seeds are passed through as text."""
        output = tmp_path / "text.npz"
        assert main(["--seed", "maelstrom", "--resolution", "4", "--output", str(output)]) == 0
        _, _, _, metadata = load_map(output)
        assert metadata["config"]["seed"] == "maelstrom"

    def test_unknown_preset(self, tmp_path: Path, capsys) -> None:
        """Unknown presets exit with an error."""
        code = main(["--preset", "atlantis", "--output", str(tmp_path / "x.npz")])
        assert code == 1
        assert "atlantis" in capsys.readouterr().err

    def test_list_presets(self, capsys) -> None:
        """--list-presets prints bundled preset names."""
        assert main(["--list-presets"]) == 0
        out = capsys.readouterr().out.split()
        assert "archipelago" in out
        assert "mountainous" in out
