"""Tests for the imghash CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from imghash.hashing.codec import format_shaped_hash
from imghash.hashing.config import ColorSpace, HashAlgorithm, HashConfig
from imghash.scripts.cli import app
from imghash.services.perceptual_hash import compute_image_hash

runner = CliRunner()


class TestHashCommand:
    def test_prints_hex_hash(self, temp_image_factory) -> None:
        path = temp_image_factory("photo.png")

        result = runner.invoke(app, ["hash", str(path)])

        assert result.exit_code == 0
        assert result.stdout.strip() == compute_image_hash(path, HashAlgorithm.PERCEPTUAL).encode()

    def test_shaped_output(self, temp_image_factory) -> None:
        path = temp_image_factory("photo.png")

        result = runner.invoke(app, ["hash", str(path), "--shaped"])

        assert result.exit_code == 0
        assert result.stdout.strip().startswith("8x8:")

    def test_algorithm_and_size_options(self, temp_image_factory) -> None:
        path = temp_image_factory("photo.png")
        expected = compute_image_hash(
            path, HashAlgorithm.DIFFERENCE, HashConfig(width=4, height=4)
        ).encode()

        result = runner.invoke(
            app, ["hash", str(path), "-a", "difference", "--width", "4", "--height", "4"]
        )

        assert result.exit_code == 0
        assert result.stdout.strip() == expected
        assert len(expected) == 4

    def test_defaults_follow_settings(
        self, temp_image_factory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = temp_image_factory("photo.png")
        monkeypatch.setenv("IMGHASH_ALGORITHM", "median")
        monkeypatch.setenv("IMGHASH_WIDTH", "4")
        monkeypatch.setenv("IMGHASH_HEIGHT", "2")
        expected = compute_image_hash(
            path, HashAlgorithm.MEDIAN, HashConfig(width=4, height=2)
        ).encode()

        result = runner.invoke(app, ["hash", str(path), "--shaped"])

        assert result.exit_code == 0
        assert result.stdout.strip() == f"4x2:{expected}"

    def test_options_override_settings(
        self, temp_image_factory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = temp_image_factory("photo.png")
        monkeypatch.setenv("IMGHASH_FACTOR", "2")
        monkeypatch.setenv("IMGHASH_COLOR_SPACE", "rec709")
        expected = compute_image_hash(
            path,
            HashAlgorithm.PERCEPTUAL,
            HashConfig(factor=3, color_space=ColorSpace.REC709),
        ).encode()

        result = runner.invoke(app, ["hash", str(path), "--factor", "3"])

        assert result.exit_code == 0
        assert result.stdout.strip() == expected

    def test_missing_file_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["hash", str(tmp_path / "missing.png")])

        assert result.exit_code == 1
        assert "Hashing failed" in result.output

    def test_invalid_config_fails(self, temp_image_factory) -> None:
        path = temp_image_factory("photo.png")

        result = runner.invoke(app, ["hash", str(path), "--factor", "0"])

        assert result.exit_code == 1
        assert "factor" in result.output


class TestCompareCommand:
    def test_plain_hex_hashes(self) -> None:
        result = runner.invoke(app, ["compare", "0000000000000000", "ffffffffffffffff"])

        assert result.exit_code == 0
        assert "Distance: 64" in result.stdout
        assert "Different" in result.stdout

    def test_shaped_hashes(self) -> None:
        result = runner.invoke(app, ["compare", "4x4:24f0", "4x4:24f1"])

        assert result.exit_code == 0
        assert "Distance: 1" in result.stdout
        assert "Similar" in result.stdout

    def test_threshold_option(self) -> None:
        result = runner.invoke(
            app, ["compare", "a1b2c3d4e5f6a7b8", "a1b2c3d4e5f6a7a7", "--threshold", "4"]
        )

        assert result.exit_code == 0
        assert "Distance: 5" in result.stdout
        assert "Different (threshold 4)" in result.stdout

    def test_plain_hash_with_custom_size(self) -> None:
        result = runner.invoke(app, ["compare", "1ff", "0ff", "--width", "3", "--height", "3"])

        assert result.exit_code == 0
        assert "Distance: 1" in result.stdout

    def test_shape_mismatch_fails(self) -> None:
        result = runner.invoke(app, ["compare", "4x4:24f0", "2x2:0"])

        assert result.exit_code == 1
        assert "Comparison failed" in result.output

    def test_plain_hash_size_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMGHASH_WIDTH", "4")
        monkeypatch.setenv("IMGHASH_HEIGHT", "4")

        result = runner.invoke(app, ["compare", "24f0", "24f1"])

        assert result.exit_code == 0
        assert "Distance: 1" in result.stdout

    def test_non_ascii_shape_fails_cleanly(self) -> None:
        result = runner.invoke(app, ["compare", "²x2:0", "2x2:0"])

        assert result.exit_code == 1
        assert "Comparison failed" in result.output

    def test_invalid_digit_fails(self) -> None:
        result = runner.invoke(app, ["compare", "zzzzzzzzzzzzzzzz", "0000000000000000"])

        assert result.exit_code == 1
        assert "Invalid hex digit" in result.output


class TestBatchCommand:
    def test_hashes_matching_files(self, temp_image_factory, tmp_path: Path) -> None:
        first = temp_image_factory("a.png", width=30, height=20)
        second = temp_image_factory("b.png", width=40, height=40)
        (tmp_path / "notes.txt").write_text("not an image")

        result = runner.invoke(
            app, ["batch", str(tmp_path), "--pattern", "*.png", "-a", "average", "--workers", "2"]
        )

        assert result.exit_code == 0
        assert f"{first}\t8x8:" in result.stdout
        assert f"{second}\t8x8:" in result.stdout
        assert "Hashed: 2/2" in result.stdout

    def test_defaults_follow_settings(
        self, temp_image_factory, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = temp_image_factory("a.png")
        monkeypatch.setenv("IMGHASH_FACTOR", "2")
        monkeypatch.setenv("IMGHASH_COLOR_SPACE", "rec709")
        expected = compute_image_hash(
            path,
            HashAlgorithm.PERCEPTUAL,
            HashConfig(factor=2, color_space=ColorSpace.REC709),
        )

        result = runner.invoke(app, ["batch", str(tmp_path), "--pattern", "*.png"])

        assert result.exit_code == 0
        assert f"{path}\t{format_shaped_hash(expected)}" in result.stdout

    def test_factor_and_color_space_options(self, temp_image_factory, tmp_path: Path) -> None:
        path = temp_image_factory("a.png")
        expected = compute_image_hash(
            path,
            HashAlgorithm.PERCEPTUAL,
            HashConfig(width=4, height=4, factor=2, color_space=ColorSpace.REC709),
        )

        result = runner.invoke(
            app,
            [
                "batch",
                str(tmp_path),
                "--pattern",
                "*.png",
                "--width",
                "4",
                "--height",
                "4",
                "--factor",
                "2",
                "--color-space",
                "rec709",
            ],
        )

        assert result.exit_code == 0
        assert f"{path}\t{format_shaped_hash(expected)}" in result.stdout

    def test_invalid_factor_fails(self, temp_image_factory, tmp_path: Path) -> None:
        temp_image_factory("a.png")

        result = runner.invoke(app, ["batch", str(tmp_path), "--factor", "0"])

        assert result.exit_code == 1
        assert "factor" in result.output

    def test_unreadable_file_fails_batch(self, temp_image_factory, tmp_path: Path) -> None:
        temp_image_factory("a.png")
        (tmp_path / "notes.txt").write_text("not an image")

        result = runner.invoke(app, ["batch", str(tmp_path)])

        assert result.exit_code == 1
        assert "Hashed: 1/2" in result.stdout
        assert "notes.txt" in result.output

    def test_not_a_directory_fails(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["batch", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Not a directory" in result.output
