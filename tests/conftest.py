"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Brightness matrix shared by the hasher tests
REFERENCE_MATRIX = [
    [124, 96, 98],
    [76, 89, 189],
    [98, 73, 76],
]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear settings cache before and after each test so env overrides apply."""
    from imghash.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Ignore IMGHASH_* variables and any .env file from the developer machine."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("IMGHASH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def reference_matrix() -> np.ndarray:
    """3x3 brightness matrix with mean 102.1 and median 96."""
    return np.array(REFERENCE_MATRIX, dtype=np.float64)


@pytest.fixture
def temp_image_factory(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture for creating temporary test images.

    Example:
        def test_something(temp_image_factory):
            image_path = temp_image_factory("test.png", width=100, height=100)
    """

    def _create_image(
        filename: str = "test.png", width: int = 64, height: int = 64
    ) -> Path:
        # RGB gradient pattern for visual variety
        img = Image.new("RGB", (width, height))
        pixels = img.load()

        if pixels is not None:
            for x in range(width):
                for y in range(height):
                    r = int((x / width) * 255)
                    g = int((y / height) * 255)
                    b = 128
                    pixels[x, y] = (r, g, b)

        image_path = tmp_path / filename
        img.save(image_path)

        return image_path

    return _create_image
