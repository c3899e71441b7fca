"""Image adapter: decode, grayscale and resize images for hashing.

Produces the scalar matrix the hashers consume. Grayscale conversion
computes the weighted RGB sum in float32 and truncates it to uint8, then
the luma image is resized to the exact requested size with Lanczos
resampling. Both steps are deterministic for a given input.
"""

from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from imghash.core.logging import get_logger
from imghash.hashing.config import ColorSpace
from imghash.hashing.exceptions import InvalidConfigError

logger = get_logger(__name__)


def load_image(image_path: str | Path) -> Image.Image:
    """Open and fully decode an image file.

    Raises:
        FileNotFoundError: If the file does not exist
        PIL.UnidentifiedImageError: If Pillow cannot identify the format
        OSError: If the file is truncated or otherwise unreadable
    """
    image_path = Path(image_path)

    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    with Image.open(image_path) as img:
        img.load()
        return img.copy()


def grayscale(image: Image.Image, color_space: ColorSpace = ColorSpace.REC601) -> Image.Image:
    """Convert an image to 8-bit luma using the given color space weights."""
    rgb = np.asarray(image.convert("RGB"), dtype=np.float32)
    weights = np.array(ColorSpace(color_space).coefficients, dtype=np.float32)

    luma = rgb @ weights
    # Truncate like an integer cast; clip guards float32 rounding above 255
    return Image.fromarray(np.clip(luma, 0, 255).astype(np.uint8))


def resize_and_grayscale(
    image: Image.Image,
    width: int,
    height: int,
    color_space: ColorSpace = ColorSpace.REC601,
) -> NDArray[np.float64]:
    """Grayscale an image and resize it to exactly (width, height).

    Args:
        image: PIL Image object (any mode, any size)
        width: Target width in pixels
        height: Target height in pixels
        color_space: Grayscale weighting

    Returns:
        float64 matrix of shape (height, width) with values in [0, 255]

    Raises:
        InvalidConfigError: If width or height is smaller than 1
    """
    if width < 1:
        raise InvalidConfigError("width", f"must be >= 1 (got {width})")
    if height < 1:
        raise InvalidConfigError("height", f"must be >= 1 (got {height})")

    gray = grayscale(image, color_space)
    resized = gray.resize((width, height), Image.Resampling.LANCZOS)

    logger.debug(
        "Converted %dx%d %s image to %dx%d grayscale (%s)",
        image.width,
        image.height,
        image.mode,
        width,
        height,
        ColorSpace(color_space).value,
    )
    return np.asarray(resized, dtype=np.float64)
