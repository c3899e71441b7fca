"""Hashing algorithms over a grayscale scalar matrix.

Each hasher takes a float matrix of shape (height, width) with brightness
values in [0, 255], already resized by the image adapter, and returns an
ImageHash. All thresholds are strict: a value equal to the mean or median
yields a 0 bit.

- average_hash: bit = pixel > mean
- median_hash: bit = pixel > median
- difference_hash: bit = pixel < right neighbour (input is one column wider)
- perceptual_hash: 2-D DCT, crop low frequencies, bit = coefficient > median

References:
- http://www.hackerfactor.com/blog/index.php?/archives/432-Looks-Like-It.html
- http://www.hackerfactor.com/blog/index.php?/archives/529-Kind-of-Like-That.html
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imghash.hashing.config import HashAlgorithm, HashConfig
from imghash.hashing.dct import dct2_2d
from imghash.hashing.exceptions import InvalidConfigError, InvalidSourceError
from imghash.hashing.image_hash import ImageHash

MAX_BRIGHTNESS = 255.0


def as_scalar_matrix(pixels: ArrayLike) -> NDArray[np.float64]:
    """Validate and convert a scalar image source to a float64 matrix.

    Raises:
        InvalidSourceError: If the input is not a non-empty 2-D matrix of
            finite values in [0, 255]
    """
    try:
        matrix = np.asarray(pixels, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidSourceError(f"not a numeric matrix ({e})") from e

    if matrix.ndim != 2:
        raise InvalidSourceError(f"expected 2 dimensions, got {matrix.ndim}")
    if matrix.size == 0:
        raise InvalidSourceError("matrix is empty")
    if not np.all(np.isfinite(matrix)):
        raise InvalidSourceError("matrix contains non-finite values")
    if matrix.min() < 0.0 or matrix.max() > MAX_BRIGHTNESS:
        raise InvalidSourceError(f"values must lie within [0, {MAX_BRIGHTNESS:g}]")
    return matrix


def lower_median(values: ArrayLike) -> float:
    """Median as the element at index (n - 1) // 2 of the sorted values.

    For an even count this is the lower of the two middle elements. Under a
    strict greater-than threshold it selects exactly the same bits as the
    mean of the two middle elements.
    """
    flat = np.sort(np.asarray(values, dtype=np.float64), axis=None)
    if flat.size == 0:
        raise InvalidSourceError("cannot take the median of no values")
    return float(flat[(flat.size - 1) // 2])


def average_hash(pixels: ArrayLike) -> ImageHash:
    """Average hash: each bit is set when the pixel is brighter than the mean."""
    matrix = as_scalar_matrix(pixels)
    return ImageHash(matrix > matrix.mean())


def median_hash(pixels: ArrayLike) -> ImageHash:
    """Median hash: each bit is set when the pixel is brighter than the median."""
    matrix = as_scalar_matrix(pixels)
    return ImageHash(matrix > lower_median(matrix))


def difference_hash(pixels: ArrayLike) -> ImageHash:
    """Difference hash over horizontal neighbours.

    The source must be one column wider than the resulting hash; output bit
    (x, y) is set when source[y][x] < source[y][x + 1].
    """
    matrix = as_scalar_matrix(pixels)
    if matrix.shape[1] < 2:
        raise InvalidSourceError("difference hash needs at least 2 columns")
    return ImageHash(matrix[:, :-1] < matrix[:, 1:])


def perceptual_hash(pixels: ArrayLike, width: int = 8, height: int = 8) -> ImageHash:
    """Perceptual hash from the low-frequency DCT coefficients.

    Args:
        pixels: Upscaled source, usually (height * factor, width * factor)
        width: Width of the low-frequency crop and of the resulting hash
        height: Height of the low-frequency crop and of the resulting hash

    Raises:
        InvalidConfigError: If the crop is larger than the source
    """
    matrix = as_scalar_matrix(pixels)
    if width < 1 or width > matrix.shape[1]:
        raise InvalidConfigError(
            "width", f"crop width {width} must be in [1, {matrix.shape[1]}]"
        )
    if height < 1 or height > matrix.shape[0]:
        raise InvalidConfigError(
            "height", f"crop height {height} must be in [1, {matrix.shape[0]}]"
        )

    low_frequencies = dct2_2d(matrix)[:height, :width]
    return ImageHash(low_frequencies > lower_median(low_frequencies))


def compute_hash(
    algorithm: HashAlgorithm, pixels: ArrayLike, config: HashConfig | None = None
) -> ImageHash:
    """Run one hashing algorithm over a prepared scalar source.

    Args:
        algorithm: Which hasher to apply
        pixels: Matrix of shape config.source_size(algorithm), (height, width) ordered
        config: Only the perceptual hash reads it (crop width and height)

    Returns:
        ImageHash produced by the selected algorithm
    """
    algorithm = HashAlgorithm(algorithm)
    if algorithm is HashAlgorithm.AVERAGE:
        return average_hash(pixels)
    if algorithm is HashAlgorithm.MEDIAN:
        return median_hash(pixels)
    if algorithm is HashAlgorithm.DIFFERENCE:
        return difference_hash(pixels)

    config = config or HashConfig()
    return perceptual_hash(pixels, config.width, config.height)
