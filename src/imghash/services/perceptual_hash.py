"""Perceptual hashing service for image deduplication.

Connects the image adapter to the pure hashers:
1. Load the image file with Pillow
2. Grayscale and resize it to the size the algorithm requests
3. Run the hasher on the resulting scalar matrix

Hashing many images is embarrassingly parallel; compute_image_hashes fans
the work out over a thread pool created per call, so concurrent callers
never share state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image

from imghash.core.config import get_settings
from imghash.core.logging import get_logger
from imghash.hashing.codec import hamming_distance
from imghash.hashing.config import HashAlgorithm, HashConfig
from imghash.hashing.hashers import compute_hash
from imghash.hashing.image_hash import ImageHash
from imghash.imaging.convert import load_image, resize_and_grayscale

logger = get_logger(__name__)


def _resolve_algorithm(algorithm: HashAlgorithm | str | None) -> HashAlgorithm:
    if algorithm is None:
        return HashAlgorithm(get_settings().hash_algorithm)
    return HashAlgorithm(algorithm)


def compute_image_hash_from_pil(
    image: Image.Image,
    algorithm: HashAlgorithm | str | None = None,
    config: HashConfig | None = None,
) -> ImageHash:
    """Compute a hash from a PIL Image object.

    Args:
        image: PIL Image object (any format, any size)
        algorithm: Hashing algorithm (default: Settings.hash_algorithm)
        config: Hash size, perceptual factor and color space
            (default: HashConfig.from_settings())

    Returns:
        ImageHash of shape (config.width, config.height)
    """
    algorithm = _resolve_algorithm(algorithm)
    config = config or HashConfig.from_settings()

    width, height = config.source_size(algorithm)
    pixels = resize_and_grayscale(image, width, height, config.color_space)
    return compute_hash(algorithm, pixels, config)


def compute_image_hash(
    image_path: str | Path,
    algorithm: HashAlgorithm | str | None = None,
    config: HashConfig | None = None,
) -> ImageHash:
    """Compute a hash for an image file.

    Decoding errors are logged and re-raised unchanged.

    Raises:
        FileNotFoundError: If image file does not exist
        PIL.UnidentifiedImageError: If the file is not a readable image
        PIL.Image.DecompressionBombError: If the image exceeds Pillow's pixel limit
    """
    image_path = Path(image_path)

    try:
        image = load_image(image_path)
    except (OSError, Image.DecompressionBombError) as e:
        logger.error(f"Failed to load image {image_path}: {e}")
        raise

    return compute_image_hash_from_pil(image, algorithm, config)


@dataclass
class BatchHashResult:
    """Outcome of hashing many files.

    Attributes:
        hashes: Successfully computed hashes keyed by path.
        errors: Error message per path that failed.
    """

    hashes: dict[Path, ImageHash] = field(default_factory=dict)
    errors: dict[Path, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.hashes) + len(self.errors)


def compute_image_hashes(
    image_paths: Iterable[str | Path],
    algorithm: HashAlgorithm | str | None = None,
    config: HashConfig | None = None,
    max_workers: int | None = None,
    progress_callback: Callable[[int], None] | None = None,
) -> BatchHashResult:
    """Hash many image files concurrently.

    A file that fails to load (unreadable, missing or a decompression bomb)
    is recorded in ``errors`` and does not stop the rest of the batch.

    Args:
        image_paths: Files to hash
        algorithm: Hashing algorithm (default: Settings.hash_algorithm)
        config: Hash configuration shared by every file
        max_workers: Thread pool size (default: Settings.hash_max_workers)
        progress_callback: Called with 1 after each finished file

    Returns:
        BatchHashResult with per-path hashes and errors

    Example:
        >>> result = compute_image_hashes(Path("photos").glob("*.jpg"))
        >>> print(f"Hashed {len(result.hashes)}/{result.total} images")
    """
    settings = get_settings()
    algorithm = _resolve_algorithm(algorithm)
    config = config or HashConfig.from_settings()
    max_workers = max_workers or settings.hash_max_workers

    paths = [Path(p) for p in image_paths]
    result = BatchHashResult()
    if not paths:
        return result

    logger.info(
        f"Hashing {len(paths)} images with {algorithm.value} "
        f"({config.width}x{config.height}, {max_workers} workers)"
    )

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(compute_image_hash, path, algorithm, config): path
            for path in paths
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                result.hashes[path] = future.result()
            except (OSError, Image.DecompressionBombError) as e:
                result.errors[path] = str(e)
            if progress_callback is not None:
                progress_callback(1)

    if result.errors:
        logger.warning(f"Failed to hash {len(result.errors)}/{len(paths)} images")
    return result


def are_hashes_similar(
    hash1: ImageHash, hash2: ImageHash, threshold: int | None = None
) -> bool:
    """Check if two images are perceptually similar based on hash distance.

    Args:
        hash1: First hash
        hash2: Second hash, same shape as hash1
        threshold: Maximum Hamming distance to consider similar
            (default: Settings.similarity_threshold). For 8x8 hashes:
            - 0: Exact duplicates only
            - 1-5: Very similar (minor edits, compression)
            - 6-10: Similar (cropping, color adjustments)
            - 11+: Different images

    Returns:
        True if Hamming distance <= threshold

    Raises:
        ShapeMismatchError: If the hashes have different shapes
    """
    if threshold is None:
        threshold = get_settings().similarity_threshold
    return hamming_distance(hash1, hash2) <= threshold
