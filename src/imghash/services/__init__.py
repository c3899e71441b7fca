"""Services package."""

from imghash.services.perceptual_hash import (
    BatchHashResult,
    are_hashes_similar,
    compute_image_hash,
    compute_image_hash_from_pil,
    compute_image_hashes,
)

__all__ = [
    "BatchHashResult",
    "are_hashes_similar",
    "compute_image_hash",
    "compute_image_hash_from_pil",
    "compute_image_hashes",
]
