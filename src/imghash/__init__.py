"""Perceptual image hashing with an imagehash-compatible hex codec."""

from imghash.hashing import (
    ColorSpace,
    HashAlgorithm,
    HashConfig,
    ImageHash,
    ImageHashError,
    average_hash,
    decode_hash,
    difference_hash,
    encode_hash,
    hamming_distance,
    median_hash,
    perceptual_hash,
)

__version__ = "0.1.0"

__all__ = [
    "ColorSpace",
    "HashAlgorithm",
    "HashConfig",
    "ImageHash",
    "ImageHashError",
    "average_hash",
    "decode_hash",
    "difference_hash",
    "encode_hash",
    "hamming_distance",
    "median_hash",
    "perceptual_hash",
]
