"""Perceptual hashing core.

Pure functions from a grayscale scalar matrix to an ImageHash bit matrix,
plus the hexadecimal codec and Hamming distance. Nothing in this package
touches the filesystem or Pillow; see imghash.imaging for that.
"""

from imghash.hashing.codec import (
    decode_hash,
    encode_hash,
    format_shaped_hash,
    hamming_distance,
    parse_shaped_hash,
)
from imghash.hashing.config import ColorSpace, HashAlgorithm, HashConfig
from imghash.hashing.dct import dct2, dct2_2d
from imghash.hashing.exceptions import (
    EmptyInputError,
    ImageHashError,
    InvalidConfigError,
    InvalidDigitError,
    InvalidLengthError,
    InvalidSourceError,
    ShapeMismatchError,
)
from imghash.hashing.hashers import (
    average_hash,
    compute_hash,
    difference_hash,
    median_hash,
    perceptual_hash,
)
from imghash.hashing.image_hash import ImageHash

__all__ = [
    "ColorSpace",
    "EmptyInputError",
    "HashAlgorithm",
    "HashConfig",
    "ImageHash",
    "ImageHashError",
    "InvalidConfigError",
    "InvalidDigitError",
    "InvalidLengthError",
    "InvalidSourceError",
    "ShapeMismatchError",
    "average_hash",
    "compute_hash",
    "dct2",
    "dct2_2d",
    "decode_hash",
    "difference_hash",
    "encode_hash",
    "format_shaped_hash",
    "hamming_distance",
    "median_hash",
    "parse_shaped_hash",
    "perceptual_hash",
]
