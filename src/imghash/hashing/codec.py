"""Hexadecimal codec and Hamming distance for bit matrices.

Wire format:
1. Flatten the bit matrix row-major (N = width * height bits)
2. Prepend (4 - N mod 4) mod 4 zero bits so the length is a multiple of 4
3. Read each 4-bit group most-significant bit first as one hex digit
4. Concatenate the lower-case digits

This is the encoding used by the Python ``imagehash`` package, so digests
produced here can be compared with digests stored by it. The string does
not record the shape; callers persist width and height next to it, for
example with :func:`format_shaped_hash` ("8x8:3f2a...").
"""

import math

import numpy as np
from numpy.typing import ArrayLike

from imghash.hashing.exceptions import (
    EmptyInputError,
    InvalidConfigError,
    InvalidDigitError,
    InvalidLengthError,
    ShapeMismatchError,
)
from imghash.hashing.image_hash import ImageHash, as_bit_array

HEX_DIGITS = "0123456789abcdef"

# MSB-first weights of a 4-bit group
_NIBBLE_WEIGHTS = np.array([8, 4, 2, 1], dtype=np.uint8)


def hex_length(width: int, height: int) -> int:
    """Number of hex digits needed to hold width * height bits."""
    return math.ceil(width * height / 4)


def encode_hash(bits: ImageHash | ArrayLike) -> str:
    """Encode a bit matrix into a lower-case hexadecimal string.

    Args:
        bits: ImageHash or nested rows of booleans

    Returns:
        Hex string of length ceil(width * height / 4)

    Raises:
        EmptyInputError: If the matrix holds no bits

    Example:
        >>> encode_hash([[False, False, True, False], [False, True, False, False]])
        '24'
        >>> encode_hash([[True]])  # padded to 0001
        '1'
    """
    flat = as_bit_array(bits).ravel()
    if flat.size == 0:
        raise EmptyInputError()

    padding = (4 - flat.size % 4) % 4
    padded = np.concatenate([np.zeros(padding, dtype=bool), flat])

    nibbles = padded.reshape(-1, 4).astype(np.uint8) @ _NIBBLE_WEIGHTS
    return "".join(HEX_DIGITS[int(value)] for value in nibbles)


def decode_hash(value: str, width: int, height: int) -> ImageHash:
    """Decode a hexadecimal string into a width x height bit matrix.

    The leading padding bits that :func:`encode_hash` adds are dropped. Bits
    set inside the padding region are ignored rather than rejected, matching
    how ``imagehash`` digests of non-multiple-of-4 sizes have always decoded.
    Upper-case digits are accepted.

    Args:
        value: Hex string
        width: Width of the matrix the hash was generated from
        height: Height of the matrix the hash was generated from

    Returns:
        Decoded ImageHash

    Raises:
        InvalidConfigError: If width or height is smaller than 1
        InvalidLengthError: If len(value) != ceil(width * height / 4)
        InvalidDigitError: If value contains a non-hex character
    """
    if width < 1:
        raise InvalidConfigError("width", f"must be >= 1 (got {width})")
    if height < 1:
        raise InvalidConfigError("height", f"must be >= 1 (got {height})")

    total = width * height
    expected = hex_length(width, height)
    if len(value) != expected:
        raise InvalidLengthError(
            expected,
            len(value),
            "String is too short or too long for the specified size",
        )

    nibbles = []
    for position, character in enumerate(value):
        digit = HEX_DIGITS.find(character.lower())
        if digit < 0:
            raise InvalidDigitError(character, position)
        nibbles.append(digit)

    groups = np.array(nibbles, dtype=np.uint8)[:, np.newaxis] & _NIBBLE_WEIGHTS
    padded = (groups != 0).ravel()

    padding = expected * 4 - total
    flat = padded[padding:]

    if flat.size != total:
        raise InvalidLengthError(
            total, int(flat.size), "Decoded bit count does not match width x height"
        )

    return ImageHash(flat.reshape(height, width))


def hamming_distance(a: ImageHash, b: ImageHash) -> int:
    """Count the bit positions in which two equally shaped hashes differ.

    Returns:
        Distance in [0, width * height], 0 meaning identical

    Raises:
        ShapeMismatchError: If the hashes do not share (width, height)

    Example:
        >>> a = ImageHash.decode("24f0", 4, 4)
        >>> b = ImageHash.decode("24f1", 4, 4)
        >>> hamming_distance(a, b)
        1
    """
    if a.shape != b.shape:
        raise ShapeMismatchError(a.shape, b.shape)
    return int(np.count_nonzero(a.bits != b.bits))


def format_shaped_hash(image_hash: ImageHash) -> str:
    """Format a hash together with its shape as ``"{width}x{height}:{hex}"``."""
    return f"{image_hash.width}x{image_hash.height}:{image_hash.encode()}"


def _is_ascii_number(text: str) -> bool:
    # isdigit() alone also accepts superscripts and other digits int() rejects
    return text.isascii() and text.isdecimal()


def parse_shaped_hash(value: str) -> ImageHash:
    """Parse a string produced by :func:`format_shaped_hash`.

    Raises:
        InvalidLengthError: If the shape prefix is missing or malformed
        InvalidDigitError: If the digest contains a non-hex character
    """
    shape, separator, digest = value.partition(":")
    width_text, x, height_text = shape.lower().partition("x")
    valid_numbers = _is_ascii_number(width_text) and _is_ascii_number(height_text)
    if not separator or not x or not valid_numbers:
        raise InvalidLengthError(
            0, len(value), f"Expected '<width>x<height>:<hex>', got {value!r}"
        )
    return decode_hash(digest, int(width_text), int(height_text))
