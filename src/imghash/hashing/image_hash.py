"""Bit matrix value type shared by every hasher, the codec and the comparator."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imghash.hashing.exceptions import EmptyInputError, ShapeMismatchError


def as_bit_array(bits: ArrayLike) -> NDArray[np.bool_]:
    """Convert nested rows of booleans into a 2-D numpy bool array.

    Raises:
        EmptyInputError: If the input holds no bits at all
        ShapeMismatchError: If rows have different lengths or the input is not 2-D
    """
    if isinstance(bits, ImageHash):
        return bits.bits

    if isinstance(bits, np.ndarray):
        array = bits
    else:
        try:
            rows = [list(row) for row in bits]  # type: ignore[union-attr]
        except TypeError as e:
            raise ShapeMismatchError(detail="expected a sequence of rows") from e
        if not rows or all(len(row) == 0 for row in rows):
            raise EmptyInputError()
        if len({len(row) for row in rows}) != 1:
            raise ShapeMismatchError(detail="all rows must have the same length")
        array = np.array(rows)

    if array.size == 0:
        raise EmptyInputError()
    if array.ndim != 2:
        raise ShapeMismatchError(detail=f"expected a 2-D matrix, got {array.ndim} dimensions")
    return array.astype(bool)


class ImageHash:
    """Immutable 2-D grid of bits produced by a hasher or by decoding.

    Bits are stored row-major as a read-only numpy array of shape
    ``(height, width)``; ``bits[y, x]`` is the bit at row y, column x.
    Equality is structural (shape and bits) and instances are hashable,
    so they can be used as dict keys or set members.

    Example:
        >>> h = ImageHash.from_rows([[True, False], [False, True]])
        >>> h.encode()
        '9'
        >>> h - ImageHash.decode("9", 2, 2)
        0
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: ArrayLike) -> None:
        array = np.array(as_bit_array(bits), dtype=bool, copy=True)
        array.flags.writeable = False
        self._bits = array

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[bool]]) -> ImageHash:
        """Build a hash from nested rows of booleans."""
        return cls([list(row) for row in rows])

    @classmethod
    def decode(cls, value: str, width: int, height: int) -> ImageHash:
        """Decode a hexadecimal string produced by :meth:`encode`."""
        from imghash.hashing.codec import decode_hash

        return decode_hash(value, width, height)

    @property
    def bits(self) -> NDArray[np.bool_]:
        """Read-only bool array of shape (height, width)."""
        return self._bits

    @property
    def width(self) -> int:
        return int(self._bits.shape[1])

    @property
    def height(self) -> int:
        return int(self._bits.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        """(width, height) of the bit matrix."""
        return self.width, self.height

    def flatten(self) -> NDArray[np.bool_]:
        """Return the bits as a 1-D row-major array of length width * height."""
        return self._bits.ravel().copy()

    def to_rows(self) -> list[list[bool]]:
        return [[bool(bit) for bit in row] for row in self._bits]

    def encode(self) -> str:
        """Encode the bits as a lower-case hexadecimal string."""
        from imghash.hashing.codec import encode_hash

        return encode_hash(self)

    def __sub__(self, other: ImageHash) -> int:
        from imghash.hashing.codec import hamming_distance

        return hamming_distance(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return self._bits.shape == other._bits.shape and bool(
            np.array_equal(self._bits, other._bits)
        )

    def __hash__(self) -> int:
        return hash((self._bits.shape, np.packbits(self._bits).tobytes()))

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"ImageHash({self.width}x{self.height}:{self.encode()})"
