"""Exception hierarchy for hashing and codec operations.

All hashing exceptions inherit from ImageHashError. Image decoding errors
raised by Pillow are never wrapped in these types; they reach the caller
unchanged.

Exception Tree:
    ImageHashError (base)
    +-- EmptyInputError      (encode or construct an empty bit matrix)
    +-- InvalidLengthError   (hex string length does not match width x height)
    +-- InvalidDigitError    (non-hexadecimal character in a hash string)
    +-- ShapeMismatchError   (bit matrices of different or ragged shape)
    +-- InvalidConfigError   (non-positive size/factor, oversized crop)
    +-- InvalidSourceError   (scalar source is not a finite 2-D matrix in range)
"""

from __future__ import annotations


class ImageHashError(Exception):
    """Base exception for all hashing operations."""

    pass


class EmptyInputError(ImageHashError):
    """Raised when a bit matrix without any bits is encoded or constructed."""

    def __init__(self, detail: str = "Cannot encode an empty matrix") -> None:
        self.detail = detail
        super().__init__(detail)


class InvalidLengthError(ImageHashError):
    """Raised when a hash string is too short or too long for its shape.

    Attributes:
        expected: Number of hex digits implied by width x height.
        actual: Number of characters received.
    """

    def __init__(self, expected: int, actual: int, detail: str = "") -> None:
        self.expected = expected
        self.actual = actual
        msg = f"Hash string has {actual} characters, expected {expected}"
        if detail:
            msg += f". {detail}"
        super().__init__(msg)


class InvalidDigitError(ImageHashError):
    """Raised when a hash string contains a non-hexadecimal character.

    Attributes:
        character: The offending character.
        position: Zero-based index of the character in the string.
    """

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(f"Invalid hex digit {character!r} at position {position}")


class ShapeMismatchError(ImageHashError):
    """Raised when two bit matrices (or the rows of one) disagree on shape.

    Attributes:
        left: (width, height) of the first operand, or None if unknown.
        right: (width, height) of the second operand, or None if unknown.
    """

    def __init__(
        self,
        left: tuple[int, int] | None = None,
        right: tuple[int, int] | None = None,
        detail: str = "",
    ) -> None:
        self.left = left
        self.right = right
        if left is not None and right is not None:
            msg = (
                f"Hash shapes differ: {left[0]}x{left[1]} vs {right[0]}x{right[1]}"
            )
        else:
            msg = "Bit matrix is not rectangular"
        if detail:
            msg += f". {detail}"
        super().__init__(msg)


class InvalidConfigError(ImageHashError):
    """Raised when a hash configuration value is out of range.

    Attributes:
        field: The configuration field that is invalid.
        detail: Description of what's wrong.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid hash configuration [{field}]: {detail}")


class InvalidSourceError(ImageHashError):
    """Raised when a scalar image source violates its invariants.

    A valid source is a non-empty 2-D matrix of finite brightness values
    within [0, 255].
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid scalar image source: {detail}")
