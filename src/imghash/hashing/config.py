"""Hash algorithm selection and per-call hash configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from imghash.hashing.exceptions import InvalidConfigError


class HashAlgorithm(str, Enum):
    """Closed set of supported hashing algorithms."""

    AVERAGE = "average"
    MEDIAN = "median"
    DIFFERENCE = "difference"
    PERCEPTUAL = "perceptual"


class ColorSpace(str, Enum):
    """Luma weighting used when converting RGB to grayscale."""

    REC601 = "rec601"
    REC709 = "rec709"

    @property
    def coefficients(self) -> tuple[float, float, float]:
        """(red, green, blue) weights."""
        if self is ColorSpace.REC709:
            return (0.2126, 0.7152, 0.0722)
        return (0.299, 0.587, 0.114)


@dataclass(frozen=True)
class HashConfig:
    """Configuration for one hash computation.

    Attributes:
        width: Width of the resulting bit matrix.
        height: Height of the resulting bit matrix.
        factor: Upscale factor for the perceptual hash. The image is resized to
            (width * factor, height * factor) before the DCT, and the result is
            cropped back to (width, height).
        color_space: Grayscale weighting passed to the image adapter.
    """

    width: int = 8
    height: int = 8
    factor: int = 4
    color_space: ColorSpace = ColorSpace.REC601

    def __post_init__(self) -> None:
        if self.width < 1:
            raise InvalidConfigError("width", f"must be >= 1 (got {self.width})")
        if self.height < 1:
            raise InvalidConfigError("height", f"must be >= 1 (got {self.height})")
        # factor >= 1 keeps the (width, height) crop inside the upscaled matrix
        if self.factor < 1:
            raise InvalidConfigError("factor", f"must be >= 1 (got {self.factor})")
        if not isinstance(self.color_space, ColorSpace):
            try:
                object.__setattr__(self, "color_space", ColorSpace(self.color_space))
            except ValueError as e:
                raise InvalidConfigError("color_space", str(e)) from e

    @classmethod
    def from_settings(cls) -> HashConfig:
        """Build the default configuration from application settings."""
        from imghash.core.config import get_settings

        settings = get_settings()
        return cls(
            width=settings.hash_width,
            height=settings.hash_height,
            factor=settings.hash_factor,
            color_space=ColorSpace(settings.hash_color_space),
        )

    def source_size(self, algorithm: HashAlgorithm) -> tuple[int, int]:
        """(width, height) of the scalar source the algorithm consumes.

        The difference hash needs one extra column so that every output
        column has a right-hand neighbour.
        """
        if algorithm is HashAlgorithm.DIFFERENCE:
            return self.width + 1, self.height
        if algorithm is HashAlgorithm.PERCEPTUAL:
            return self.width * self.factor, self.height * self.factor
        return self.width, self.height
