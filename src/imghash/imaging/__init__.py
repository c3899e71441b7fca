"""Pillow-backed image loading, grayscale conversion and resizing."""

from imghash.imaging.convert import grayscale, load_image, resize_and_grayscale

__all__ = ["grayscale", "load_image", "resize_and_grayscale"]
