"""Exception types raised by pixresize.

Failures of a single image (it cannot be read, its pixels cannot be
extracted, or the result cannot be written) are reported per item by
:mod:`pixresize.batch`; they never abort sibling items.
"""
from __future__ import annotations


class PixResizeError(Exception):
    """Base exception for pixresize errors."""

    pass


class UnsupportedInput(PixResizeError):
    """Source bytes are not a raster format the decoder recognises."""


class DecodeError(PixResizeError):
    """The container was recognised but its pixel data could not be read."""


class EncodeError(PixResizeError):
    """A resampled buffer could not be serialised to the target container."""


class InvalidDimension(PixResizeError, ValueError):
    """A width or height below 1 reached the resampling kernel."""


__all__ = [
    "PixResizeError",
    "UnsupportedInput",
    "DecodeError",
    "EncodeError",
    "InvalidDimension",
]
