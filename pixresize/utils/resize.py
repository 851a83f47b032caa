"""Nearest-neighbor resizing utilities for NumPy arrays.

Provides integer-agnostic nearest-neighbor scaling to arbitrary output size
for crisp pixel-art operations. Every output pixel is an exact copy of one
source pixel; nothing is blended.
"""
from __future__ import annotations

import numpy as np

from ..errors import InvalidDimension
from ..types import PixelBuffer

Array = np.ndarray


def _check_image(arr: Array) -> None:
    if not isinstance(arr, np.ndarray) or arr.ndim != 3:
        raise ValueError("arr must be an image with shape (H, W, C)")
    if arr.dtype != np.uint8:
        raise ValueError("arr must have dtype=uint8")


def _source_indices(src: int, dst: int) -> Array:
    # floor(i * (src / dst)) in float64, the same ratio arithmetic a canvas
    # implementation uses, so sizes that are not exact multiples pick the
    # same source rows/columns.
    idx = np.floor(np.arange(dst, dtype=np.float64) * (src / dst)).astype(np.int64)
    return np.clip(idx, 0, src - 1)


def resize_nearest(arr: Array, new_h: int, new_w: int) -> Array:
    """Resize an image to (new_h, new_w) via nearest-neighbor.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, C), dtype=uint8.
    new_h : int
        Target height (>=1).
    new_w : int
        Target width (>=1).

    Returns
    -------
    np.ndarray
        Resized image, a new array even when the size is unchanged.
    """
    _check_image(arr)
    if new_h < 1 or new_w < 1:
        raise InvalidDimension(f"target size must be >= 1, got {new_w}x{new_h}")

    H, W, _ = arr.shape
    if H == new_h and W == new_w:
        return arr.copy()

    yi = _source_indices(H, new_h)
    xi = _source_indices(W, new_w)

    out = arr[yi[:, None], xi[None, :], :]
    return out.astype(np.uint8, copy=False)


def resample(src: PixelBuffer, dst_w: int, dst_h: int) -> PixelBuffer:
    """Nearest-neighbor resample of an RGBA buffer to ``dst_w`` x ``dst_h``.

    Raises
    ------
    InvalidDimension
        If either target dimension is below 1.
    """
    return PixelBuffer(resize_nearest(src.array, dst_h, dst_w))


__all__ = ["resize_nearest", "resample"]
