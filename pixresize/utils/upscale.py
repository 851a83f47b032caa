"""Nearest-neighbor upscaling for NumPy arrays."""
from __future__ import annotations

import numpy as np

Array = np.ndarray


def upscale_nearest(arr: Array, factor: int) -> Array:
    """Upscale an image array by an integer factor using nearest-neighbor.

    Used to blow up small pixel art for on-screen verification, where every
    source pixel becomes a ``factor x factor`` block.

    Parameters
    ----------
    arr : np.ndarray
        Input array of shape (H, W, C), dtype=uint8.
    factor : int
        Upscale factor (>=1).

    Returns
    -------
    np.ndarray
        Upscaled image array.
    """
    if not isinstance(arr, np.ndarray) or arr.ndim != 3:
        raise ValueError("arr must be an image with shape (H, W, C)")
    if factor < 1:
        raise ValueError("factor must be >= 1")
    if factor == 1:
        return arr.copy()

    up = np.repeat(np.repeat(arr, factor, axis=0), factor, axis=1)
    return up.astype(np.uint8)
