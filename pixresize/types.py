"""Pixel buffer type shared by the resampler, the overlay and the IO helpers.

A :class:`PixelBuffer` is a thin immutable wrapper around a NumPy ``uint8``
array of shape (H, W, 4) holding RGBA pixels in row-major order. Pillow is
only touched in :meth:`PixelBuffer.from_image` and :meth:`PixelBuffer.to_image`.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

Array = np.ndarray


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """RGBA pixels of one decoded image.

    Parameters
    ----------
    array : np.ndarray
        Array of shape (H, W, 4), dtype=uint8. The buffer keeps a read-only
        view so that no holder can change the pixels in place.
    """

    array: Array

    def __post_init__(self) -> None:
        arr = self.array
        if not isinstance(arr, np.ndarray):
            raise TypeError("array must be a NumPy array")
        if arr.dtype != np.uint8:
            raise TypeError("array must have dtype=uint8")
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError("array must have shape (H, W, 4)")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError("array must hold at least one pixel")
        view = arr.view()
        view.flags.writeable = False
        object.__setattr__(self, "array", view)

    @property
    def width(self) -> int:
        return int(self.array.shape[1])

    @property
    def height(self) -> int:
        return int(self.array.shape[0])

    @property
    def data(self) -> bytes:
        """Flat RGBA bytes, ``len == width * height * 4``."""
        return self.array.tobytes()

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = (int(v) for v in self.array[y, x])
        return r, g, b, a

    @classmethod
    def from_bytes(cls, width: int, height: int, raw: bytes) -> "PixelBuffer":
        """Build a buffer from flat row-major RGBA bytes.

        Raises
        ------
        ValueError
            If ``len(raw) != width * height * 4``.
        """
        if width < 1 or height < 1:
            raise ValueError("width and height must be >= 1")
        expected = width * height * 4
        if len(raw) != expected:
            raise ValueError(
                f"expected {expected} bytes for {width}x{height} RGBA, got {len(raw)}"
            )
        arr = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(height, width, 4)
        return cls(arr.copy())

    @classmethod
    def from_image(cls, im: Image.Image) -> "PixelBuffer":
        if im.mode != "RGBA":
            im = im.convert("RGBA")
        return cls(np.array(im, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.array))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.array.shape == other.array.shape and bool(
            np.array_equal(self.array, other.array)
        )


__all__ = ["PixelBuffer", "Array"]
