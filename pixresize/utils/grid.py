"""Tile grid overlay for verifying pixel-art alignment.

:func:`line_positions` lays out where grid lines fall over an image of a
given size, honoring a drag offset. The lines are drawn in two passes: a
translucent dark shadow shifted half a unit up/left, then a 1-unit bright
line on the exact boundary, so the grid stays visible over both light and
dark art. :func:`render_overlay` applies that policy with Pillow for a
raster preview; the overlay is never part of a saved result.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import NamedTuple

import numpy as np
from PIL import Image, ImageDraw

from ..types import PixelBuffer
from .upscale import upscale_nearest

Point = tuple[float, float]
Segment = tuple[Point, Point]


@dataclass(frozen=True)
class GridSpec:
    """Cell size plus a free-running offset (as produced by drag gestures)."""

    cell_size: int
    offset_x: int = 0
    offset_y: int = 0

    def __post_init__(self) -> None:
        if self.cell_size < 1:
            raise ValueError("cell_size must be >= 1")

    def moved(self, dx: int, dy: int) -> "GridSpec":
        return replace(self, offset_x=self.offset_x + dx, offset_y=self.offset_y + dy)

    def reset(self) -> "GridSpec":
        return replace(self, offset_x=0, offset_y=0)

    def normalized_offset(self) -> tuple[int, int]:
        return _normalize(self.offset_x, self.cell_size), _normalize(self.offset_y, self.cell_size)


class StrokePass(NamedTuple):
    name: str
    rgba: tuple[int, int, int, int]
    line_width: int
    offset: float


SHADOW = StrokePass("shadow", (0, 0, 0, 166), 1, -0.5)
HIGHLIGHT = StrokePass("highlight", (255, 225, 0, 255), 1, 0.0)
# Drawing order matters: shadow underneath, highlight on top.
STROKE_PASSES = (SHADOW, HIGHLIGHT)


def _normalize(offset: int, cell: int) -> int:
    return ((offset % cell) + cell) % cell


def _axis_positions(extent: int, cell: int, offset: int) -> list[int]:
    start = _normalize(offset, cell)
    pos = [0]
    v = cell if start == 0 else start
    while v <= extent:
        pos.append(v)
        v += cell
    if pos[-1] != extent:
        pos.append(extent)
    return pos


def line_positions(
    w: int,
    h: int,
    cell_size: int,
    offset_x: int = 0,
    offset_y: int = 0,
) -> tuple[list[int], list[int]]:
    """Compute vertical (xs) and horizontal (ys) grid line coordinates.

    Parameters
    ----------
    w, h : int
        Canvas size.
    cell_size : int
        Grid cell size (>0).
    offset_x, offset_y : int
        Grid offset; any integer, normalised into ``[0, cell_size)``.

    Returns
    -------
    tuple[list[int], list[int]]
        Strictly increasing positions. ``xs`` always starts at 0 and ends at
        ``w``; ``ys`` likewise for ``h``.
    """
    if cell_size < 1:
        raise ValueError("cell_size must be >= 1")
    if w < 0 or h < 0:
        raise ValueError("w and h must be >= 0")
    return (
        _axis_positions(w, cell_size, offset_x),
        _axis_positions(h, cell_size, offset_y),
    )


def stroke_segments(
    xs: list[int], ys: list[int], w: int, h: int, offset: float = 0.0
) -> list[Segment]:
    """Line segments for one stroke pass, vertical lines first."""
    segs: list[Segment] = []
    for x in xs:
        segs.append(((x + offset, 0.0), (x + offset, float(h))))
    for y in ys:
        segs.append(((0.0, y + offset), (float(w), y + offset)))
    return segs


def render_overlay(buffer: PixelBuffer, grid: GridSpec, zoom: int = 1) -> Image.Image:
    """Render ``buffer`` with the grid drawn on top, for visual checks.

    Parameters
    ----------
    buffer : PixelBuffer
        Resized image. It is not modified.
    grid : GridSpec
        Cell size and offset in image pixels.
    zoom : int
        Integer magnification (>=1) applied before drawing so the 1-unit
        lines sit between enlarged pixels.

    Returns
    -------
    PIL.Image.Image
        New RGBA image of size ``(width * zoom, height * zoom)``.
    """
    if zoom < 1:
        raise ValueError("zoom must be >= 1")
    w, h = buffer.width, buffer.height
    xs, ys = line_positions(w, h, grid.cell_size, grid.offset_x, grid.offset_y)

    base = Image.fromarray(np.ascontiguousarray(upscale_nearest(buffer.array, zoom)))
    W, H = base.size
    layer = Image.new("RGBA", (W, H), (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)

    def px(v: float, limit: int) -> int:
        # Raster lines occupy the pixel starting at floor(v); keep the far
        # edge (v == extent) inside the canvas.
        return min(max(math.floor(v * zoom), 0), limit - 1)

    for stroke in STROKE_PASSES:
        for (x0, y0), (x1, y1) in stroke_segments(xs, ys, w, h, stroke.offset):
            draw.line(
                [(px(x0, W), px(y0, H)), (px(x1, W), px(y1, H))],
                fill=stroke.rgba,
                width=stroke.line_width,
            )

    return Image.alpha_composite(base, layer)


__all__ = [
    "GridSpec",
    "StrokePass",
    "SHADOW",
    "HIGHLIGHT",
    "STROKE_PASSES",
    "line_positions",
    "stroke_segments",
    "render_overlay",
]
