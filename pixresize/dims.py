"""Output dimension planning.

Computes the target (width, height) of a resize from the source size and a
scale configuration, then optionally snaps both axes to a multiple of a grid
cell so tile-based art does not end with partial tiles.

Every rounding here is round-half-away-from-zero. Python's built-in
``round`` rounds ties to even (``round(16.5) == 16``), which would give
different sizes for the same input than other tools produce.
"""
from __future__ import annotations

import logging
import math
from typing import NamedTuple, Optional

from .scale import Exact, Percent, ScaleConfig, SnapSettings

logger = logging.getLogger(__name__)


class Dimensions(NamedTuple):
    width: int
    height: int
    snapped: bool = False


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def snap(value: int, grid: int) -> int:
    """Snap ``value`` to the nearest multiple of ``grid``, never below ``grid``.

    Parameters
    ----------
    value : int
        Pre-snap size (>=1).
    grid : int
        Cell size (>0).

    Returns
    -------
    int
        ``max(grid, round(value / grid) * grid)``.
    """
    if grid <= 0:
        raise ValueError("grid must be > 0")
    return max(grid, round_half_away(value / grid) * grid)


def _percent_dims(src_w: int, src_h: int, percent: int) -> tuple[int, int]:
    return (
        max(1, round_half_away(src_w * percent / 100)),
        max(1, round_half_away(src_h * percent / 100)),
    )


def _exact_dims(src_w: int, src_h: int, scale: Exact) -> tuple[int, int]:
    ew, eh = scale.width, scale.height
    if ew is not None and eh is not None:
        return max(1, ew), max(1, eh)
    if ew is not None:
        return max(1, ew), max(1, round_half_away(src_h * ew / src_w))
    if eh is not None:
        return max(1, round_half_away(src_w * eh / src_h)), max(1, eh)
    # Both fields blank: reuse the percent value that was current when the
    # scale was built, not 100%.
    logger.debug(
        "exact mode without width/height, falling back to %d%%", scale.fallback_percent
    )
    return _percent_dims(src_w, src_h, scale.fallback_percent)


def plan(
    src_w: int,
    src_h: int,
    scale: ScaleConfig,
    snap_settings: SnapSettings = SnapSettings(),
) -> Dimensions:
    """Compute output dimensions for a source image.

    Parameters
    ----------
    src_w, src_h : int
        Source size in pixels (>0).
    scale : Percent | Exact
        How to derive the pre-snap size.
    snap_settings : SnapSettings
        Optional grid snapping applied after scaling.

    Returns
    -------
    Dimensions
        Final width/height (each >=1) and whether snapping changed either
        axis.
    """
    if src_w < 1 or src_h < 1:
        raise ValueError(f"source dimensions must be >= 1, got {src_w}x{src_h}")

    if isinstance(scale, Percent):
        w, h = _percent_dims(src_w, src_h, scale.value)
    elif isinstance(scale, Exact):
        w, h = _exact_dims(src_w, src_h, scale)
    else:
        raise TypeError(f"unsupported scale configuration: {scale!r}")

    if not snap_settings.active:
        return Dimensions(w, h, False)

    grid = snap_settings.grid_size
    sw, sh = snap(w, grid), snap(h, grid)
    snapped = sw != w or sh != h
    if snapped:
        logger.debug("snapped %dx%d to %dx%d on a %d grid", w, h, sw, sh, grid)
    return Dimensions(sw, sh, snapped)


def paired_dimension(
    src_w: int,
    src_h: int,
    *,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> tuple[int, int]:
    """Fill the partner field of an aspect-locked exact size.

    Exactly one of ``width`` / ``height`` is the value being edited; the
    other is derived from the source aspect ratio.
    """
    if (width is None) == (height is None):
        raise ValueError("pass exactly one of width or height")
    if src_w < 1 or src_h < 1:
        raise ValueError(f"source dimensions must be >= 1, got {src_w}x{src_h}")
    aspect = src_w / src_h
    if height is None:
        w = max(1, width)
        return w, max(1, round_half_away(w / aspect))
    else:
        h = max(1, height)
        return max(1, round_half_away(h * aspect)), h


__all__ = ["Dimensions", "round_half_away", "snap", "plan", "paired_dimension"]
