"""Scale configuration values understood by the dimension planner.

A scale is either a :class:`Percent` of the source size or an :class:`Exact`
pixel target. Grid snapping is orthogonal and lives in :class:`SnapSettings`.
All of them are frozen so a batch can share one snapshot across threads.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

GRID_SIZES = (0, 8, 16, 32, 64, 128)
PERCENT_PRESETS = (10, 25, 33, 50, 66, 75, 100, 150, 200)
MIN_PERCENT = 1
MAX_PERCENT = 200


def _check_percent(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer")
    if not MIN_PERCENT <= value <= MAX_PERCENT:
        raise ValueError(f"{name} must be in {MIN_PERCENT}..{MAX_PERCENT}, got {value}")


@dataclass(frozen=True)
class Percent:
    """Scale both axes by ``value`` percent (1..200)."""

    value: int

    def __post_init__(self) -> None:
        _check_percent(self.value, "value")


@dataclass(frozen=True)
class Exact:
    """Target an exact pixel size.

    An unset axis is derived from the other through the source aspect ratio.
    When both are unset the planner falls back to ``fallback_percent``, the
    percent value that was current when this scale was built.

    ``lock_aspect`` only matters while editing (see
    :func:`pixresize.dims.paired_dimension`); the planner never overrides an
    explicitly set pair.
    """

    width: Optional[int] = None
    height: Optional[int] = None
    lock_aspect: bool = True
    fallback_percent: int = 100

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            v = getattr(self, name)
            if v is not None and (isinstance(v, bool) or not isinstance(v, int)):
                raise TypeError(f"{name} must be an integer or None")
        _check_percent(self.fallback_percent, "fallback_percent")


ScaleConfig = Union[Percent, Exact]


@dataclass(frozen=True)
class SnapSettings:
    """Grid snapping: ``grid_size`` 0 disables it and forces ``snap_to_grid`` off."""

    grid_size: int = 0
    snap_to_grid: bool = False

    def __post_init__(self) -> None:
        if self.grid_size not in GRID_SIZES:
            raise ValueError(f"grid_size must be one of {GRID_SIZES}, got {self.grid_size}")
        if self.grid_size == 0 and self.snap_to_grid:
            object.__setattr__(self, "snap_to_grid", False)

    @property
    def active(self) -> bool:
        return self.snap_to_grid and self.grid_size > 0


__all__ = [
    "GRID_SIZES",
    "PERCENT_PRESETS",
    "MIN_PERCENT",
    "MAX_PERCENT",
    "Percent",
    "Exact",
    "ScaleConfig",
    "SnapSettings",
]
