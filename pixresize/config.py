"""Resize configuration surface and its JSON persistence.

:class:`ResizeConfig` mirrors the settings a user edits (mode, percent,
exact size, aspect lock, grid). It is frozen: edits go through
:meth:`ResizeConfig.with_changes`, which returns a new snapshot, so a batch
always works on a consistent copy even while the caller keeps editing.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .dims import Dimensions, paired_dimension, plan
from .scale import GRID_SIZES, Exact, Percent, ScaleConfig, SnapSettings, _check_percent

logger = logging.getLogger(__name__)

SCALE_MODES = ("percent", "pixels")

# camelCase keys used by saved settings from the browser version
_ALIASES = {
    "scaleMode": "scale_mode",
    "exactWidth": "exact_width",
    "exactHeight": "exact_height",
    "lockAspect": "lock_aspect",
    "gridSize": "grid_size",
    "snapToGrid": "snap_to_grid",
    "showGrid": "show_grid",
}


def _optional_size(value: Any, name: str) -> Optional[int]:
    # Blank fields come back as "" or None.
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an integer, blank or None")
    try:
        return max(1, int(value))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class ResizeConfig:
    """User-facing resize settings.

    Attributes
    ----------
    scale_mode : str
        ``"percent"`` or ``"pixels"``.
    scale : int
        Percent value (1..200). Also the fallback when pixel mode has both
        exact fields blank.
    exact_width, exact_height : int | None
        Exact target size; ``None`` means blank.
    lock_aspect : bool
        Editing one exact field fills the other from the source ratio.
    grid_size : int
        One of ``GRID_SIZES``; 0 disables the grid.
    snap_to_grid : bool
        Snap output size to ``grid_size``. Forced off when the grid is 0.
    show_grid : bool
        Whether callers should render the verification overlay.
    """

    scale_mode: str = "percent"
    scale: int = 50
    exact_width: Optional[int] = None
    exact_height: Optional[int] = None
    lock_aspect: bool = True
    grid_size: int = 32
    snap_to_grid: bool = False
    show_grid: bool = True

    def __post_init__(self) -> None:
        if self.scale_mode not in SCALE_MODES:
            raise ValueError(f"scale_mode must be one of {SCALE_MODES}, got {self.scale_mode!r}")
        _check_percent(self.scale, "scale")
        object.__setattr__(self, "exact_width", _optional_size(self.exact_width, "exact_width"))
        object.__setattr__(self, "exact_height", _optional_size(self.exact_height, "exact_height"))
        if self.grid_size not in GRID_SIZES:
            raise ValueError(f"grid_size must be one of {GRID_SIZES}, got {self.grid_size}")
        if self.grid_size == 0 and self.snap_to_grid:
            object.__setattr__(self, "snap_to_grid", False)

    def scale_config(self) -> ScaleConfig:
        if self.scale_mode == "percent":
            return Percent(self.scale)
        return Exact(
            width=self.exact_width,
            height=self.exact_height,
            lock_aspect=self.lock_aspect,
            fallback_percent=self.scale,
        )

    def snap_settings(self) -> SnapSettings:
        return SnapSettings(self.grid_size, self.snap_to_grid)

    def plan(self, src_w: int, src_h: int) -> Dimensions:
        return plan(src_w, src_h, self.scale_config(), self.snap_settings())

    def with_changes(self, **changes: Any) -> "ResizeConfig":
        return replace(self, **changes)

    def with_exact(
        self,
        src_w: int,
        src_h: int,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> "ResizeConfig":
        """Edit one exact field, filling the other when the aspect is locked.

        Exactly one of ``width`` or ``height`` must be given. Blank a field
        with :meth:`with_changes` instead.
        """
        if width is None and height is None:
            raise ValueError("pass width or height")
        if width is not None and height is not None:
            raise ValueError("pass only one of width or height")
        if not self.lock_aspect:
            if width is not None:
                return replace(self, exact_width=width)
            return replace(self, exact_height=height)
        w, h = paired_dimension(src_w, src_h, width=width, height=height)
        return replace(self, exact_width=w, exact_height=h)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResizeConfig":
        """Build a config from a mapping, falling back to defaults per key.

        Both snake_case and the camelCase keys of the browser version are
        accepted. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
            else:
                logger.debug("ignoring unknown config key %r", key)
        return cls(**kwargs)


def load_config(path: Union[str, Path]) -> ResizeConfig:
    """Load settings from a JSON file, returning defaults if it does not exist.

    Raises
    ------
    ValueError
        If the file is not valid JSON or holds invalid values.
    """
    p = Path(path)
    if not p.exists():
        logger.debug("config file %s not found, using defaults", p)
        return ResizeConfig()
    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not parse config file {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {p} must hold a JSON object")
    config = ResizeConfig.from_dict(data)
    logger.info("loaded configuration from %s", p)
    return config


def save_config(config: ResizeConfig, path: Union[str, Path]) -> None:
    p = Path(path)
    with open(p, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)


__all__ = ["SCALE_MODES", "ResizeConfig", "load_config", "save_config"]
