"""pixresize: nearest-neighbor resizing for pixel art.

For debug logging, enable with:
    import logging
    logging.basicConfig(level=logging.DEBUG)
"""
from __future__ import annotations

import logging

# Package logger - silent unless the application configures logging.
logging.getLogger("pixresize").addHandler(logging.NullHandler())

from .errors import (  # noqa: E402
    DecodeError,
    EncodeError,
    InvalidDimension,
    PixResizeError,
    UnsupportedInput,
)
from .types import PixelBuffer  # noqa: E402
from .scale import GRID_SIZES, PERCENT_PRESETS, Exact, Percent, SnapSettings  # noqa: E402
from .dims import Dimensions, paired_dimension, plan, round_half_away, snap  # noqa: E402
from .config import ResizeConfig, load_config, save_config  # noqa: E402
from .utils.resize import resample  # noqa: E402
from .utils.grid import GridSpec, line_positions, render_overlay  # noqa: E402
from .utils.loader import build_output_filename, load_image, save_image  # noqa: E402
from .batch import (  # noqa: E402
    ErrorKind,
    ResizeFailure,
    ResizeJob,
    ResizeSuccess,
    process_batch,
    resize_one,
    save_results,
)

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "EncodeError",
    "InvalidDimension",
    "PixResizeError",
    "UnsupportedInput",
    "PixelBuffer",
    "GRID_SIZES",
    "PERCENT_PRESETS",
    "Exact",
    "Percent",
    "SnapSettings",
    "Dimensions",
    "paired_dimension",
    "plan",
    "round_half_away",
    "snap",
    "ResizeConfig",
    "load_config",
    "save_config",
    "resample",
    "GridSpec",
    "line_positions",
    "render_overlay",
    "build_output_filename",
    "load_image",
    "save_image",
    "ErrorKind",
    "ResizeFailure",
    "ResizeJob",
    "ResizeSuccess",
    "process_batch",
    "resize_one",
    "save_results",
]
