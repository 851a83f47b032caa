"""Utility functions for pixresize.

Modules:
- loader: Decode/encode between image files and RGBA pixel buffers.
- resize: Nearest-neighbor resampling to arbitrary sizes.
- upscale: Nearest-neighbor upscaling for integer factors.
- grid: Tile grid line layout and verification overlay rendering.
"""
from .loader import (
    build_output_filename,
    encode_image,
    load_image,
    output_format,
    save_image,
)
from .upscale import upscale_nearest
from .resize import resample, resize_nearest
from .grid import GridSpec, line_positions, render_overlay, stroke_segments

__all__ = [
    "build_output_filename",
    "encode_image",
    "load_image",
    "output_format",
    "save_image",
    "upscale_nearest",
    "resample",
    "resize_nearest",
    "GridSpec",
    "line_positions",
    "render_overlay",
    "stroke_segments",
]
