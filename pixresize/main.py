"""Command-line entry point for pixresize.

This tool loads one or more pixel-art images, computes the target size
(percent or exact pixels, optionally snapped to a tile grid), resamples
them with nearest-neighbor so every source pixel block stays crisp, and
saves the results as ``{name}_{width}x{height}{ext}``.

All processing occurs on NumPy arrays; Pillow is used only for
loading, saving and drawing verification previews.

Usage example:
    pixresize -i sprite.png tiles.gif -o out --scale 50 --grid 16 --snap --preview-grid
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .batch import ResizeJob, ResizeSuccess, process_batch, save_results
from .config import ResizeConfig, load_config
from .scale import GRID_SIZES, MAX_PERCENT, MIN_PERCENT
from .utils.grid import GridSpec, render_overlay


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="pixresize",
        description=(
            "Resize pixel art with nearest-neighbor sampling, optionally "
            "snapping the output size to a tile grid."
        ),
    )

    parser.add_argument("-i", "--input", nargs="+", required=True, help="Input image file(s)")
    parser.add_argument("-o", "--outdir", required=True, help="Directory for resized images")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON settings file; command-line flags override its values.",
    )

    parser.add_argument(
        "--scale",
        type=int,
        default=None,
        help=f"Percent scale ({MIN_PERCENT}..{MAX_PERCENT}). Selects percent mode.",
    )
    parser.add_argument("--width", type=int, default=None, help="Exact output width (pixels mode)")
    parser.add_argument("--height", type=int, default=None, help="Exact output height (pixels mode)")
    parser.add_argument(
        "--grid",
        type=int,
        default=None,
        choices=GRID_SIZES,
        help="Tile grid cell size; 0 disables the grid.",
    )
    parser.add_argument("--snap", action="store_true", help="Snap output size to the grid")
    parser.add_argument(
        "--preview-grid",
        action="store_true",
        help="Also write a *_grid.png preview with the tile grid drawn over each result.",
    )
    parser.add_argument("--zoom", type=int, default=1, help="Magnification of grid previews (>=1)")
    parser.add_argument(
        "--offset",
        type=int,
        nargs=2,
        default=(0, 0),
        metavar=("X", "Y"),
        help="Grid offset in image pixels for previews.",
    )
    parser.add_argument("--workers", type=int, default=None, help="Parallel worker threads")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values and raise ValueError for invalid inputs.

    Parameters
    ----------
    ns : argparse.Namespace
        Parsed CLI arguments.
    """
    if ns.scale is not None and not MIN_PERCENT <= ns.scale <= MAX_PERCENT:
        raise ValueError(f"--scale must be in {MIN_PERCENT}..{MAX_PERCENT}")
    if ns.scale is not None and (ns.width is not None or ns.height is not None):
        raise ValueError("--scale cannot be combined with --width/--height")
    for flag in ("width", "height"):
        v = getattr(ns, flag)
        if v is not None and v < 1:
            raise ValueError(f"--{flag} must be an integer >= 1")
    if ns.zoom < 1:
        raise ValueError("--zoom must be an integer >= 1")
    if ns.workers is not None and ns.workers < 1:
        raise ValueError("--workers must be an integer >= 1")
    if ns.config is not None and not Path(ns.config).exists():
        raise ValueError(f"Config file not found: {ns.config}")


def build_config(ns: argparse.Namespace) -> ResizeConfig:
    """Merge the optional config file with command-line overrides."""
    config = load_config(ns.config) if ns.config else ResizeConfig()
    changes: dict = {}
    if ns.scale is not None:
        changes.update(scale_mode="percent", scale=ns.scale)
    if ns.width is not None or ns.height is not None:
        changes.update(scale_mode="pixels", exact_width=ns.width, exact_height=ns.height)
    if ns.grid is not None:
        changes["grid_size"] = ns.grid
    if ns.snap:
        changes["snap_to_grid"] = True
    return config.with_changes(**changes) if changes else config


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        0 if every image was resized, 1 if any failed, 2 for argument errors.
    """
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        validate_args(args)
        config = build_config(args)
    except (TypeError, ValueError) as e:
        print(f"Argument error: {e}")
        return 2

    jobs = [ResizeJob.from_path(p) for p in args.input]
    results = process_batch(jobs, config, max_workers=args.workers)
    outdir = Path(args.outdir)
    save_results(results, outdir)

    for r in results:
        if not isinstance(r, ResizeSuccess):
            print(f"error  {r.name}: {r.message}")
            continue
        note = f" (snapped to {config.grid_size}px grid)" if r.dims.snapped else ""
        print(f"ok     {r.name} -> {r.filename}{note}")
        if args.preview_grid and config.grid_size > 0:
            grid = GridSpec(config.grid_size, args.offset[0], args.offset[1])
            stem = Path(r.filename).stem
            render_overlay(r.buffer, grid, zoom=args.zoom).save(outdir / f"{stem}_grid.png")

    failed = sum(1 for r in results if not r.ok)
    return 1 if failed else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
