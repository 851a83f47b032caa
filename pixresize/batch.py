"""Resize many images with one configuration snapshot.

Each item succeeds or fails on its own: failures come back as
:class:`ResizeFailure` values in the result list instead of exceptions, so
one bad file never unwinds the rest of the batch. Items run concurrently on
a thread pool; they share nothing but the frozen :class:`ResizeConfig`.
"""
from __future__ import annotations

import enum
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional, Sequence, Union

from .config import ResizeConfig
from .dims import Dimensions
from .errors import DecodeError, EncodeError, UnsupportedInput
from .types import PixelBuffer
from .utils.loader import (
    build_output_filename,
    encode_image,
    load_image,
    output_format,
)
from .utils.resize import resample

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    UNSUPPORTED_INPUT = "unsupported_input"
    DECODE_ERROR = "decode_error"
    ENCODE_ERROR = "encode_error"
    CANCELLED = "cancelled"


_KINDS = (
    (UnsupportedInput, ErrorKind.UNSUPPORTED_INPUT),
    (DecodeError, ErrorKind.DECODE_ERROR),
    (EncodeError, ErrorKind.ENCODE_ERROR),
)


@dataclass(frozen=True)
class ResizeJob:
    """One input: a display name (used for the output file name) and its data."""

    name: str
    source: Union[str, Path, bytes]

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ResizeJob":
        p = Path(path)
        return cls(p.name, p)


@dataclass(frozen=True)
class ResizeSuccess:
    name: str
    buffer: PixelBuffer
    dims: Dimensions
    fmt: str
    filename: str
    encoded: bytes

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ResizeFailure:
    name: str
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


ResizeResult = Union[ResizeSuccess, ResizeFailure]


def resize_one(job: ResizeJob, config: ResizeConfig) -> ResizeResult:
    """Decode, plan, resample and encode one image.

    Errors from the taxonomy in :mod:`pixresize.errors` are returned as a
    :class:`ResizeFailure`; anything else propagates.
    """
    try:
        src, src_fmt = load_image(job.source)
        dims = config.plan(src.width, src.height)
        out = resample(src, dims.width, dims.height)
        fmt = output_format(src_fmt)
        encoded = encode_image(out, fmt)
    except (UnsupportedInput, DecodeError, EncodeError) as e:
        kind = next(k for exc, k in _KINDS if isinstance(e, exc))
        logger.warning("%s: %s", job.name, e)
        return ResizeFailure(job.name, kind, str(e))

    filename = build_output_filename(job.name, dims.width, dims.height)
    logger.info(
        "%s: %dx%d -> %dx%d%s",
        job.name,
        src.width,
        src.height,
        dims.width,
        dims.height,
        " (snapped)" if dims.snapped else "",
    )
    return ResizeSuccess(job.name, out, dims, fmt, filename, encoded)


def process_batch(
    jobs: Sequence[ResizeJob],
    config: ResizeConfig,
    max_workers: Optional[int] = None,
    cancel: Optional[threading.Event] = None,
) -> list[ResizeResult]:
    """Resize every job and return one result per job, in job order.

    Parameters
    ----------
    jobs : Sequence[ResizeJob]
        Inputs to process.
    config : ResizeConfig
        Settings; a private copy is taken before any work starts.
    max_workers : int | None
        Thread pool size (``None`` lets the executor decide).
    cancel : threading.Event | None
        When set, jobs that have not started yet are reported as
        ``ErrorKind.CANCELLED``. Jobs already running finish normally.

    Returns
    -------
    list
        ``ResizeSuccess`` or ``ResizeFailure`` per job. Never short-circuits.
    """
    snapshot = replace(config)

    def run(job: ResizeJob) -> ResizeResult:
        if cancel is not None and cancel.is_set():
            return ResizeFailure(job.name, ErrorKind.CANCELLED, "cancelled before start")
        return resize_one(job, snapshot)

    if not jobs:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        results = list(pool.map(run, jobs))

    failed = sum(1 for r in results if not r.ok)
    logger.info("batch finished: %d ok, %d failed", len(results) - failed, failed)
    return results


def save_results(
    results: Sequence[ResizeResult], outdir: Union[str, Path]
) -> list[Path]:
    """Write each successful result into ``outdir`` under its derived name."""
    out = Path(outdir)
    out.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for r in results:
        if not isinstance(r, ResizeSuccess):
            continue
        p = out / r.filename
        p.write_bytes(r.encoded)
        written.append(p)
    return written


__all__ = [
    "ErrorKind",
    "ResizeJob",
    "ResizeSuccess",
    "ResizeFailure",
    "ResizeResult",
    "resize_one",
    "process_batch",
    "save_results",
]
