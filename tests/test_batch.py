from __future__ import annotations

import io
import struct
import threading
import zlib

import numpy as np
from PIL import Image

from pixresize.batch import (
    ErrorKind,
    ResizeFailure,
    ResizeJob,
    ResizeSuccess,
    process_batch,
    resize_one,
    save_results,
)
from pixresize.config import ResizeConfig
from pixresize.utils.loader import load_image


def _png(w: int, h: int, seed: int = 0) -> bytes:
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    out = io.BytesIO()
    Image.fromarray(arr).save(out, format="PNG")
    return out.getvalue()


def _gif(w: int, h: int) -> bytes:
    im = Image.new("P", (w, h), 3)
    out = io.BytesIO()
    im.save(out, format="GIF")
    return out.getvalue()


def _oversized_png_header(w: int, h: int) -> bytes:
    def chunk(kind: bytes, data: bytes) -> bytes:
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))

    ihdr = struct.pack(">IIBBBBB", w, h, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", ihdr)
        + chunk(b"IDAT", zlib.compress(b""))
        + chunk(b"IEND", b"")
    )


def test_resize_one_percent():
    r = resize_one(ResizeJob("hero.png", _png(64, 32)), ResizeConfig(scale=50))
    assert isinstance(r, ResizeSuccess)
    assert r.ok
    assert (r.dims.width, r.dims.height, r.dims.snapped) == (32, 16, False)
    assert (r.buffer.width, r.buffer.height) == (32, 16)
    assert r.filename == "hero_32x16.png"
    assert r.fmt == "PNG"
    decoded, fmt = load_image(r.encoded)
    assert fmt == "PNG"
    assert decoded == r.buffer


def test_gif_source_is_encoded_as_png_under_original_name():
    r = resize_one(ResizeJob("tiles.gif", _gif(10, 10)), ResizeConfig(scale=200))
    assert isinstance(r, ResizeSuccess)
    assert r.fmt == "PNG"
    assert r.filename == "tiles_20x20.gif"
    assert r.encoded.startswith(b"\x89PNG")


def test_snap_is_reported():
    cfg = ResizeConfig(scale=60, grid_size=16, snap_to_grid=True)
    r = resize_one(ResizeJob("a.png", _png(50, 50)), cfg)
    assert isinstance(r, ResizeSuccess)
    assert (r.dims.width, r.dims.height, r.dims.snapped) == (32, 32, True)


def test_failures_are_per_item_and_ordered():
    jobs = [
        ResizeJob("good1.png", _png(8, 8, 1)),
        ResizeJob("junk.png", b"not an image"),
        ResizeJob("good2.png", _png(9, 5, 2)),
    ]
    results = process_batch(jobs, ResizeConfig(scale=100), max_workers=2)
    assert [r.name for r in results] == ["good1.png", "junk.png", "good2.png"]
    assert [r.ok for r in results] == [True, False, True]
    bad = results[1]
    assert isinstance(bad, ResizeFailure)
    assert bad.kind is ErrorKind.UNSUPPORTED_INPUT
    assert bad.message


def test_decode_error_kind():
    raw = _png(64, 64, 4)
    r = resize_one(ResizeJob("cut.png", raw[: len(raw) // 2]), ResizeConfig())
    assert isinstance(r, ResizeFailure)
    assert r.kind is ErrorKind.DECODE_ERROR


def test_cancel_discards_unstarted_items():
    cancel = threading.Event()
    cancel.set()
    jobs = [ResizeJob(f"{i}.png", _png(4, 4, i)) for i in range(3)]
    results = process_batch(jobs, ResizeConfig(), cancel=cancel)
    assert all(isinstance(r, ResizeFailure) and r.kind is ErrorKind.CANCELLED for r in results)


def test_empty_batch():
    assert process_batch([], ResizeConfig()) == []


def test_batch_output_matches_single_calls():
    cfg = ResizeConfig(scale_mode="pixels", exact_width=33)
    jobs = [ResizeJob(f"{i}.png", _png(100, 50, i)) for i in range(4)]
    batch = process_batch(jobs, cfg, max_workers=4)
    single = [resize_one(j, cfg) for j in jobs]
    for a, b in zip(batch, single):
        assert isinstance(a, ResizeSuccess) and isinstance(b, ResizeSuccess)
        assert (a.dims.width, a.dims.height) == (33, 17)
        assert a.buffer == b.buffer


def test_save_results_skips_failures(tmp_path):
    results = process_batch(
        [ResizeJob("ok.png", _png(4, 4)), ResizeJob("bad.png", b"")],
        ResizeConfig(scale=200),
    )
    written = save_results(results, tmp_path / "out")
    assert [p.name for p in written] == ["ok_8x8.png"]
    assert written[0].read_bytes().startswith(b"\x89PNG")


def test_job_from_path(tmp_path):
    p = tmp_path / "sprite.png"
    p.write_bytes(_png(6, 6))
    job = ResizeJob.from_path(p)
    assert job.name == "sprite.png"
    r = resize_one(job, ResizeConfig(scale=50))
    assert isinstance(r, ResizeSuccess)
    assert r.filename == "sprite_3x3.png"


def test_oversized_image_fails_alone():
    jobs = [
        ResizeJob("good.png", _png(4, 4)),
        ResizeJob("huge.png", _oversized_png_header(20000, 20000)),
    ]
    results = process_batch(jobs, ResizeConfig(scale=100), max_workers=2)
    assert [r.ok for r in results] == [True, False]
    bad = results[1]
    assert isinstance(bad, ResizeFailure)
    assert bad.kind is ErrorKind.UNSUPPORTED_INPUT
    assert bad.message
