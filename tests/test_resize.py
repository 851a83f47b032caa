from __future__ import annotations

import numpy as np
import pytest

from pixresize.errors import InvalidDimension
from pixresize.types import PixelBuffer
from pixresize.utils.resize import resample, resize_nearest
from pixresize.utils.upscale import upscale_nearest


def _random_buffer(w: int, h: int, seed: int = 0) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    return PixelBuffer(rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8))


def _pixel_set(buf: PixelBuffer) -> set[bytes]:
    flat = buf.array.reshape(-1, 4)
    return {row.tobytes() for row in flat}


def test_identity_is_pixel_identical_copy():
    src = _random_buffer(13, 9)
    out = resample(src, 13, 9)
    assert out == src
    assert out.array is not src.array


def test_deterministic():
    src = _random_buffer(17, 11, seed=3)
    a = resample(src, 40, 5)
    b = resample(src, 40, 5)
    assert a.data == b.data


@pytest.mark.parametrize("dst", [(1, 1), (5, 3), (26, 18), (7, 40), (100, 100)])
def test_output_pixels_come_from_source(dst):
    src = _random_buffer(13, 9, seed=7)
    out = resample(src, *dst)
    assert (out.width, out.height) == dst
    assert len(out.data) == dst[0] * dst[1] * 4
    assert _pixel_set(out) <= _pixel_set(src)


def test_floor_mapping():
    # 3 distinct columns downscaled to 2: floor(x * 1.5) -> columns 0 and 1
    arr = np.zeros((1, 3, 4), dtype=np.uint8)
    arr[0, :, 0] = [10, 20, 30]
    arr[..., 3] = 255
    out = resample(PixelBuffer(arr), 2, 1)
    assert [out.pixel(x, 0)[0] for x in range(2)] == [10, 20]


def test_upscale_by_two_duplicates_blocks():
    arr = np.arange(2 * 2 * 4, dtype=np.uint8).reshape(2, 2, 4)
    out = resample(PixelBuffer(arr), 4, 4)
    expected = np.repeat(np.repeat(arr, 2, axis=0), 2, axis=1)
    assert np.array_equal(out.array, expected)
    assert np.array_equal(upscale_nearest(arr, 2), expected)


def test_non_integer_upscale_matches_reference_loop():
    src = _random_buffer(5, 3, seed=11)
    dst_w, dst_h = 12, 7
    out = resample(src, dst_w, dst_h)
    for y in range(dst_h):
        for x in range(dst_w):
            sx = int(np.floor(x * (src.width / dst_w)))
            sy = int(np.floor(y * (src.height / dst_h)))
            assert out.pixel(x, y) == src.pixel(sx, sy)


def test_alpha_is_copied_unchanged():
    arr = np.zeros((2, 2, 4), dtype=np.uint8)
    arr[0, 0] = (255, 0, 0, 0)
    arr[1, 1] = (0, 255, 0, 128)
    out = resample(PixelBuffer(arr), 6, 6)
    assert out.pixel(0, 0) == (255, 0, 0, 0)
    assert out.pixel(5, 5) == (0, 255, 0, 128)


def test_source_is_not_mutated():
    src = _random_buffer(8, 8, seed=5)
    before = src.data
    resample(src, 3, 3)
    resample(src, 30, 30)
    assert src.data == before
    with pytest.raises(ValueError):
        src.array[0, 0, 0] = 1


@pytest.mark.parametrize("dst", [(0, 5), (5, 0), (-1, 3)])
def test_rejects_non_positive_target(dst):
    with pytest.raises(InvalidDimension):
        resample(_random_buffer(4, 4), *dst)


def test_resize_nearest_validates_input():
    with pytest.raises(ValueError):
        resize_nearest(np.zeros((4, 4), dtype=np.uint8), 2, 2)
    with pytest.raises(ValueError):
        resize_nearest(np.zeros((4, 4, 3), dtype=np.float32), 2, 2)


def test_pixel_buffer_from_bytes_checks_length():
    raw = bytes(range(2 * 3 * 4))
    buf = PixelBuffer.from_bytes(2, 3, raw)
    assert (buf.width, buf.height) == (2, 3)
    assert buf.data == raw
    with pytest.raises(ValueError):
        PixelBuffer.from_bytes(2, 3, raw[:-1])
