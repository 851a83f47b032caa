from __future__ import annotations

import json

import numpy as np
import pytest
from PIL import Image

from pixresize.main import build_config, main, parse_args


def _write_png(path, w, h):
    arr = np.zeros((h, w, 4), dtype=np.uint8)
    arr[..., 0] = np.arange(w, dtype=np.uint8)[None, :]
    arr[..., 3] = 255
    Image.fromarray(arr).save(path)


def test_cli_resizes_and_names_outputs(tmp_path, capsys):
    src = tmp_path / "hero.png"
    _write_png(src, 64, 32)
    out = tmp_path / "out"
    rc = main(["-i", str(src), "-o", str(out), "--scale", "50"])
    assert rc == 0
    result = out / "hero_32x16.png"
    assert result.exists()
    with Image.open(result) as im:
        assert im.size == (32, 16)
    assert "hero_32x16.png" in capsys.readouterr().out


def test_cli_snap_and_preview(tmp_path, capsys):
    src = tmp_path / "tile.png"
    _write_png(src, 50, 50)
    out = tmp_path / "out"
    rc = main(
        ["-i", str(src), "-o", str(out), "--scale", "60", "--grid", "16", "--snap",
         "--preview-grid", "--zoom", "2", "--offset", "-5", "3"]
    )
    assert rc == 0
    assert (out / "tile_32x32.png").exists()
    with Image.open(out / "tile_32x32_grid.png") as im:
        assert im.size == (64, 64)
    assert "snapped" in capsys.readouterr().out


def test_cli_reports_failures(tmp_path, capsys):
    good = tmp_path / "good.png"
    _write_png(good, 4, 4)
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"garbage")
    out = tmp_path / "out"
    rc = main(["-i", str(good), str(bad), "-o", str(out), "--scale", "200"])
    assert rc == 1
    assert (out / "good_8x8.png").exists()
    text = capsys.readouterr().out
    assert "error  bad.png" in text


def test_cli_argument_errors(tmp_path):
    src = tmp_path / "a.png"
    _write_png(src, 4, 4)
    assert main(["-i", str(src), "-o", str(tmp_path), "--scale", "0"]) == 2
    assert main(["-i", str(src), "-o", str(tmp_path), "--scale", "50", "--width", "3"]) == 2
    assert main(["-i", str(src), "-o", str(tmp_path), "--config", str(tmp_path / "x.json")]) == 2


def test_config_file_and_overrides(tmp_path):
    cfg_path = tmp_path / "settings.json"
    cfg_path.write_text(json.dumps({"scaleMode": "percent", "scale": 25, "gridSize": 8}))
    ns = parse_args(["-i", "x.png", "-o", "out", "--config", str(cfg_path), "--width", "40"])
    cfg = build_config(ns)
    assert cfg.scale_mode == "pixels"
    assert cfg.exact_width == 40
    assert cfg.exact_height is None
    assert cfg.scale == 25
    assert cfg.grid_size == 8


def test_aspect_lock_flag_is_not_accepted():
    with pytest.raises(SystemExit):
        parse_args(["-i", "x.png", "-o", "out", "--no-lock-aspect"])
