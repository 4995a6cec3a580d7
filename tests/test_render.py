# tests/test_render.py
"""
Rendering writes valid PNGs at the canvas size (times scale).
"""

from __future__ import annotations

import warnings

from PIL import Image

from glyphcloud.core.layout import run_layout
from glyphcloud.core.render import cloud_to_png_bytes, draw_cloud, render_cloud, render_debug
from glyphcloud.core.types import StyleConfig, WordItem


def _layout(style: StyleConfig):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        return run_layout([WordItem("cloud", 5), WordItem("grid", 3), WordItem("mask", 1)], style)


def test_render_cloud_png(tmp_path) -> None:
    style = StyleConfig(canvas_width=240, canvas_height=160, background_color="#FFFFFF")
    summary = _layout(style)
    path = render_cloud(summary.results, style, tmp_path / "cloud.png", scale=2)
    assert path.exists()
    with Image.open(path) as img:
        assert img.size == (480, 320)


def test_draw_cloud_transparent_background_has_ink() -> None:
    style = StyleConfig(canvas_width=200, canvas_height=120)
    summary = _layout(style)
    img = draw_cloud(summary.results, style)
    assert img.mode == "RGBA"
    assert img.getbbox() is not None
    assert draw_cloud([], style).getbbox() is None


def test_png_bytes() -> None:
    style = StyleConfig(canvas_width=100, canvas_height=80)
    data = cloud_to_png_bytes([], style)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_debug_png(tmp_path) -> None:
    style = StyleConfig(canvas_width=200, canvas_height=150, rotate=True)
    summary = _layout(style)
    path = render_debug(summary.results, style, tmp_path / "debug.png", occupancy=summary.occupancy)
    assert path.exists() and path.stat().st_size > 0
    empty = render_debug([], style, tmp_path / "empty.png")
    assert empty.exists()
