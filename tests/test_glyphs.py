# tests/test_glyphs.py
"""
Glyph footprints: rotated extent, padding, downsampling to cells, ink box.
"""

from __future__ import annotations

import numpy as np
import pytest

from glyphcloud.core.error_codes import GlyphMeasureError
from glyphcloud.core.glyphs import build_glyph_mask, rotate_bitmap, rotated_extent
from glyphcloud.core.types import GlyphRun


def _box_run(w: int, h: int) -> GlyphRun:
    return GlyphRun(pixel_width=w, pixel_height=h, occupied=np.ones((h, w), dtype=bool))


def test_rotated_extent() -> None:
    assert rotated_extent(36, 72, 0) == (36, 72)
    assert rotated_extent(36, 72, 90) == (72, 36)
    assert rotated_extent(10, 10, 45) == (15, 15)  # 14.14 rounded up


def test_unrotated_footprint_and_cells() -> None:
    mask = build_glyph_mask(_box_run(36, 72), 0.0, grid_size=4, padding_px=10)
    assert (mask.pixel_width, mask.pixel_height) == (46, 82)
    assert (mask.grid_width, mask.grid_height) == (12, 21)
    assert mask.ink_box == (5, 5, 41, 77)
    # ink spans pixels 5..40 x 5..76 -> cells 1..10 x 1..19
    assert mask.cell_count == 10 * 19
    assert mask.offsets[:, 0].min() == 1 and mask.offsets[:, 0].max() == 10
    assert mask.offsets[:, 1].min() == 1 and mask.offsets[:, 1].max() == 19


def test_quarter_turn_swaps_axes() -> None:
    mask = build_glyph_mask(_box_run(36, 72), 90.0, grid_size=4, padding_px=10)
    assert (mask.pixel_width, mask.pixel_height) == (82, 46)
    assert mask.ink_box == (5, 5, 77, 41)


def test_cell_occupied_if_any_pixel_inked() -> None:
    occupied = np.zeros((8, 8), dtype=bool)
    occupied[0, 0] = True
    run = GlyphRun(pixel_width=8, pixel_height=8, occupied=occupied)
    mask = build_glyph_mask(run, 0.0, grid_size=4, padding_px=0)
    assert mask.offsets.tolist() == [[0, 0]]


def test_rotate_bitmap_keeps_ink() -> None:
    occupied = np.zeros((4, 10), dtype=bool)
    occupied[:, :3] = True  # left end inked
    rotated = rotate_bitmap(occupied, 90.0)
    assert rotated.shape == (10, 4)
    # clockwise on screen: left end moves to the top
    assert rotated[:3, :].all()
    assert not rotated[3:, :].any()


def test_no_ink_raises() -> None:
    run = GlyphRun(pixel_width=5, pixel_height=5, occupied=np.zeros((5, 5), dtype=bool))
    with pytest.raises(GlyphMeasureError):
        build_glyph_mask(run, 0.0, grid_size=4)


def test_ink_box_cells_all_occupied() -> None:
    # L shape: only the left column and bottom row inked
    occupied = np.zeros((16, 16), dtype=bool)
    occupied[:, 0] = True
    occupied[15, :] = True
    run = GlyphRun(pixel_width=16, pixel_height=16, occupied=occupied)
    mask = build_glyph_mask(run, 0.0, grid_size=4, padding_px=0)
    assert mask.ink_box == (0, 0, 16, 16)
    assert mask.cell_count == 16
