# glyphcloud/core/placer.py
"""
Per-word placement: pick rotation, measure, walk the spiral for the first free
spot, commit it to the grid; otherwise shrink the font and retry.
Failures are per word (None), never layout-wide.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from glyphcloud.core.config import GLYPH_PADDING_PX, GLYPHCLOUD_DEBUG, SHRINK_FACTOR
from glyphcloud.core.glyphs import build_glyph_mask
from glyphcloud.core.grid import OccupancyGrid
from glyphcloud.core.spiral import SpiralSearch
from glyphcloud.core.text_metrics import GlyphMeasurer
from glyphcloud.core.types import GlyphMask, PlacedWord, StyleConfig, WordItem

logger = logging.getLogger(__name__)


def choose_rotation(style: StyleConfig, rng: np.random.Generator) -> float:
    """0 when rotation is off; otherwise a uniform pick from rotate_angles."""
    if not style.rotate or not style.rotate_angles:
        return 0.0
    return float(style.rotate_angles[int(rng.integers(len(style.rotate_angles)))])


def next_font_size(font_size: int, min_font_size: int, factor: float = SHRINK_FACTOR) -> int:
    return max(int(math.floor(font_size * factor)), int(min_font_size))


def shrink_attempt_limit(max_font_size: int, min_font_size: int, factor: float = SHRINK_FACTOR) -> int:
    """Upper bound on sizes tried: ceil(log(min/max) / log(factor)) + 1."""
    if min_font_size <= 0 or max_font_size <= min_font_size:
        return 1
    return int(math.ceil(math.log(min_font_size / max_font_size) / math.log(factor))) + 1


def find_position(
    glyph: GlyphMask,
    grid: OccupancyGrid,
    spiral: SpiralSearch,
) -> tuple[int, int] | None:
    """First candidate origin (grid cells) where the glyph fits, or None."""
    for px, py in spiral.candidates():
        gx = int(math.floor(px - glyph.grid_width / 2.0))
        gy = int(math.floor(py - glyph.grid_height / 2.0))
        if grid.can_fit(gx, gy, glyph.offsets):
            return gx, gy
    return None


def _placed_word(
    word: WordItem,
    color: str,
    font_size: int,
    rotation: float,
    glyph: GlyphMask,
    origin: tuple[int, int],
    grid_size: int,
) -> PlacedWord:
    left0 = origin[0] * grid_size
    top0 = origin[1] * grid_size
    x0, y0, x1, y1 = glyph.ink_box
    return PlacedWord(
        text=word.text,
        weight=word.weight,
        color=color,
        center_x=left0 + glyph.pixel_width / 2.0,
        center_y=top0 + glyph.pixel_height / 2.0,
        pixel_width=x1 - x0,
        pixel_height=y1 - y0,
        font_size=font_size,
        rotation_deg=rotation,
        left=float(left0 + x0),
        top=float(top0 + y0),
    )


def place_word(
    word: WordItem,
    font_size: int,
    color: str,
    grid: OccupancyGrid,
    spiral: SpiralSearch,
    style: StyleConfig,
    measurer: GlyphMeasurer,
    rng: np.random.Generator,
    padding_px: int = GLYPH_PADDING_PX,
    measure_failures: list[str] | None = None,
) -> PlacedWord | None:
    """
    Place one word, shrinking on failure when style.shrink_to_fit is set.
    Rotation is re-picked on every attempt, so a retry may also turn the word.
    Marks the grid only on success. Returns None when the word is dropped;
    words dropped because measuring failed are also appended to measure_failures.
    """
    size = int(font_size)
    attempts = shrink_attempt_limit(max(size, style.max_font_size), style.min_font_size)

    for _ in range(attempts):
        rotation = choose_rotation(style, rng)
        try:
            run = measurer.measure(word.text, style.font_family, style.font_weight, size)
            glyph = build_glyph_mask(run, rotation, style.grid_size, padding_px=padding_px)
        except Exception as e:
            # measurer is host-supplied; any error costs only this word
            logger.warning(f"Measure failed for {word.text!r} at {size}px: {type(e).__name__}: {e}")
            if measure_failures is not None:
                measure_failures.append(word.text)
            return None

        origin = find_position(glyph, grid, spiral)
        if origin is not None:
            grid.mark(origin[0], origin[1], glyph.offsets)
            if GLYPHCLOUD_DEBUG:
                logger.debug(f"Placed {word.text!r} at cell {origin} size={size} rot={rotation}")
            return _placed_word(word, color, size, rotation, glyph, origin, style.grid_size)

        if GLYPHCLOUD_DEBUG:
            logger.debug(f"No fit for {word.text!r} at {size}px ({glyph.cell_count} cells)")
        if not style.shrink_to_fit or size <= style.min_font_size:
            break
        size = next_font_size(size, style.min_font_size)

    return None
