# glyphcloud/core/layout.py
"""
Word-cloud layout orchestration. Sorts words by weight (largest first), sizes them,
assigns colors, builds the grid (and mask), then places one word at a time.
Configuration problems give an empty result, never an exception.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from glyphcloud.core.config import SEED
from glyphcloud.core.error_codes import EMPTY_WORDS, INVALID_STYLE, MASK_LOAD_FAILED, MEASURE_FAILED, NO_FIT
from glyphcloud.core.grid import OccupancyGrid
from glyphcloud.core.mask import MaskBuilder, mask_target_size
from glyphcloud.core.palette import assign_colors, resolve_palette
from glyphcloud.core.placer import place_word
from glyphcloud.core.spiral import SpiralSearch
from glyphcloud.core.text_metrics import GlyphMeasurer, PillowMeasurer
from glyphcloud.core.types import LayoutSummary, PlacedWord, StyleConfig, WordItem

logger = logging.getLogger(__name__)


def font_size_for_weight(weight: float, max_weight: float, min_font_size: int, max_font_size: int) -> int:
    """floor(max(weight * max_font / max_weight, min_font)). Low weights cluster at min_font."""
    if max_weight <= 0:
        return int(min_font_size)
    size = weight * (max_font_size / max_weight)
    if size < min_font_size:
        size = min_font_size
    return int(math.floor(size))


def sort_words(words: list[WordItem]) -> list[WordItem]:
    """Descending effective weight; ties keep input order."""
    return sorted(words, key=lambda w: -w.effective_weight)


def validate_style(style: StyleConfig) -> list[str]:
    """Human-readable problems with style; empty list when usable."""
    problems: list[str] = []
    if style.canvas_width <= 0 or style.canvas_height <= 0:
        problems.append(f"canvas must be positive, got {style.canvas_width}x{style.canvas_height}")
    if style.grid_size <= 0:
        problems.append(f"grid_size must be positive, got {style.grid_size}")
    if style.min_font_size < 1:
        problems.append(f"min_font_size must be >= 1, got {style.min_font_size}")
    if style.max_font_size < style.min_font_size:
        problems.append(f"max_font_size {style.max_font_size} < min_font_size {style.min_font_size}")
    return problems


class LayoutEngine:
    """
    Owns one grid per layout() call. Measurer and mask builder are injectable;
    rotation randomness comes from a seedable numpy Generator.
    """

    def __init__(
        self,
        measurer: GlyphMeasurer | None = None,
        mask_builder: MaskBuilder | None = None,
        seed: int | None = SEED,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.measurer = measurer if measurer is not None else PillowMeasurer()
        self.mask_builder = mask_builder if mask_builder is not None else MaskBuilder()
        self.seed = seed
        self._rng = rng

    def _new_rng(self) -> np.random.Generator:
        if self._rng is not None:
            return self._rng
        return np.random.default_rng(self.seed)

    def layout(self, words: list[WordItem], style: StyleConfig) -> list[PlacedWord]:
        """Placed words in placement (sorted) order. Dropped words are absent."""
        return self.layout_with_summary(words, style).results

    def layout_with_summary(self, words: list[WordItem], style: StyleConfig) -> LayoutSummary:
        if not words:
            return LayoutSummary(results=[], n_words=0, placed_count=0, warnings=[EMPTY_WORDS])

        problems = validate_style(style)
        if problems:
            logger.error(f"Invalid style ({INVALID_STYLE}): {'; '.join(problems)}")
            return LayoutSummary(results=[], n_words=len(words), placed_count=0, warnings=[INVALID_STYLE])

        warnings: list[str] = []
        ngx, ngy = style.grid_dims
        mask_applied = False
        if style.mask is not None:
            region = self.mask_builder.build(style.mask, mask_target_size(style))
            if region is not None:
                grid = OccupancyGrid(ngx, ngy, default_free=False)
                grid.apply_mask(region, style.canvas_width, style.canvas_height, style.grid_size)
                mask_applied = True
            else:
                warnings.append(MASK_LOAD_FAILED)
                grid = OccupancyGrid(ngx, ngy, default_free=True)
        else:
            grid = OccupancyGrid(ngx, ngy, default_free=True)

        max_weight = max(w.effective_weight for w in words)
        ordered = sort_words(words)
        colors = assign_colors(ordered, resolve_palette(style.colors, style.color_theme))
        spiral = SpiralSearch(ngx, ngy)
        rng = self._new_rng()

        results: list[PlacedWord] = []
        dropped: list[str] = []
        measure_failures: list[str] = []
        for word, color in zip(ordered, colors):
            size = font_size_for_weight(word.effective_weight, max_weight, style.min_font_size, style.max_font_size)
            placed = place_word(
                word, size, color, grid, spiral, style, self.measurer, rng, measure_failures=measure_failures
            )
            if placed is None:
                dropped.append(word.text)
                continue
            results.append(placed)

        if measure_failures:
            warnings.append(MEASURE_FAILED)
        if len(dropped) > len(measure_failures):
            warnings.append(NO_FIT)
        if dropped:
            logger.warning(f"{len(dropped)} of {len(words)} words not placed: {dropped[:10]}")
        logger.info(
            f"Layout placed {len(results)}/{len(words)} words on {ngx}x{ngy} grid"
            f" ({grid.occupied_fraction:.0%} of cells occupied)"
        )
        return LayoutSummary(
            results=results,
            n_words=len(words),
            placed_count=len(results),
            dropped=dropped,
            mask_applied=mask_applied,
            warnings=warnings,
            occupancy=grid.free.copy(),
        )


def run_layout(
    words: list[WordItem],
    style: StyleConfig,
    measurer: GlyphMeasurer | None = None,
    seed: int | None = SEED,
) -> LayoutSummary:
    """One-shot layout with a fresh engine."""
    return LayoutEngine(measurer=measurer, seed=seed).layout_with_summary(words, style)
