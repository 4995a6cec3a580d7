# tests/conftest.py
"""
Shared fixtures: a deterministic rectangular measurer so layout geometry is exact
and independent of installed fonts.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from glyphcloud.core.types import GlyphRun, StyleConfig


class BoxMeasurer:
    """Every glyph run is a solid box: 0.6 * size per character wide, 1.2 * size tall."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, int]] = []
        self.fail_on = fail_on or set()

    def measure(self, text: str, font_family: str, font_weight: str, font_size_px: int) -> GlyphRun:
        self.calls.append((text, int(font_size_px)))
        if text in self.fail_on:
            raise RuntimeError(f"cannot shape {text!r}")
        w = max(1, math.ceil(0.6 * font_size_px * len(text)))
        h = max(1, math.ceil(1.2 * font_size_px))
        return GlyphRun(pixel_width=w, pixel_height=h, occupied=np.ones((h, w), dtype=bool))


class SpyMaskBuilder:
    def __init__(self) -> None:
        self.calls: list[tuple[object, int]] = []

    def build(self, mask_spec, target_size):
        self.calls.append((mask_spec, target_size))
        return None


@pytest.fixture
def box_measurer() -> BoxMeasurer:
    return BoxMeasurer()


@pytest.fixture
def spy_mask_builder() -> SpyMaskBuilder:
    return SpyMaskBuilder()


@pytest.fixture
def abc_style() -> StyleConfig:
    """200x200 canvas, 4 px cells, no mask, no rotation, fonts 12..60."""
    return StyleConfig(
        canvas_width=200,
        canvas_height=200,
        grid_size=4,
        min_font_size=12,
        max_font_size=60,
        rotate=False,
        mask=None,
    )
