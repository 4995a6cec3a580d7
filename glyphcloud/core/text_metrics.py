# glyphcloud/core/text_metrics.py
"""
Measure and rasterize text with Pillow. 1 px on the canvas = 1 px in the glyph bitmap.
PillowMeasurer is the default GlyphMeasurer; any object with the same measure() works.
"""

from __future__ import annotations

import math
import warnings
from functools import lru_cache
from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from glyphcloud.core.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_WEIGHT, LINE_HEIGHT_RATIO
from glyphcloud.core.error_codes import GlyphMeasureError
from glyphcloud.core.types import GlyphRun

_font_warning_emitted: set[str] = set()


class GlyphMeasurer(Protocol):
    """Turns (text, style) into an unrotated line box with its ink bitmap."""

    def measure(self, text: str, font_family: str, font_weight: str, font_size_px: int) -> GlyphRun:
        ...


def _font_candidates(font_family: str, font_weight: str) -> list[str]:
    compact = font_family.replace(" ", "")
    names: list[str] = []
    if font_weight == "bold":
        names += [
            f"{font_family} Bold.ttf",
            f"{compact}-Bold.ttf",
            f"{compact}bd.ttf",
        ]
    names += [font_family + ".ttf", compact + ".ttf"]
    if font_weight == "bold":
        names += ["DejaVuSans-Bold.ttf", "arialbd.ttf", "Arial Bold.ttf"]
    names += ["DejaVuSans.ttf", "arial.ttf", "Arial.ttf"]
    return names


@lru_cache(maxsize=256)
def load_font(font_family: str, font_weight: str, font_size_px: int):
    """Load PIL font; fallback with warning if font not found."""
    size = max(1, int(font_size_px))
    for name in _font_candidates(font_family, font_weight):
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


def line_box(font, text: str, font_size_px: int) -> tuple[int, int]:
    """(width, height) of the line box: advance width x font size * LINE_HEIGHT_RATIO."""
    width = int(math.ceil(font.getlength(text)))
    height = int(math.ceil(font_size_px * LINE_HEIGHT_RATIO))
    return width, height


def draw_line(text: str, font, width: int, height: int, mode: str = "L", fill=255) -> Image.Image:
    """Draw text centred in a transparent (or black) width x height image."""
    background = (0, 0, 0, 0) if mode == "RGBA" else 0
    img = Image.new(mode, (width, height), background)
    draw = ImageDraw.Draw(img)
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (width - (right - left)) / 2.0 - left
    y = (height - (bottom - top)) / 2.0 - top
    draw.text((x, y), text, font=font, fill=fill)
    return img


class PillowMeasurer:
    """GlyphMeasurer backed by Pillow TrueType rendering."""

    def measure(
        self,
        text: str,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_weight: str = DEFAULT_FONT_WEIGHT,
        font_size_px: int = 12,
    ) -> GlyphRun:
        if not text or not text.strip():
            raise GlyphMeasureError(f"Nothing to measure in {text!r}")
        font = load_font(font_family, font_weight, int(font_size_px))
        width, height = line_box(font, text, int(font_size_px))
        if width <= 0 or height <= 0:
            raise GlyphMeasureError(f"Zero-size line box for {text!r} at {font_size_px}px")
        img = draw_line(text, font, width, height)
        occupied = np.asarray(img) > 0
        return GlyphRun(pixel_width=width, pixel_height=height, occupied=occupied)

    def render(
        self,
        text: str,
        font_family: str,
        font_weight: str,
        font_size_px: int,
        color: str,
    ) -> Image.Image:
        """Coloured RGBA line box, same geometry as measure()."""
        font = load_font(font_family, font_weight, int(font_size_px))
        width, height = line_box(font, text, int(font_size_px))
        return draw_line(text, font, max(1, width), max(1, height), mode="RGBA", fill=color)

