# glyphcloud/core/types.py
"""
Dataclasses for word input, style, glyph footprints, masks and placement results.
Everything here is scoped to one layout call except PlacedWord, which the caller keeps.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

import numpy as np

from glyphcloud.core.config import (
    DEFAULT_CANVAS_HEIGHT_PX,
    DEFAULT_CANVAS_WIDTH_PX,
    DEFAULT_COLOR_THEME,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_WEIGHT,
    GRID_SIZE_PX,
    MASK_SIZE_RATIO,
    MAX_FONT_SIZE_PX,
    MIN_FONT_SIZE_PX,
    ROTATE,
    ROTATE_ANGLES_DEG,
    SHRINK_TO_FIT,
)

MaskSpec = Union[str, bytes, None]


@dataclass(frozen=True)
class WordItem:
    """One weighted word. Weight drives font size and placement order."""
    text: str
    weight: float
    color: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.weight, (int, float)) or math.isnan(self.weight) or math.isinf(self.weight):
            raise ValueError(f"Weight must be a finite number, got {self.weight!r} for {self.text!r}")
        if self.weight < 0:
            raise ValueError(f"Weight must be >= 0, got {self.weight} for {self.text!r}")

    @property
    def effective_weight(self) -> float:
        """Weight used for sizing and ordering; zero counts as one."""
        return self.weight if self.weight > 0 else 1.0


@dataclass(frozen=True)
class StyleConfig:
    """Canvas, typography, rotation, grid and mask settings for one layout."""
    canvas_width: int = DEFAULT_CANVAS_WIDTH_PX
    canvas_height: int = DEFAULT_CANVAS_HEIGHT_PX
    font_family: str = DEFAULT_FONT_FAMILY
    font_weight: str = DEFAULT_FONT_WEIGHT
    min_font_size: int = MIN_FONT_SIZE_PX
    max_font_size: int = MAX_FONT_SIZE_PX
    rotate: bool = ROTATE
    rotate_angles: tuple[float, ...] = ROTATE_ANGLES_DEG
    grid_size: int = GRID_SIZE_PX
    shrink_to_fit: bool = SHRINK_TO_FIT
    colors: tuple[str, ...] | None = None
    color_theme: str = DEFAULT_COLOR_THEME
    mask: MaskSpec = None
    mask_size: float = MASK_SIZE_RATIO
    background_color: str | None = None

    @property
    def grid_dims(self) -> tuple[int, int]:
        """(columns, rows) of the occupancy grid: ceil(canvas / cell)."""
        g = max(1, int(self.grid_size))
        return (math.ceil(self.canvas_width / g), math.ceil(self.canvas_height / g))


@dataclass
class GlyphRun:
    """Measurer output: unrotated line box and its ink bitmap (rows = y)."""
    pixel_width: int
    pixel_height: int
    occupied: np.ndarray  # bool, shape (pixel_height, pixel_width)


@dataclass
class GlyphMask:
    """
    Occupied grid cells of one word at one size/rotation.
    offsets are (gx, gy) relative to the footprint's top-left cell.
    """
    offsets: np.ndarray  # int, shape (N, 2)
    grid_width: int
    grid_height: int
    pixel_width: int
    pixel_height: int
    ink_box: tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive) inside the footprint

    @property
    def cell_count(self) -> int:
        return int(self.offsets.shape[0])


@dataclass(frozen=True)
class PlacedWord:
    """
    A successfully placed word. center_x/center_y is the draw anchor (pixels);
    left/top/pixel_width/pixel_height is the ink bounding box used for hit testing.
    """
    text: str
    weight: float
    color: str
    center_x: float
    center_y: float
    pixel_width: int
    pixel_height: int
    font_size: int
    rotation_deg: float
    left: float = 0.0
    top: float = 0.0

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy) in canvas pixels."""
        return (self.left, self.top, self.left + self.pixel_width, self.top + self.pixel_height)

    def contains(self, x: float, y: float) -> bool:
        minx, miny, maxx, maxy = self.bbox
        return minx <= x <= maxx and miny <= y <= maxy


@dataclass
class MaskRegion:
    """Rasterized silhouette; bitmap[y, x] is True where the mask is opaque."""
    width: int
    height: int
    bitmap: np.ndarray

    def contains(self, x: float, y: float) -> bool:
        xi, yi = int(math.floor(x)), int(math.floor(y))
        if xi < 0 or yi < 0 or xi >= self.width or yi >= self.height:
            return False
        return bool(self.bitmap[yi, xi])

    @property
    def is_empty(self) -> bool:
        return not bool(self.bitmap.any())


@dataclass
class LayoutSummary:
    """Summary of one layout run."""
    results: list[PlacedWord]
    n_words: int
    placed_count: int
    dropped: list[str] = field(default_factory=list)
    mask_applied: bool = False
    warnings: list[str] = field(default_factory=list)
    occupancy: np.ndarray | None = None  # copy of grid free cells [x, y] after the pass
