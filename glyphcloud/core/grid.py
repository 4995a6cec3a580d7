# glyphcloud/core/grid.py
"""
Occupancy grid: coarse boolean raster indexed [x, y], True = free.
One layout call owns one grid; the placer is its only writer.
"""

from __future__ import annotations

import math

import numpy as np

from glyphcloud.core.types import MaskRegion


class OccupancyGrid:
    """Free/occupied cells for fast overlap rejection."""

    def __init__(self, width: int, height: int, default_free: bool = True) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.free = np.full((self.width, self.height), bool(default_free), dtype=bool)

    @classmethod
    def for_canvas(cls, canvas_width: int, canvas_height: int, grid_size: int, default_free: bool = True) -> "OccupancyGrid":
        g = max(1, int(grid_size))
        return cls(math.ceil(canvas_width / g), math.ceil(canvas_height / g), default_free)

    def apply_mask(self, mask: MaskRegion, canvas_width: int, canvas_height: int, grid_size: int) -> int:
        """
        Free every cell that overlaps an inside mask pixel, with the mask scaled to
        fit the canvas and centred. Returns the number of cells that ended up free.
        """
        if mask.width <= 0 or mask.height <= 0 or mask.is_empty:
            return self.free_count
        g = max(1, int(grid_size))
        scale = min(canvas_width / mask.width, canvas_height / mask.height)
        offset_x = (canvas_width - mask.width * scale) / 2.0
        offset_y = (canvas_height - mask.height * scale) / 2.0

        # mask pixel span [lo, hi) under each cell, clipped to the mask
        def spans(n_cells: int, offset: float, limit: int) -> tuple[np.ndarray, np.ndarray]:
            edges = np.arange(n_cells + 1) * g
            lo = np.floor(np.round((edges[:-1] - offset) / scale, 9)).astype(int)
            hi = np.ceil(np.round((edges[1:] - offset) / scale, 9)).astype(int)
            lo = np.clip(lo, 0, limit)
            hi = np.clip(hi, 0, limit)
            return lo, np.maximum(hi, lo)

        x_lo, x_hi = spans(self.width, offset_x, mask.width)
        y_lo, y_hi = spans(self.height, offset_y, mask.height)
        # summed-area table: inside pixels in any [y0, y1) x [x0, x1) rectangle
        sat = np.zeros((mask.height + 1, mask.width + 1), dtype=np.int64)
        sat[1:, 1:] = mask.bitmap.astype(np.int64).cumsum(axis=0).cumsum(axis=1)
        inside = (
            sat[np.ix_(y_hi, x_hi)]
            - sat[np.ix_(y_lo, x_hi)]
            - sat[np.ix_(y_hi, x_lo)]
            + sat[np.ix_(y_lo, x_lo)]
        ) > 0
        self.free |= inside.T
        return self.free_count

    def can_fit(self, origin_x: int, origin_y: int, offsets: np.ndarray) -> bool:
        """False if any offset cell is out of bounds or already occupied."""
        xs = offsets[:, 0] + origin_x
        ys = offsets[:, 1] + origin_y
        if xs.size == 0:
            return True
        if xs.min() < 0 or ys.min() < 0 or xs.max() >= self.width or ys.max() >= self.height:
            return False
        return bool(self.free[xs, ys].all())

    def mark(self, origin_x: int, origin_y: int, offsets: np.ndarray) -> None:
        """Occupy the offset cells. Only call right after a successful can_fit."""
        self.free[offsets[:, 0] + origin_x, offsets[:, 1] + origin_y] = False

    @property
    def free_count(self) -> int:
        return int(self.free.sum())

    @property
    def occupied_fraction(self) -> float:
        total = self.width * self.height
        if total == 0:
            return 0.0
        return 1.0 - self.free_count / total
