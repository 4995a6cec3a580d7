# glyphcloud/core/spiral.py
"""
Outward ring search from the grid centre. Ring r holds 8r points at equal angles
starting from angle 0; closer rings are always exhausted before farther ones.
"""

from __future__ import annotations

import math
from typing import Iterator

from glyphcloud.core.config import SPIRAL_POINTS_PER_RADIUS


class SpiralSearch:
    """Candidate grid positions ordered by distance from the centre. Cache lives per instance."""

    def __init__(
        self,
        grid_width: int,
        grid_height: int,
        points_per_radius: int = SPIRAL_POINTS_PER_RADIUS,
    ) -> None:
        self.center = (grid_width / 2.0, grid_height / 2.0)
        self.max_radius = max(grid_width, grid_height)
        self.points_per_radius = points_per_radius
        self._cache: dict[int, tuple[tuple[float, float], ...]] = {}

    def points_at_radius(self, r: int) -> tuple[tuple[float, float], ...]:
        r = int(r)
        cached = self._cache.get(r)
        if cached is not None:
            return cached
        cx, cy = self.center
        if r == 0:
            pts: tuple[tuple[float, float], ...] = ((cx, cy),)
        else:
            n = self.points_per_radius * r
            pts = tuple(
                (cx + r * math.cos(2.0 * math.pi * t / n), cy + r * math.sin(2.0 * math.pi * t / n))
                for t in range(n)
            )
        self._cache[r] = pts
        return pts

    def candidates(self, max_radius: int | None = None) -> Iterator[tuple[float, float]]:
        """All points for radius 0..max_radius inclusive, ring by ring."""
        limit = self.max_radius if max_radius is None else int(max_radius)
        for r in range(limit + 1):
            yield from self.points_at_radius(r)
