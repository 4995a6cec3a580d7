# glyphcloud/core/geometry.py
"""
Geometry helpers on placed words: bounding boxes, hit testing, overlap checks.
"""

from __future__ import annotations

from shapely.geometry import Polygon, box

from glyphcloud.core.types import PlacedWord


def word_bbox(word: PlacedWord) -> Polygon:
    """Ink bounding box as a shapely rectangle (canvas pixels, y down)."""
    minx, miny, maxx, maxy = word.bbox
    return box(minx, miny, maxx, maxy)


def word_at(placed: list[PlacedWord], x: float, y: float) -> PlacedWord | None:
    """First word (placement order) whose box contains (x, y), edges inclusive."""
    for word in placed:
        if word.contains(x, y):
            return word
    return None


def boxes_overlap(a: PlacedWord, b: PlacedWord, tolerance_px2: float = 0.0) -> bool:
    """True if the boxes share more than tolerance_px2 of area; touching edges do not count."""
    inter = word_bbox(a).intersection(word_bbox(b))
    return not inter.is_empty and inter.area > tolerance_px2


def count_overlaps(placed: list[PlacedWord], tolerance_px2: float = 0.0) -> int:
    """Number of overlapping pairs."""
    boxes = [word_bbox(w) for w in placed]
    n = 0
    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            inter = boxes[i].intersection(boxes[j])
            if not inter.is_empty and inter.area > tolerance_px2:
                n += 1
    return n


def layout_bounds(placed: list[PlacedWord]) -> tuple[float, float, float, float]:
    """(minx, miny, maxx, maxy) over all boxes; zeros when empty."""
    if not placed:
        return (0.0, 0.0, 0.0, 0.0)
    boxes = [w.bbox for w in placed]
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        max(b[2] for b in boxes),
        max(b[3] for b in boxes),
    )
