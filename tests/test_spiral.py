# tests/test_spiral.py
"""
SpiralSearch: ring sizes, ordering and per-instance caching.
"""

from __future__ import annotations

import math

import pytest

from glyphcloud.core.spiral import SpiralSearch


def test_radius_zero_is_centre() -> None:
    spiral = SpiralSearch(50, 40)
    assert spiral.center == (25.0, 20.0)
    assert spiral.points_at_radius(0) == ((25.0, 20.0),)


@pytest.mark.parametrize("r", [1, 2, 5, 17])
def test_ring_has_eight_r_points_on_circle(r: int) -> None:
    spiral = SpiralSearch(50, 50)
    pts = spiral.points_at_radius(r)
    assert len(pts) == 8 * r
    for x, y in pts:
        assert math.hypot(x - 25.0, y - 25.0) == pytest.approx(r)


def test_ring_starts_at_angle_zero() -> None:
    spiral = SpiralSearch(50, 50)
    x, y = spiral.points_at_radius(3)[0]
    assert (x, y) == pytest.approx((28.0, 25.0))


def test_candidates_nearest_rings_first() -> None:
    spiral = SpiralSearch(20, 20)
    dists = [math.hypot(x - 10.0, y - 10.0) for x, y in spiral.candidates(max_radius=6)]
    assert len(dists) == 1 + sum(8 * r for r in range(1, 7))
    assert all(a <= b + 1e-9 for a, b in zip(dists, dists[1:]))


def test_full_search_radius_is_max_dimension() -> None:
    spiral = SpiralSearch(30, 12)
    assert spiral.max_radius == 30
    n = sum(1 for _ in spiral.candidates())
    assert n == 1 + 8 * (30 * 31 // 2)


def test_rings_are_cached_per_instance() -> None:
    a = SpiralSearch(10, 10)
    first = a.points_at_radius(4)
    assert a.points_at_radius(4) is first
    b = SpiralSearch(10, 10)
    assert b.points_at_radius(4) is not first
    assert b.points_at_radius(4) == first
