# tests/test_layout.py
"""
LayoutEngine end-to-end: sizing, ordering, colors, non-overlap, determinism,
shrink fallback and empty/invalid input. Mostly uses the rectangular BoxMeasurer;
one non-overlap check runs with real fonts.
"""

from __future__ import annotations

import warnings

import numpy as np
import pytest

from glyphcloud.core.config import COLOR_THEMES
from glyphcloud.core.error_codes import EMPTY_WORDS, INVALID_STYLE, MEASURE_FAILED, NO_FIT
from glyphcloud.core.geometry import count_overlaps
from glyphcloud.core.layout import LayoutEngine, font_size_for_weight, run_layout, sort_words
from glyphcloud.core.types import StyleConfig, WordItem

from conftest import BoxMeasurer


ABC = [
    WordItem(text="A", weight=10),
    WordItem(text="B", weight=5),
    WordItem(text="C", weight=1),
]


def test_abc_scenario_sizes_and_center(abc_style: StyleConfig, box_measurer: BoxMeasurer) -> None:
    placed = LayoutEngine(measurer=box_measurer).layout(ABC, abc_style)
    assert [p.text for p in placed] == ["A", "B", "C"]
    assert [p.font_size for p in placed] == [60, 30, 12]
    a = placed[0]
    # radius-0 candidate: footprint centred on the grid centre (within one cell)
    assert abs(a.center_x - 100) <= 4
    assert abs(a.center_y - 100) <= 4
    assert count_overlaps(placed) == 0


def test_layout_non_overlapping_many_words(box_measurer: BoxMeasurer) -> None:
    words = [WordItem(text=f"w{i}", weight=float(30 - i)) for i in range(25)]
    style = StyleConfig(canvas_width=400, canvas_height=300, grid_size=4, min_font_size=10, max_font_size=40)
    placed = LayoutEngine(measurer=box_measurer).layout(words, style)
    assert len(placed) > 10
    assert count_overlaps(placed) == 0
    for p in placed:
        assert 0 <= p.left and p.left + p.pixel_width <= 400
        assert 0 <= p.top and p.top + p.pixel_height <= 300


def test_layout_idempotent_without_rotation(abc_style: StyleConfig) -> None:
    words = ABC + [WordItem(text="DD", weight=3, color="#000000")]
    first = LayoutEngine(measurer=BoxMeasurer()).layout(words, abc_style)
    second = LayoutEngine(measurer=BoxMeasurer()).layout(words, abc_style)
    assert first == second


def test_layout_idempotent_with_seeded_rotation(box_measurer: BoxMeasurer) -> None:
    style = StyleConfig(canvas_width=300, canvas_height=300, rotate=True, rotate_angles=(0.0, 90.0))
    words = [WordItem(text=f"word{i}", weight=10 - i) for i in range(8)]
    a = LayoutEngine(measurer=BoxMeasurer(), seed=7).layout(words, style)
    b = LayoutEngine(measurer=BoxMeasurer(), seed=7).layout(words, style)
    assert a == b
    assert {p.rotation_deg for p in a} <= {0.0, 90.0}


def test_monotonic_font_size(box_measurer: BoxMeasurer) -> None:
    words = [WordItem(text="x", weight=w) for w in (100, 80, 60, 40)]
    style = StyleConfig(canvas_width=800, canvas_height=800, min_font_size=4, max_font_size=100)
    placed = LayoutEngine(measurer=box_measurer).layout(words, style)
    sizes = [p.font_size for p in placed]
    assert sizes == sorted(sizes, reverse=True)
    assert sizes[0] == 100


def test_font_size_for_weight_clamps_and_floors() -> None:
    assert font_size_for_weight(10, 10, 12, 60) == 60
    assert font_size_for_weight(5, 10, 12, 60) == 30
    assert font_size_for_weight(1, 10, 12, 60) == 12
    assert font_size_for_weight(7, 9, 12, 60) == 46  # 46.67 floored
    assert font_size_for_weight(3, 0, 12, 60) == 12


def test_sort_words_stable_on_ties() -> None:
    words = [WordItem("a", 1), WordItem("b", 5), WordItem("c", 1), WordItem("d", 5)]
    assert [w.text for w in sort_words(words)] == ["b", "d", "a", "c"]


def test_zero_weight_treated_as_one() -> None:
    words = [WordItem("zero", 0), WordItem("one", 1)]
    assert [w.text for w in sort_words(words)] == ["zero", "one"]
    assert WordItem("zero", 0).effective_weight == 1.0


def test_colors_cycle_by_sorted_index(box_measurer: BoxMeasurer) -> None:
    palette = ("#111111", "#222222")
    words = [
        WordItem("low", 1),
        WordItem("high", 9),
        WordItem("mid", 5, color="#ABCDEF"),
        WordItem("lower", 0.5),
    ]
    style = StyleConfig(canvas_width=600, canvas_height=400, colors=palette, min_font_size=8)
    placed = LayoutEngine(measurer=box_measurer).layout(words, style)
    by_text = {p.text: p.color for p in placed}
    # sorted: high(0), mid(1), low(2), lower(3)
    assert by_text["high"] == "#111111"
    assert by_text["mid"] == "#ABCDEF"
    assert by_text["low"] == "#111111"
    assert by_text["lower"] == "#222222"


def test_theme_palette_used_when_no_colors(box_measurer: BoxMeasurer) -> None:
    style = StyleConfig(canvas_width=300, canvas_height=300, color_theme="warm")
    placed = LayoutEngine(measurer=box_measurer).layout([WordItem("a", 2), WordItem("b", 1)], style)
    assert [p.color for p in placed] == list(COLOR_THEMES["warm"][:2])


def test_empty_words_no_side_effects(box_measurer: BoxMeasurer, spy_mask_builder) -> None:
    style = StyleConfig(mask="heart")
    engine = LayoutEngine(measurer=box_measurer, mask_builder=spy_mask_builder)
    summary = engine.layout_with_summary([], style)
    assert summary.results == []
    assert summary.warnings == [EMPTY_WORDS]
    assert summary.occupancy is None
    assert box_measurer.calls == []
    assert spy_mask_builder.calls == []


@pytest.mark.parametrize(
    "style",
    [
        StyleConfig(canvas_width=0, canvas_height=100),
        StyleConfig(canvas_width=100, canvas_height=-5),
        StyleConfig(grid_size=0),
        StyleConfig(min_font_size=30, max_font_size=20),
        StyleConfig(min_font_size=0),
    ],
)
def test_invalid_style_returns_empty(style: StyleConfig, box_measurer: BoxMeasurer) -> None:
    summary = LayoutEngine(measurer=box_measurer).layout_with_summary(ABC, style)
    assert summary.results == []
    assert INVALID_STYLE in summary.warnings
    assert box_measurer.calls == []


def test_shrink_fallback_tiny_canvas_drops_word(box_measurer: BoxMeasurer) -> None:
    style = StyleConfig(canvas_width=4, canvas_height=4, grid_size=4, min_font_size=12, max_font_size=60)
    summary = LayoutEngine(measurer=box_measurer).layout_with_summary([WordItem("big", 10)], style)
    assert summary.results == []
    assert summary.dropped == ["big"]
    assert NO_FIT in summary.warnings
    assert [size for _, size in box_measurer.calls] == [60, 48, 38, 30, 24, 19, 15, 12]


def test_no_shrink_measures_once(box_measurer: BoxMeasurer) -> None:
    style = StyleConfig(canvas_width=4, canvas_height=4, grid_size=4, shrink_to_fit=False)
    placed = LayoutEngine(measurer=box_measurer).layout([WordItem("big", 10)], style)
    assert placed == []
    assert [size for _, size in box_measurer.calls] == [60]


def test_shrink_lets_word_fit_smaller() -> None:
    # 60px "AAAA" is 144 px wide + padding: too wide for 120 px; shrinks until it fits
    style = StyleConfig(canvas_width=120, canvas_height=120, grid_size=4, min_font_size=12, max_font_size=60)
    placed = LayoutEngine(measurer=BoxMeasurer()).layout([WordItem("AAAA", 10)], style)
    assert len(placed) == 1
    assert 12 <= placed[0].font_size < 60


def test_measure_failure_only_drops_that_word(abc_style: StyleConfig) -> None:
    measurer = BoxMeasurer(fail_on={"B"})
    summary = LayoutEngine(measurer=measurer).layout_with_summary(ABC, abc_style)
    assert [p.text for p in summary.results] == ["A", "C"]
    assert summary.dropped == ["B"]
    assert summary.warnings == [MEASURE_FAILED]


def test_run_layout_summary(abc_style: StyleConfig) -> None:
    summary = run_layout(ABC, abc_style, measurer=BoxMeasurer())
    assert summary.n_words == 3
    assert summary.placed_count == 3
    assert summary.occupancy is not None
    assert summary.occupancy.shape == (50, 50)
    assert not summary.occupancy.all()
    assert summary.mask_applied is False


def test_injected_rng_is_used(box_measurer: BoxMeasurer) -> None:
    style = StyleConfig(canvas_width=400, canvas_height=400, rotate=True, rotate_angles=(90.0,))
    engine = LayoutEngine(measurer=box_measurer, rng=np.random.default_rng(0))
    placed = engine.layout([WordItem("vertical", 1)], style)
    assert placed[0].rotation_deg == 90.0
    assert placed[0].pixel_height > placed[0].pixel_width


def test_no_overlaps_with_real_glyphs() -> None:
    # small words must not nest inside the empty space of a large word's ink box
    words = [WordItem("Tiny", 100)] + [WordItem("ok", 1) for _ in range(40)]
    style = StyleConfig(canvas_width=300, canvas_height=200, min_font_size=8, max_font_size=90)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        placed = LayoutEngine().layout(words, style)
    assert len(placed) > 10
    assert placed[0].text == "Tiny"
    assert count_overlaps(placed) == 0
