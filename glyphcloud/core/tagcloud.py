# glyphcloud/core/tagcloud.py
"""
Simple tag cloud: no spatial layout, just size classes and color tokens per tag.
Counts map linearly onto TAG_SIZE_CLASSES between min_size and max_size.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

import numpy as np

from glyphcloud.core.config import TAG_COLOR_TOKENS, TAG_SIZE_CLASSES

TagSort = Literal["weight", "alpha", "random"]


@dataclass(frozen=True)
class TagItem:
    text: str
    count: float = 1
    href: str = "#"


@dataclass(frozen=True)
class TagEntry:
    """A tag ready to display; index is its position after sorting."""
    text: str
    count: float
    href: str
    size_class: str
    color: str
    index: int


def _size_index(name: str, default: int) -> int:
    try:
        return TAG_SIZE_CLASSES.index(name)
    except ValueError:
        return default


def sort_tags(tags: list[TagItem], sort_by: TagSort = "weight", rng: np.random.Generator | None = None) -> list[TagItem]:
    if sort_by == "alpha":
        return sorted(tags, key=lambda t: t.text.casefold())
    if sort_by == "random":
        rng = rng if rng is not None else np.random.default_rng()
        order = rng.permutation(len(tags))
        return [tags[int(i)] for i in order]
    return sorted(tags, key=lambda t: -(t.count or 0))


def build_tag_cloud(
    tags: list[TagItem],
    min_size: str = "sm",
    max_size: str = "xl",
    sort_by: TagSort = "weight",
    colorful: bool = True,
    rng: np.random.Generator | None = None,
) -> list[TagEntry]:
    """Size class by normalized count, color token cycling by sorted position."""
    if not tags:
        return []
    counts = [t.count or 1 for t in tags]
    min_count = min(counts)
    count_range = (max(counts) - min_count) or 1
    lo = _size_index(min_size, 1)
    hi = _size_index(max_size, 4)
    size_range = hi - lo

    out: list[TagEntry] = []
    for index, tag in enumerate(sort_tags(tags, sort_by, rng)):
        normalized = ((tag.count or 0) - min_count) / count_range
        # round half up
        idx = int(math.floor(lo + normalized * size_range + 0.5))
        idx = min(max(idx, 0), len(TAG_SIZE_CLASSES) - 1)
        color = TAG_COLOR_TOKENS[index % len(TAG_COLOR_TOKENS)] if colorful else "default"
        out.append(TagEntry(
            text=tag.text,
            count=tag.count,
            href=tag.href,
            size_class=TAG_SIZE_CLASSES[idx],
            color=color,
            index=index,
        ))
    return out
