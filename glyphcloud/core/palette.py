# glyphcloud/core/palette.py
"""Color themes and cyclic color assignment by placement order."""

from __future__ import annotations

from glyphcloud.core.config import COLOR_THEMES, DEFAULT_COLOR_THEME
from glyphcloud.core.types import WordItem


def resolve_palette(colors: tuple[str, ...] | list[str] | None, theme: str = DEFAULT_COLOR_THEME) -> tuple[str, ...]:
    """Explicit colors win; otherwise the named theme (unknown names fall back to default)."""
    if colors:
        return tuple(colors)
    return COLOR_THEMES.get(theme, COLOR_THEMES[DEFAULT_COLOR_THEME])


def assign_colors(words: list[WordItem], palette: tuple[str, ...]) -> list[str]:
    """Word's own color, else palette[index % len(palette)] by position in `words`."""
    if not palette:
        palette = COLOR_THEMES[DEFAULT_COLOR_THEME]
    return [w.color or palette[i % len(palette)] for i, w in enumerate(words)]
