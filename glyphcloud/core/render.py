# glyphcloud/core/render.py
"""
Rendering: cloud.png (Pillow, same rasterization as measurement) and debug.png
(matplotlib overlay of grid occupancy, word boxes and anchors).
Layout never draws; these are host-side consumers of the PlacedWord list.
"""

from __future__ import annotations

import io
import math
import warnings
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

from glyphcloud.core.config import DEBUG_BOX_COLOR, DEBUG_GRID_COLOR, RENDER_DEBUG_DPI
from glyphcloud.core.geometry import word_bbox
from glyphcloud.core.glyphs import rotate_image
from glyphcloud.core.text_metrics import PillowMeasurer
from glyphcloud.core.types import PlacedWord, StyleConfig


def draw_cloud(
    placed: list[PlacedWord],
    style: StyleConfig,
    measurer: PillowMeasurer | None = None,
    scale: int = 1,
) -> Image.Image:
    """RGBA image of the cloud. scale multiplies output resolution (1x, 2x, 4x)."""
    measurer = measurer or PillowMeasurer()
    w = max(1, style.canvas_width * scale)
    h = max(1, style.canvas_height * scale)
    canvas = Image.new("RGBA", (w, h), style.background_color or (0, 0, 0, 0))
    for word in placed:
        glyph = measurer.render(word.text, style.font_family, style.font_weight, word.font_size * scale, word.color)
        glyph = rotate_image(glyph, word.rotation_deg, resample=Image.Resampling.BICUBIC)
        x = int(math.floor(word.center_x * scale - glyph.width / 2.0))
        y = int(math.floor(word.center_y * scale - glyph.height / 2.0))
        canvas.paste(glyph, (x, y), glyph)
    return canvas


def render_cloud(
    placed: list[PlacedWord],
    style: StyleConfig,
    output_path: str | Path,
    measurer: PillowMeasurer | None = None,
    scale: int = 1,
) -> Path:
    """Write cloud PNG; returns the path."""
    out = Path(output_path)
    draw_cloud(placed, style, measurer=measurer, scale=scale).save(out, format="PNG")
    return out


def cloud_to_png_bytes(
    placed: list[PlacedWord],
    style: StyleConfig,
    measurer: PillowMeasurer | None = None,
    scale: int = 1,
) -> bytes:
    """PNG bytes for downloads."""
    buf = io.BytesIO()
    draw_cloud(placed, style, measurer=measurer, scale=scale).save(buf, format="PNG")
    return buf.getvalue()


def _new_fig(width_px: int, height_px: int) -> tuple[plt.Figure, plt.Axes]:
    fig = plt.figure(
        figsize=(width_px / RENDER_DEBUG_DPI, height_px / RENDER_DEBUG_DPI),
        dpi=RENDER_DEBUG_DPI,
        constrained_layout=False,
    )
    ax = fig.add_axes([0, 0, 1, 1])  # full-canvas axes
    ax.axis("off")
    return fig, ax


def render_debug(
    placed: list[PlacedWord],
    style: StyleConfig,
    output_path: str | Path,
    occupancy: np.ndarray | None = None,
    scale: int = 2,
) -> Path:
    """
    Debug overlay: occupied grid cells (grey), word ink boxes (red) and anchors.
    occupancy is the free-cell array [x, y] from LayoutSummary.
    """
    w = max(1, style.canvas_width)
    h = max(1, style.canvas_height)
    fig, ax = _new_fig(w * scale, h * scale)
    g = style.grid_size

    if occupancy is not None and occupancy.size:
        occupied = ~occupancy.T  # rows = y
        ngx, ngy = occupancy.shape
        ax.imshow(
            occupied,
            cmap="Greys",
            alpha=0.35,
            interpolation="nearest",
            extent=(0, ngx * g, ngy * g, 0),
            vmin=0,
            vmax=1,
        )

    for word in placed:
        xy = np.array(word_bbox(word).exterior.coords)
        ax.plot(xy[:, 0], xy[:, 1], color=DEBUG_BOX_COLOR, linewidth=0.8)
        ax.text(
            word.center_x, word.center_y, word.text,
            fontsize=max(4.0, word.font_size * 0.5),
            ha="center", va="center",
            color=word.color,
            rotation=-word.rotation_deg,
        )
    if placed:
        ax.scatter([p.center_x for p in placed], [p.center_y for p in placed], s=6, color=DEBUG_GRID_COLOR)

    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    ax.set_aspect("equal", adjustable="box")
    out = Path(output_path)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        fig.savefig(out, dpi=RENDER_DEBUG_DPI, facecolor="white")
    plt.close(fig)
    return out
