# glyphcloud/core/config.py
"""
Central configuration for word-cloud layout.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Canvas -----
DEFAULT_CANVAS_WIDTH_PX: int = 400
"""Canvas width used when the caller gives none."""

DEFAULT_CANVAS_HEIGHT_PX: int = 300

# ----- Typography -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_FONT_WEIGHT: str = "bold"

MIN_FONT_SIZE_PX: int = 12
MAX_FONT_SIZE_PX: int = 60

LINE_HEIGHT_RATIO: float = 1.2
"""Line box height = font size * ratio."""

GLYPH_PADDING_PX: int = 10
"""Fixed padding added to the rotated glyph footprint (both axes)."""

# ----- Grid / search -----
GRID_SIZE_PX: int = 4
"""Occupancy grid cell size in pixels."""

SPIRAL_POINTS_PER_RADIUS: int = 8
"""Ring at radius r samples SPIRAL_POINTS_PER_RADIUS * r points."""

# ----- Shrink-to-fit -----
SHRINK_TO_FIT: bool = True
SHRINK_FACTOR: float = 0.8
"""Next size = max(floor(size * SHRINK_FACTOR), min font size)."""

# ----- Rotation -----
ROTATE: bool = False
ROTATE_ANGLES_DEG: tuple[float, ...] = (0.0, 90.0)

# ----- Masks -----
MASK_SIZE_RATIO: float = 0.9
"""Mask edge = min(canvas width, height) * ratio. Clamped to [0.1, 1.0]."""

MASK_ALPHA_THRESHOLD: int = 50
"""Pixel is inside the mask when alpha > threshold (0..255)."""

MASK_IMAGE_FIT_RATIO: float = 0.9
"""External images are scaled to this fraction of the mask square."""

STAR_POINTS: int = 5
STAR_INNER_RATIO: float = 0.4
"""Inner radius / outer radius of the built-in star."""

HEART_BEZIER_SAMPLES: int = 24
"""Points sampled per cubic Bezier segment of the heart outline."""

# ----- Colors -----
COLOR_THEMES: dict[str, tuple[str, ...]] = {
    "default": ("#3B82F6", "#22C55E", "#EAB308", "#EF4444", "#8B5CF6", "#EC4899", "#06B6D4", "#F97316"),
    "blue": ("#1E40AF", "#1D4ED8", "#2563EB", "#3B82F6", "#60A5FA", "#93C5FD"),
    "rainbow": ("#EF4444", "#F97316", "#EAB308", "#22C55E", "#06B6D4", "#3B82F6", "#8B5CF6"),
    "monochrome": ("#111827", "#374151", "#4B5563", "#6B7280", "#9CA3AF"),
    "warm": ("#EF4444", "#F97316", "#EAB308", "#F59E0B", "#D97706"),
    "cool": ("#06B6D4", "#0EA5E9", "#3B82F6", "#6366F1", "#8B5CF6"),
}
DEFAULT_COLOR_THEME: str = "default"

# ----- Tag cloud -----
TAG_SIZE_CLASSES: tuple[str, ...] = ("xs", "sm", "md", "lg", "xl", "2xl")
TAG_COLOR_TOKENS: tuple[str, ...] = ("primary", "success", "warning", "error", "purple", "cyan", "pink", "orange")

# ----- Rendering -----
RENDER_DEBUG_DPI: int = 100
DEBUG_GRID_COLOR: str = "#9CA3AF"
DEBUG_BOX_COLOR: str = "#EF4444"

# ----- Determinism -----
SEED: int | None = 42
"""Seed for rotation choice; None for non-deterministic."""

# ----- Debug / logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

GLYPHCLOUD_DEBUG: bool = os.environ.get("GLYPHCLOUD_DEBUG", "").lower() in ("1", "true", "yes")
"""Log every placement attempt. Set env GLYPHCLOUD_DEBUG=1 to enable."""
