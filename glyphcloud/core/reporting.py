# glyphcloud/core/reporting.py
"""
Create reports/<run_name>/ and write layout.json (placed words + summary) and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from glyphcloud.core.config import (
    GLYPH_PADDING_PX,
    LINE_HEIGHT_RATIO,
    MASK_ALPHA_THRESHOLD,
    REPORTS_DIR,
    SEED,
    SHRINK_FACTOR,
    SPIRAL_POINTS_PER_RADIUS,
)
from glyphcloud.core.geometry import count_overlaps, layout_bounds
from glyphcloud.core.types import LayoutSummary, PlacedWord, StyleConfig

SCHEMA_VERSION = "1.0"


def placed_to_dict(word: PlacedWord) -> dict:
    """One placed word as JSON-ready dict."""
    minx, miny, maxx, maxy = word.bbox
    return {
        "text": word.text,
        "weight": word.weight,
        "color": word.color,
        "font_size": word.font_size,
        "rotation_deg": word.rotation_deg,
        "center": {"x": word.center_x, "y": word.center_y},
        "bbox": {"x": minx, "y": miny, "width": maxx - minx, "height": maxy - miny},
    }


def style_to_dict(style: StyleConfig) -> dict:
    mask = style.mask
    if isinstance(mask, (bytes, bytearray)):
        mask = f"<{len(mask)} bytes>"
    elif isinstance(mask, str) and mask.startswith("data:"):
        mask = mask[:40] + "..."
    return {
        "canvas_width": style.canvas_width,
        "canvas_height": style.canvas_height,
        "font_family": style.font_family,
        "font_weight": style.font_weight,
        "min_font_size": style.min_font_size,
        "max_font_size": style.max_font_size,
        "rotate": style.rotate,
        "rotate_angles": list(style.rotate_angles),
        "grid_size": style.grid_size,
        "shrink_to_fit": style.shrink_to_fit,
        "colors": list(style.colors) if style.colors else None,
        "color_theme": style.color_theme,
        "mask": mask,
        "mask_size": style.mask_size,
        "background_color": style.background_color,
    }


def layout_to_dict(summary: LayoutSummary, style: StyleConfig) -> dict:
    """Exact structure for layout.json."""
    minx, miny, maxx, maxy = layout_bounds(summary.results)
    return {
        "schema_version": SCHEMA_VERSION,
        "style": style_to_dict(style),
        "words": [placed_to_dict(w) for w in summary.results],
        "summary": {
            "n_words": summary.n_words,
            "placed_count": summary.placed_count,
            "dropped": list(summary.dropped),
            "mask_applied": summary.mask_applied,
            "overlaps_detected": count_overlaps(summary.results),
            "bounds": {"x": minx, "y": miny, "width": maxx - minx, "height": maxy - miny},
        },
        "warnings": list(summary.warnings),
    }


def run_metadata_dict(
    run_name: str,
    words_source: str,
    n_words: int,
    seed: int | None,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "words_source": words_source,
        "n_words": n_words,
        "seed": seed,
        "config": {
            "SHRINK_FACTOR": SHRINK_FACTOR,
            "GLYPH_PADDING_PX": GLYPH_PADDING_PX,
            "LINE_HEIGHT_RATIO": LINE_HEIGHT_RATIO,
            "MASK_ALPHA_THRESHOLD": MASK_ALPHA_THRESHOLD,
            "SPIRAL_POINTS_PER_RADIUS": SPIRAL_POINTS_PER_RADIUS,
            "SEED": SEED,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_layout_json(report_dir: Path, summary: LayoutSummary, style: StyleConfig) -> Path:
    """Write layout.json to report_dir. Returns path to file."""
    path = report_dir / "layout.json"
    path.write_text(json.dumps(layout_to_dict(summary, style), indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    words_source: str,
    n_words: int,
    seed: int | None,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, words_source, n_words, seed)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
