# glyphcloud/core/runner.py
"""
CLI entrypoint: load words, run layout, render, export.
Writes layout.json, run_metadata.json, cloud.png and debug.png to <output-dir>/<run-name>/.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from glyphcloud.core.config import (
    DEFAULT_CANVAS_HEIGHT_PX,
    DEFAULT_CANVAS_WIDTH_PX,
    DEFAULT_COLOR_THEME,
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_WEIGHT,
    GRID_SIZE_PX,
    LOG_LEVEL,
    MASK_SIZE_RATIO,
    MAX_FONT_SIZE_PX,
    MIN_FONT_SIZE_PX,
    REPORTS_DIR,
    SEED,
)
from glyphcloud.core.io import load_words
from glyphcloud.core.layout import LayoutEngine
from glyphcloud.core.render import render_cloud, render_debug
from glyphcloud.core.reporting import ensure_report_dir, write_layout_json, write_run_metadata_json
from glyphcloud.core.types import StyleConfig


def _parse_angles(s: str) -> tuple[float, ...]:
    out = []
    for part in (s or "").split(","):
        part = part.strip()
        if part:
            out.append(float(part))
    return tuple(out) or (0.0,)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Word-cloud layout and rendering.")
    p.add_argument("--words", type=str, required=True, help="Words file (.json, .csv or text)")
    p.add_argument("--width", type=int, default=DEFAULT_CANVAS_WIDTH_PX, help="Canvas width (px)")
    p.add_argument("--height", type=int, default=DEFAULT_CANVAS_HEIGHT_PX, help="Canvas height (px)")
    p.add_argument("--min-font-size", type=int, default=MIN_FONT_SIZE_PX, dest="min_font_size")
    p.add_argument("--max-font-size", type=int, default=MAX_FONT_SIZE_PX, dest="max_font_size")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family")
    p.add_argument("--font-weight", type=str, default=DEFAULT_FONT_WEIGHT, dest="font_weight", choices=("normal", "bold"))
    p.add_argument("--grid-size", type=int, default=GRID_SIZE_PX, dest="grid_size", help="Grid cell size (px)")
    p.add_argument("--rotate", action="store_true", help="Enable rotation")
    p.add_argument("--rotate-angles", type=str, default="0,90", dest="rotate_angles", help="e.g. '0,90' or '-45,0,45'")
    p.add_argument("--no-shrink", action="store_false", dest="shrink_to_fit", help="Drop words that do not fit instead of shrinking")
    p.add_argument("--mask", type=str, default=None, help="heart, circle, star, cloud or an image path")
    p.add_argument("--mask-size", type=float, default=MASK_SIZE_RATIO, dest="mask_size", help="Mask size ratio (0.1-1.0)")
    p.add_argument("--theme", type=str, default=DEFAULT_COLOR_THEME, help="Color theme")
    p.add_argument("--background", type=str, default=None, help="Background color (default transparent)")
    p.add_argument("--seed", type=int, default=SEED, help="Random seed for rotation")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--scale", type=int, default=1, help="PNG resolution multiplier")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    words = load_words(args.words, repo_root=repo_root)
    style = StyleConfig(
        canvas_width=args.width,
        canvas_height=args.height,
        font_family=args.font_family,
        font_weight=args.font_weight,
        min_font_size=args.min_font_size,
        max_font_size=args.max_font_size,
        rotate=args.rotate,
        rotate_angles=_parse_angles(args.rotate_angles),
        grid_size=args.grid_size,
        shrink_to_fit=args.shrink_to_fit,
        color_theme=args.theme,
        mask=args.mask,
        mask_size=args.mask_size,
        background_color=args.background,
    )
    summary = LayoutEngine(seed=args.seed).layout_with_summary(words, style)

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    layout_path = write_layout_json(report_dir, summary, style)
    meta_path = write_run_metadata_json(report_dir, args.run_name, args.words, len(words), args.seed)
    cloud_path = render_cloud(summary.results, style, report_dir / "cloud.png", scale=args.scale)
    debug_path = render_debug(summary.results, style, report_dir / "debug.png", occupancy=summary.occupancy)

    for p in (layout_path, meta_path, cloud_path, debug_path):
        print(p)
    print(f"Placed {summary.placed_count}/{summary.n_words} words")


if __name__ == "__main__":
    main()
