# glyphcloud/ui/app.py
"""
Streamlit UI: sidebar (words, canvas, typography, mask), main area with the rendered cloud,
downloads, placed-word table, point lookup, and a tag-cloud preview.
Run with: streamlit run glyphcloud/ui/app.py
"""

from __future__ import annotations

import html
import json
import logging
import os
import sys
from pathlib import Path

# Configure logging from env (e.g. LOG_LEVEL=DEBUG for development)
_log_level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, _log_level_name, logging.INFO))

# Ensure repo root is on path when Streamlit loads this file
_repo_root = Path(__file__).resolve().parent.parent.parent
if not (_repo_root / "glyphcloud" / "__init__.py").exists():
    _repo_root = Path.cwd().resolve()
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import streamlit as st

from glyphcloud.core.config import (
    COLOR_THEMES,
    DEFAULT_CANVAS_HEIGHT_PX,
    DEFAULT_FONT_FAMILY,
    GRID_SIZE_PX,
    MASK_SIZE_RATIO,
    MAX_FONT_SIZE_PX,
    MIN_FONT_SIZE_PX,
    SEED,
)
from glyphcloud.core.error_codes import user_message
from glyphcloud.core.geometry import word_at
from glyphcloud.core.io import parse_words_csv, parse_words_json, parse_words_text
from glyphcloud.core.layout import LayoutEngine
from glyphcloud.core.mask import BUILTIN_SHAPES
from glyphcloud.core.render import cloud_to_png_bytes
from glyphcloud.core.reporting import layout_to_dict
from glyphcloud.core.tagcloud import TagItem, build_tag_cloud
from glyphcloud.core.types import StyleConfig, WordItem
from glyphcloud.ui.help_text import (
    EXAMPLE_WORDS,
    GLOSSARY_MD,
    TOOLTIP_GRID,
    TOOLTIP_MASK,
    TOOLTIP_SCALE,
    TOOLTIP_SEED,
    TOOLTIP_SHRINK,
    TOOLTIP_UPLOAD,
    TOOLTIP_WORDS,
)

_TAG_FONT_REM = {"xs": 0.75, "sm": 0.875, "md": 1.0, "lg": 1.25, "xl": 1.5, "2xl": 2.0}


def _parse_uploaded(uploaded_file) -> tuple[list[WordItem], str]:
    """Returns (words, error_message)."""
    try:
        text = uploaded_file.read().decode("utf-8")
        name = uploaded_file.name.lower()
        if name.endswith(".json"):
            return parse_words_json(text), ""
        if name.endswith(".csv"):
            return parse_words_csv(text), ""
        return parse_words_text(text), ""
    except (ValueError, UnicodeDecodeError) as e:
        return [], str(e).strip() or "Could not read words file."


def _run_layout(words: list[WordItem], style: StyleConfig, seed: int | None):
    summary = LayoutEngine(seed=seed).layout_with_summary(words, style)
    st.session_state["summary"] = summary
    st.session_state["style"] = style


st.set_page_config(page_title="glyphcloud", layout="wide")

with st.sidebar:
    st.header("glyphcloud")
    source = st.radio("Words", ["Paste", "Upload"], horizontal=True)
    words: list[WordItem] = []
    parse_error = ""
    if source == "Upload":
        uploaded = st.file_uploader("Words file", type=["json", "csv", "txt"], help=TOOLTIP_UPLOAD)
        if uploaded is not None:
            words, parse_error = _parse_uploaded(uploaded)
    else:
        pasted = st.text_area("Words", value=EXAMPLE_WORDS, height=220, help=TOOLTIP_WORDS)
        try:
            words = parse_words_text(pasted)
        except ValueError as e:
            parse_error = str(e)
    if parse_error:
        st.error(parse_error)

    st.divider()
    width = st.number_input("Canvas width (px)", min_value=50, max_value=2000, value=600, step=10)
    height = st.number_input("Canvas height (px)", min_value=50, max_value=2000, value=DEFAULT_CANVAS_HEIGHT_PX + 100, step=10)
    font_family = st.text_input("Font family", value=DEFAULT_FONT_FAMILY)
    font_weight = st.selectbox("Font weight", ["bold", "normal"])
    min_font, max_font = st.slider("Font size range (px)", 4, 160, (MIN_FONT_SIZE_PX, MAX_FONT_SIZE_PX))
    grid_size = st.slider("Grid size (px)", 1, 16, GRID_SIZE_PX, help=TOOLTIP_GRID)
    shrink = st.checkbox("Shrink to fit", value=True, help=TOOLTIP_SHRINK)
    rotate = st.checkbox("Rotate words", value=False)
    angles_text = st.text_input("Rotation angles (deg)", value="0,90", disabled=not rotate)
    theme = st.selectbox("Color theme", list(COLOR_THEMES))
    background = st.color_picker("Background", value="#FFFFFF")

    st.divider()
    mask_choice = st.selectbox("Mask", ["none", *BUILTIN_SHAPES, "upload"], help=TOOLTIP_MASK)
    mask_spec = None
    if mask_choice == "upload":
        mask_file = st.file_uploader("Mask image", type=["png", "svg", "gif", "webp"])
        if mask_file is not None:
            mask_spec = mask_file.read()
    elif mask_choice != "none":
        mask_spec = mask_choice
    mask_size = st.slider("Mask size", 0.1, 1.0, MASK_SIZE_RATIO, 0.05)
    seed = st.number_input("Seed", min_value=0, value=SEED if SEED is not None else 0, help=TOOLTIP_SEED)
    scale = st.radio("PNG scale", [1, 2, 4], horizontal=True, help=TOOLTIP_SCALE)

    try:
        angles = tuple(float(a) for a in angles_text.split(",") if a.strip()) or (0.0,)
    except ValueError:
        st.error("Rotation angles must be comma-separated numbers.")
        angles = (0.0,)

    if st.button("Run layout", type="primary", disabled=not words):
        style = StyleConfig(
            canvas_width=int(width),
            canvas_height=int(height),
            font_family=font_family or DEFAULT_FONT_FAMILY,
            font_weight=font_weight,
            min_font_size=int(min_font),
            max_font_size=int(max_font),
            rotate=rotate,
            rotate_angles=angles,
            grid_size=int(grid_size),
            shrink_to_fit=shrink,
            color_theme=theme,
            mask=mask_spec,
            mask_size=float(mask_size),
            background_color=background,
        )
        with st.spinner("Placing words..."):
            _run_layout(words, style, int(seed))

    with st.expander("Help & glossary"):
        st.markdown(GLOSSARY_MD)

summary = st.session_state.get("summary")
style = st.session_state.get("style")
tab_cloud, tab_words, tab_tags = st.tabs(["Cloud", "Placed words", "Tag list"])

with tab_cloud:
    if summary is None or style is None:
        st.info("Set words and style in the sidebar, then **Run layout**.")
    else:
        for key in summary.warnings:
            st.warning(user_message(key))
        st.caption(f"Placed **{summary.placed_count}** of {summary.n_words} words")
        png = cloud_to_png_bytes(summary.results, style, scale=int(scale))
        st.image(png)
        c1, c2 = st.columns(2)
        with c1:
            st.download_button("Download cloud.png", data=png, file_name="cloud.png", mime="image/png")
        with c2:
            data = json.dumps(layout_to_dict(summary, style), indent=2)
            st.download_button("Download layout.json", data=data, file_name="layout.json", mime="application/json")

        st.subheader("Find word at point")
        px_col, py_col = st.columns(2)
        with px_col:
            qx = st.number_input("x (px)", min_value=0, max_value=style.canvas_width, value=style.canvas_width // 2)
        with py_col:
            qy = st.number_input("y (px)", min_value=0, max_value=style.canvas_height, value=style.canvas_height // 2)
        hit = word_at(summary.results, float(qx), float(qy))
        if hit is not None:
            st.success(f"**{hit.text}** (weight {hit.weight:g}, {hit.font_size}px)")
        else:
            st.caption("No word at this point.")

with tab_words:
    if summary is not None and summary.results:
        st.dataframe(
            [
                {
                    "text": w.text,
                    "weight": w.weight,
                    "font_size": w.font_size,
                    "rotation": w.rotation_deg,
                    "center_x": round(w.center_x, 1),
                    "center_y": round(w.center_y, 1),
                    "width": w.pixel_width,
                    "height": w.pixel_height,
                    "color": w.color,
                }
                for w in summary.results
            ],
            width="stretch",
        )
        if summary.dropped:
            st.caption("Not placed: " + ", ".join(summary.dropped))

with tab_tags:
    entries = build_tag_cloud([TagItem(text=w.text, count=w.weight) for w in words])
    palette = COLOR_THEMES["default"]
    tags_html = " ".join(
        f'<span style="font-size:{_TAG_FONT_REM[e.size_class]}rem;color:{palette[e.index % len(palette)]};'
        f'margin:0 0.4rem;">{html.escape(e.text)}</span>'
        for e in entries
    )
    st.markdown(tags_html, unsafe_allow_html=True)
