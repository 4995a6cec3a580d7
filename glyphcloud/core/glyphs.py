# glyphcloud/core/glyphs.py
"""
Glyph footprint: rotate a measured line box, pad it, fill the tight ink box and
downsample it to occupancy-grid cells. A cell is occupied if any covered pixel falls inside it.
"""

from __future__ import annotations

import math

import numpy as np
from PIL import Image

from glyphcloud.core.config import GLYPH_PADDING_PX
from glyphcloud.core.error_codes import GlyphMeasureError
from glyphcloud.core.types import GlyphMask, GlyphRun


def rotate_image(img: Image.Image, rotation_deg: float, resample=Image.Resampling.NEAREST) -> Image.Image:
    """Rotate clockwise on screen (y down) by rotation_deg, expanding the box."""
    if rotation_deg % 360 == 0:
        return img
    # PIL rotates counter-clockwise
    return img.rotate(-rotation_deg, expand=True, resample=resample)


def rotate_bitmap(occupied: np.ndarray, rotation_deg: float) -> np.ndarray:
    """Rotate a bool bitmap (rows = y) the same way rotate_image does."""
    if rotation_deg % 360 == 0:
        return occupied
    img = Image.fromarray(occupied.astype(np.uint8) * 255)
    return np.asarray(rotate_image(img, rotation_deg)) > 0


def rotated_extent(width: float, height: float, rotation_deg: float) -> tuple[int, int]:
    """Bounding box of a width x height box rotated by rotation_deg, rounded up."""
    rad = math.radians(rotation_deg)
    cos_a = abs(math.cos(rad))
    sin_a = abs(math.sin(rad))
    # round away float noise (cos 90 deg != 0) before ceil
    w = math.ceil(round(width * cos_a + height * sin_a, 6))
    h = math.ceil(round(width * sin_a + height * cos_a, 6))
    return int(w), int(h)


def build_glyph_mask(
    run: GlyphRun,
    rotation_deg: float,
    grid_size: int,
    padding_px: int = GLYPH_PADDING_PX,
) -> GlyphMask:
    """
    Footprint W x H = rotated extent + padding; rotated ink centred inside it.
    Raises GlyphMeasureError when the run has no ink.
    """
    g = max(1, int(grid_size))
    fw, fh = rotated_extent(run.pixel_width, run.pixel_height, rotation_deg)
    fw += padding_px
    fh += padding_px

    rotated = rotate_bitmap(np.asarray(run.occupied, dtype=bool), rotation_deg)
    rh, rw = rotated.shape
    fw = max(fw, rw)
    fh = max(fh, rh)
    ox = (fw - rw) // 2
    oy = (fh - rh) // 2
    footprint = np.zeros((fh, fw), dtype=bool)
    footprint[oy:oy + rh, ox:ox + rw] = rotated
    if not footprint.any():
        raise GlyphMeasureError("Glyph run has no inked pixels")

    ink_y, ink_x = np.nonzero(footprint)
    ink_box = (int(ink_x.min()), int(ink_y.min()), int(ink_x.max()) + 1, int(ink_y.max()) + 1)
    x0, y0, x1, y1 = ink_box

    # the whole ink box counts as inked, so boxes of placed words never intersect
    gw = math.ceil(fw / g)
    gh = math.ceil(fh / g)
    padded = np.zeros((gh * g, gw * g), dtype=bool)
    padded[y0:y1, x0:x1] = True
    cells = padded.reshape(gh, g, gw, g).any(axis=(1, 3))
    cell_y, cell_x = np.nonzero(cells)
    offsets = np.column_stack([cell_x, cell_y]).astype(int)
    return GlyphMask(
        offsets=offsets,
        grid_width=gw,
        grid_height=gh,
        pixel_width=fw,
        pixel_height=fh,
        ink_box=ink_box,
    )
