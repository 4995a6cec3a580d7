# glyphcloud/core/mask.py
"""
Mask building: rasterize a built-in silhouette (heart, circle, star, cloud) or an
external image into a MaskRegion. Shapes are shapely polygons filled with Pillow;
a pixel is inside when its alpha > MASK_ALPHA_THRESHOLD.
Image decode failures are logged and return None so layout can continue unmasked.
"""

from __future__ import annotations

import base64
import io
import logging
import math
from pathlib import Path
from typing import Callable
from urllib.parse import unquote_to_bytes

import numpy as np
from PIL import Image, ImageDraw
from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from glyphcloud.core.config import (
    HEART_BEZIER_SAMPLES,
    MASK_ALPHA_THRESHOLD,
    MASK_IMAGE_FIT_RATIO,
    STAR_INNER_RATIO,
    STAR_POINTS,
)
from glyphcloud.core.types import MaskRegion, MaskSpec, StyleConfig

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[object, int], Image.Image]


# ----- Built-in shapes (coordinates in a size x size square, y down) -----

def _cubic_bezier(p0, p1, p2, p3, n: int) -> list[tuple[float, float]]:
    out = []
    for i in range(1, n + 1):
        t = i / n
        u = 1.0 - t
        x = u ** 3 * p0[0] + 3 * u * u * t * p1[0] + 3 * u * t * t * p2[0] + t ** 3 * p3[0]
        y = u ** 3 * p0[1] + 3 * u * u * t * p1[1] + 3 * u * t * t * p2[1] + t ** 3 * p3[1]
        out.append((x, y))
    return out


def heart_polygon(size: float, samples: int = HEART_BEZIER_SAMPLES) -> Polygon:
    """Heart outline from four cubic Bezier segments, point at the bottom."""
    cx = size / 2.0
    cy = size / 2.2
    s = size / 100.0
    start = (cx, cy + 30 * s)
    segments = [
        ((cx, cy + 20 * s), (cx - 25 * s, cy - 10 * s), (cx - 25 * s, cy - 20 * s)),
        ((cx - 25 * s, cy - 35 * s), (cx - 10 * s, cy - 40 * s), (cx, cy - 30 * s)),
        ((cx + 10 * s, cy - 40 * s), (cx + 25 * s, cy - 35 * s), (cx + 25 * s, cy - 20 * s)),
        ((cx + 25 * s, cy - 10 * s), (cx, cy + 20 * s), (cx, cy + 30 * s)),
    ]
    pts = [start]
    current = start
    for c1, c2, end in segments:
        pts.extend(_cubic_bezier(current, c1, c2, end, samples))
        current = end
    poly = Polygon(pts)
    return poly if poly.is_valid else poly.buffer(0)


def circle_polygon(size: float) -> Polygon:
    radius = max(size / 2.0 - 10.0, size / 4.0)
    return Point(size / 2.0, size / 2.0).buffer(radius, resolution=32)


def star_polygon(size: float, points: int = STAR_POINTS, inner_ratio: float = STAR_INNER_RATIO) -> Polygon:
    """Star with `points` tips; first tip points straight up."""
    cx = cy = size / 2.0
    outer = max(size / 2.0 - 20.0, size / 4.0)
    inner = outer * inner_ratio
    n = max(3, int(points))
    coords = []
    for i in range(n * 2):
        r = outer if i % 2 == 0 else inner
        angle = i * math.pi / n - math.pi / 2.0
        coords.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return Polygon(coords)


def cloud_polygon(size: float) -> BaseGeometry:
    """Five overlapping circles."""
    cx = cy = size / 2.0
    s = size / 200.0
    lobes = [
        (cx - 40 * s, cy + 10 * s, 35 * s),
        (cx, cy - 20 * s, 50 * s),
        (cx + 50 * s, cy, 40 * s),
        (cx + 20 * s, cy + 20 * s, 35 * s),
        (cx - 20 * s, cy + 25 * s, 30 * s),
    ]
    return unary_union([Point(x, y).buffer(r, resolution=32) for x, y, r in lobes])


BUILTIN_SHAPES: dict[str, Callable[[float], BaseGeometry]] = {
    "heart": heart_polygon,
    "circle": circle_polygon,
    "star": star_polygon,
    "cloud": cloud_polygon,
}


def _iter_polygons(geom: BaseGeometry) -> list[Polygon]:
    if geom is None or geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if isinstance(geom, MultiPolygon):
        return list(geom.geoms)
    return [g for g in getattr(geom, "geoms", []) if isinstance(g, Polygon)]


def rasterize_geometry(geom: BaseGeometry, size: int) -> Image.Image:
    """Fill polygon(s) opaque black on a transparent size x size RGBA image; holes stay clear."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    for poly in _iter_polygons(geom):
        draw.polygon(list(poly.exterior.coords), fill=(0, 0, 0, 255))
        for hole in poly.interiors:
            draw.polygon(list(hole.coords), fill=(0, 0, 0, 0))
    return img


def region_from_image(img: Image.Image, threshold: int = MASK_ALPHA_THRESHOLD) -> MaskRegion:
    """Pixels with alpha > threshold are inside."""
    alpha = np.asarray(img.convert("RGBA"))[:, :, 3]
    return MaskRegion(width=img.width, height=img.height, bitmap=alpha > threshold)


# ----- External images -----

def _is_svg_bytes(data: bytes) -> bool:
    head = data[:512].lstrip().lower()
    return head.startswith(b"<svg") or (head.startswith(b"<?xml") and b"<svg" in data[:2048].lower())


def _read_source(source: object) -> tuple[bytes, bool]:
    """Return (raw bytes, is_svg) for a path, data URI or bytes."""
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        return data, _is_svg_bytes(data)
    text = str(source)
    if text.startswith("data:"):
        header, _, payload = text.partition(",")
        if ";base64" in header:
            data = base64.b64decode(payload)
        else:
            data = unquote_to_bytes(payload)
        return data, "svg" in header.lower() or _is_svg_bytes(data)
    path = Path(text)
    if not path.exists():
        raise FileNotFoundError(f"Mask image not found: {path}")
    data = path.read_bytes()
    return data, path.suffix.lower() == ".svg" or _is_svg_bytes(data)


def _with_alpha(img: Image.Image) -> Image.Image:
    """RGBA image; sources without alpha use inverted luminance (dark = inside)."""
    if "A" in img.getbands() or "transparency" in img.info:
        return img.convert("RGBA")
    lum = img.convert("L")
    alpha = Image.eval(lum, lambda v: 255 - v)
    out = Image.new("RGBA", img.size, (0, 0, 0, 0))
    out.putalpha(alpha)
    return out


def decode_image(source: object, target_size: int) -> Image.Image:
    """Decode path / data URI / bytes to an RGBA image. SVG goes through cairosvg."""
    data, is_svg = _read_source(source)
    if is_svg:
        import cairosvg

        data = cairosvg.svg2png(bytestring=data, output_width=target_size)
    img = Image.open(io.BytesIO(data))
    img.load()
    return _with_alpha(img)


def fit_image(img: Image.Image, target_size: int, fit_ratio: float = MASK_IMAGE_FIT_RATIO) -> Image.Image:
    """Scale to fit target_size x target_size (aspect preserved, times fit_ratio), centred."""
    scale = min(target_size / img.width, target_size / img.height) * fit_ratio
    w = max(1, int(round(img.width * scale)))
    h = max(1, int(round(img.height * scale)))
    resized = img.resize((w, h), Image.Resampling.LANCZOS)
    canvas = Image.new("RGBA", (target_size, target_size), (0, 0, 0, 0))
    canvas.paste(resized, ((target_size - w) // 2, (target_size - h) // 2))
    return canvas


# ----- Entry points -----

def mask_target_size(style: StyleConfig) -> int:
    """Mask edge in px: min(canvas w, h) * mask_size, mask_size clamped to [0.1, 1.0]."""
    ratio = min(1.0, max(0.1, float(style.mask_size)))
    return max(1, int(min(style.canvas_width, style.canvas_height) * ratio))


def build_mask(
    mask_spec: MaskSpec,
    target_size: int,
    decoder: ImageDecoder | None = None,
) -> MaskRegion | None:
    """
    Built-in shape name or image reference -> MaskRegion, or None.
    None means "no usable mask": caller lays out on the full canvas.
    """
    if mask_spec is None or target_size <= 0:
        return None
    if isinstance(mask_spec, str) and mask_spec.strip().lower() in BUILTIN_SHAPES:
        geom = BUILTIN_SHAPES[mask_spec.strip().lower()](float(target_size))
        region = region_from_image(rasterize_geometry(geom, target_size))
        logger.debug(f"Built-in mask {mask_spec!r}: {int(region.bitmap.sum())} px inside")
        return region

    decode = decoder or decode_image
    try:
        img = decode(mask_spec, target_size)
        region = region_from_image(fit_image(img, target_size))
    except Exception as e:
        label = mask_spec[:60] if isinstance(mask_spec, str) else f"<{len(mask_spec)} bytes>"
        logger.warning(f"Mask load failed for {label!r}: {type(e).__name__}: {e}; using full canvas")
        return None
    if region.is_empty:
        logger.warning("Mask image has no opaque pixels; using full canvas")
        return None
    return region


class MaskBuilder:
    """Builds MaskRegion objects; decoder is injectable for tests and hosts."""

    def __init__(self, decoder: ImageDecoder | None = None) -> None:
        self.decoder = decoder

    def build(self, mask_spec: MaskSpec, target_size: int) -> MaskRegion | None:
        return build_mask(mask_spec, target_size, decoder=self.decoder)
