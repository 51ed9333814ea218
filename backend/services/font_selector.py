"""
Font selection for placeholder text.

Fonts come from a fixed ladder of pixel sizes. A request either names a
size (snapped to the nearest rung) or gets one picked from the canvas area.
Loaded fonts live in the font cache; a failed load falls back once to the
16px rung.
"""
from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Dict, Optional

from PIL import ImageFont

from domain.models import FontHandle
from services.cache_store import BoundedCache

logger = logging.getLogger(__name__)

FONT_SIZE_LADDER: Dict[int, str] = {
    8: "sans-8",
    16: "sans-16",
    32: "sans-32",
    64: "sans-64",
    128: "sans-128",
}
FALLBACK_FONT_KEY = "sans-16"

# (exclusive lower bound on width*height, ladder size), largest first
AREA_TIERS = (
    (800_000, 128),
    (200_000, 64),
    (50_000, 32),
    (10_000, 16),
)
SMALLEST_TIER = 8

DEFAULT_LINE_HEIGHT = 16

FontLoader = Callable[[str], FontHandle]


def size_for_key(font_key: str) -> int:
    for size, key in FONT_SIZE_LADDER.items():
        if key == font_key:
            return size
    raise KeyError(f"Unknown font key: {font_key}")


def nearest_font_size(requested: int, ladder: Dict[int, str] = FONT_SIZE_LADDER) -> int:
    """
    Snap a requested size to a ladder rung.

    Scans sizes in ascending order and only replaces the best match on a
    strictly smaller distance, so an exact tie keeps the smaller size.
    """
    if requested in ladder:
        return requested
    sizes = sorted(ladder)
    best = sizes[0]
    for size in sizes[1:]:
        if abs(size - requested) < abs(best - requested):
            best = size
    return best


def font_size_for_area(width: int, height: int) -> int:
    area = width * height
    for threshold, size in AREA_TIERS:
        if area > threshold:
            return size
    return SMALLEST_TIER


def resolve_font_key(
    width: int,
    height: int,
    font_size: Optional[int],
    min_font_size: int,
    max_font_size: int,
    ladder: Dict[int, str] = FONT_SIZE_LADDER,
) -> str:
    if font_size:
        clamped = max(min_font_size, min(max_font_size, font_size))
        return ladder[nearest_font_size(clamped, ladder)]
    return ladder[font_size_for_area(width, height)]


def _line_height(font) -> int:
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        if ascent + descent > 0:
            return int(ascent + descent)
    bbox = font.getbbox("Ay")
    height = int(bbox[3] - bbox[1]) if bbox else 0
    return height or DEFAULT_LINE_HEIGHT


def load_font(font_key: str, font_path: Optional[str] = None) -> FontHandle:
    """Load the font for a ladder key; raises OSError/KeyError on failure."""
    size = size_for_key(font_key)
    if font_path:
        font = ImageFont.truetype(font_path, size)
    else:
        # Pillow >= 10.1 ships a scalable default font.
        font = ImageFont.load_default(size=size)
    return FontHandle(key=font_key, size=size, font=font, line_height=_line_height(font))


def make_font_loader(font_path: Optional[str] = None) -> FontLoader:
    return partial(load_font, font_path=font_path)


def load_fallback_font(font_cache: BoundedCache[FontHandle], loader: FontLoader) -> Optional[FontHandle]:
    """Load the fallback rung once; None if even that fails."""
    cached = font_cache.get(FALLBACK_FONT_KEY)
    if cached is not None:
        return cached
    try:
        handle = loader(FALLBACK_FONT_KEY)
    except Exception:
        logger.exception("Error loading fallback font %s", FALLBACK_FONT_KEY)
        return None
    font_cache.put(FALLBACK_FONT_KEY, handle)
    return font_cache.get(FALLBACK_FONT_KEY) or handle


def select_font(
    width: int,
    height: int,
    font_size: Optional[int],
    settings,
    font_cache: BoundedCache[FontHandle],
    loader: Optional[FontLoader] = None,
) -> Optional[FontHandle]:
    """
    Return a FontHandle for the request, loading and caching it on a miss.

    A None return means both the chosen font and the fallback failed to load.
    """
    loader = loader or make_font_loader(getattr(settings, "FONT_PATH", None))
    font_key = resolve_font_key(width, height, font_size, settings.MIN_FONT_SIZE, settings.MAX_FONT_SIZE)

    cached = font_cache.get(font_key)
    if cached is not None:
        return cached

    try:
        handle = loader(font_key)
    except Exception:
        logger.exception("Error loading font %s", font_key)
        return load_fallback_font(font_cache, loader)

    font_cache.put(font_key, handle)
    logger.debug("Loaded font %s (line height %d)", font_key, handle.line_height)
    return handle
