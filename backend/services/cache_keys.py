"""
Cache keys and HTTP caching headers for rendered placeholders.
"""
import base64
from typing import Optional

from domain.models import ImageFormat, RenderRequest

CACHE_KEY_SEPARATOR = "-"


def build_cache_key(request: RenderRequest, image_format: ImageFormat, quality: int) -> str:
    """
    Join every render-affecting field in a fixed order.

    Identical requests under identical output settings always map to the
    same key; the separator keeps distinct requests apart in practice, it is
    not a hash.
    """
    parts = [
        request.dims,
        request.bg_color,
        request.fg_color,
        request.text,
        str(request.font_size) if request.font_size else "auto",
        "true" if request.text_wrap else "false",
        str(request.text_wrap_width),
        image_format.value,
        str(quality),
    ]
    return CACHE_KEY_SEPARATOR.join(parts)


def build_etag(cache_key: str, enabled: bool = True) -> Optional[str]:
    """Quoted base64 of the cache key, or None when ETags are switched off."""
    if not enabled:
        return None
    encoded = base64.b64encode(cache_key.encode("utf-8")).decode("ascii")
    return f'"{encoded}"'


def build_cache_control(settings) -> str:
    visibility = "public" if settings.CACHE_PUBLIC else "private"
    value = f"{visibility}, max-age={settings.CACHE_MAX_AGE}"
    if settings.CACHE_IMMUTABLE:
        value += ", immutable"
    return value


def build_filename(width: int, height: int, image_format: ImageFormat) -> str:
    return f"placeholder-{width}x{height}.{image_format.value}"


def build_content_disposition(prefix: Optional[str], width: int, height: int, image_format: ImageFormat) -> Optional[str]:
    if not prefix:
        return None
    return f'{prefix}; filename="{build_filename(width, height, image_format)}"'
