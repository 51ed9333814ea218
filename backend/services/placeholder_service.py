"""
Request-to-image pipeline.

Validation -> cache key -> image cache lookup -> font selection -> text
layout -> render -> cache insert. The caches are owned by a CacheStore that
the caller creates once and passes in.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from domain.models import CacheEntry, ImageFormat, OutputOptions, RenderRequest, ValidationFailure
from services.cache_keys import build_cache_key, build_etag
from services.cache_store import CacheStore
from services.font_selector import FontLoader, make_font_loader, select_font
from services.image_renderer import RenderError, render_image
from services.text_layout import layout_text
from services.validation import validate_request

logger = logging.getLogger(__name__)


def _parse_bool(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    return raw == "true"


class PlaceholderService:
    def __init__(self, settings, caches: CacheStore, font_loader: Optional[FontLoader] = None):
        self.settings = settings
        self.caches = caches
        self.font_loader = font_loader or make_font_loader(settings.FONT_PATH)

    @property
    def options(self) -> OutputOptions:
        return OutputOptions(
            image_format=ImageFormat.from_setting(self.settings.IMAGE_FORMAT),
            quality=self.settings.IMAGE_QUALITY,
            jpeg_progressive=self.settings.JPEG_PROGRESSIVE,
            png_compression_level=self.settings.PNG_COMPRESSION_LEVEL,
        )

    def build_request(
        self,
        dims: str,
        bg_color: str,
        fg_color: str,
        text: Optional[str] = None,
        font_size: Optional[str] = None,
        text_wrap: Optional[str] = None,
        text_wrap_width: Optional[str] = None,
    ) -> Tuple[Optional[RenderRequest], Optional[ValidationFailure]]:
        """Turn raw path/query strings into a validated RenderRequest."""
        params, failure = validate_request(dims, bg_color, fg_color, font_size, text_wrap_width, self.settings)
        if failure is not None:
            return None, failure

        request = RenderRequest(
            width=params.width,
            height=params.height,
            bg_color=bg_color,
            fg_color=fg_color,
            text=text if text else dims,
            font_size=params.font_size,
            text_wrap=_parse_bool(text_wrap, self.settings.DEFAULT_TEXT_WRAP),
            text_wrap_width=params.text_wrap_width,
        )
        return request, None

    def cache_key_for(self, request: RenderRequest) -> str:
        options = self.options
        return build_cache_key(request, options.image_format, options.quality)

    def generate(self, request: RenderRequest) -> Tuple[CacheEntry, bool]:
        """
        Return (entry, cache_hit) for a validated request.

        Raises RenderError when no font can be loaded or rendering fails.
        """
        options = self.options
        cache_key = build_cache_key(request, options.image_format, options.quality)

        entry, hit = self.caches.image_cache.get_or_create(
            cache_key, lambda: self._render_entry(request, cache_key, options)
        )
        if hit:
            logger.debug("Image cache hit for %s", cache_key)
        return entry, hit

    def _render_entry(self, request: RenderRequest, cache_key: str, options: OutputOptions) -> CacheEntry:
        font = select_font(
            request.width,
            request.height,
            request.font_size,
            self.settings,
            self.caches.font_cache,
            loader=self.font_loader,
        )
        if font is None:
            raise RenderError("No font available for rendering")

        layout = layout_text(
            request.text,
            font,
            request.width,
            request.height,
            request.text_wrap,
            request.text_wrap_width,
        )
        data, mime_type = render_image(
            request.width,
            request.height,
            request.bg_color,
            request.fg_color,
            font,
            layout,
            options,
        )
        logger.info(
            "Generated %s %s with font %s (%d lines, %d bytes)",
            request.dims,
            mime_type,
            font.key,
            len(layout.lines),
            len(data),
        )
        return CacheEntry(data=data, mime_type=mime_type, etag=build_etag(cache_key, self.settings.ETAG_ENABLED))
