"""
Placeholder image route.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import PlainTextResponse

from domain.models import CacheEntry, ImageFormat, RenderRequest
from services.cache_keys import build_cache_control, build_content_disposition
from services.image_renderer import RenderError
from services.placeholder_service import PlaceholderService

router = APIRouter()
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Error generating image"


def _image_headers(service: PlaceholderService, request: RenderRequest, entry: CacheEntry) -> dict:
    settings = service.settings
    headers = {"Cache-Control": build_cache_control(settings)}
    if entry.etag:
        headers["ETag"] = entry.etag
    disposition = build_content_disposition(
        settings.CONTENT_DISPOSITION,
        request.width,
        request.height,
        ImageFormat.from_setting(settings.IMAGE_FORMAT),
    )
    if disposition:
        headers["Content-Disposition"] = disposition
    return headers


@router.get("/{dims}/{bg_color}/{fg_color}")
def get_placeholder_image(
    request: Request,
    dims: str,
    bg_color: str,
    fg_color: str,
    text: Optional[str] = None,
    font_size: Optional[str] = Query(None, alias="fontSize"),
    text_wrap: Optional[str] = Query(None, alias="textWrap"),
    text_wrap_width: Optional[str] = Query(None, alias="textWrapWidth"),
):
    """Render (or serve from cache) a WIDTHxHEIGHT placeholder image."""
    service: PlaceholderService = request.app.state.placeholder_service

    if service.settings.DEBUG:
        logger.debug(
            "Request params: dims=%s bg=%s fg=%s text=%r fontSize=%s textWrap=%s textWrapWidth=%s",
            dims, bg_color, fg_color, text, font_size, text_wrap, text_wrap_width,
        )

    render_request, failure = service.build_request(
        dims, bg_color, fg_color,
        text=text,
        font_size=font_size,
        text_wrap=text_wrap,
        text_wrap_width=text_wrap_width,
    )
    if failure is not None:
        return PlainTextResponse(failure.message, status_code=400)

    try:
        entry, _ = service.generate(render_request)
    except RenderError as exc:
        logger.exception("Image generation failed: %s", exc.detail)
        if service.settings.VERBOSE_ERRORS:
            return PlainTextResponse(f"{GENERIC_ERROR_MESSAGE}: {exc.detail}", status_code=500)
        return PlainTextResponse(GENERIC_ERROR_MESSAGE, status_code=500)

    headers = _image_headers(service, render_request, entry)
    if entry.etag and request.headers.get("if-none-match") == entry.etag:
        return Response(status_code=304, headers=headers)
    return Response(content=entry.data, media_type=entry.mime_type, headers=headers)
