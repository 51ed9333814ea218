"""
Service info, health check and favicon routes.
"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response

router = APIRouter()

SERVICE_NAME = "Placeholder Image Service"
SERVICE_VERSION = "0.1.0"
_STARTED_AT = time.monotonic()


@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Browsers probe for this; answer with no content."""
    return Response(status_code=204)


@router.get("/")
async def root(request: Request):
    """Service description and usage examples."""
    s = request.app.state.settings
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Placeholder image generation service",
        "usage": "/{width}x{height}/{bgColor}/{fgColor}?text=custom&fontSize=16&textWrap=true&textWrapWidth=80",
        "examples": [
            "/800x600/ffffff/000000?text=Hello",
            "/400x300/ff0000/00ff00?text=Custom&fontSize=32",
            "/600x400/cccccc/333333?text=Long text that wraps&textWrap=true",
            "/500x300/000000/ffffff?text=Wrapped text&fontSize=24&textWrap=true&textWrapWidth=70",
        ],
        "parameters": {
            "text": "Custom text to display (defaults to dimensions)",
            "fontSize": f"Font size in pixels ({s.MIN_FONT_SIZE}-{s.MAX_FONT_SIZE}, defaults to auto)",
            "textWrap": f"Enable text wrapping (true/false, defaults to {str(s.DEFAULT_TEXT_WRAP).lower()})",
            "textWrapWidth": (
                f"Text wrap width percentage ({s.MIN_TEXT_WRAP_WIDTH}-{s.MAX_TEXT_WRAP_WIDTH}, "
                f"defaults to {s.DEFAULT_TEXT_WRAP_WIDTH})"
            ),
        },
    }


async def health(request: Request):
    """Health check endpoint; mounted at the configured path."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "environment": request.app.state.settings.ENVIRONMENT,
        "cache": request.app.state.caches.stats(),
    }
