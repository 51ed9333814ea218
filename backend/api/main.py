"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.logging_config import setup_logging
from api.middleware import RateLimitMiddleware, RequestLoggingMiddleware, RequestTimeoutMiddleware
from api.routes import images, service
from services.cache_store import CacheStore
from services.placeholder_service import PlaceholderService
from settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None, caches: Optional[CacheStore] = None) -> FastAPI:
    """Build the app with its own cache store; tests pass their own settings."""
    app_settings = app_settings or default_settings
    setup_logging(app_settings)

    caches = caches or CacheStore(app_settings.MAX_CACHE_SIZE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        caches.clear()
        logger.info("Placeholder service stopped; caches cleared")

    app = FastAPI(
        title="Placeholder Image Service",
        description="Generates placeholder images from URL parameters",
        version=service.SERVICE_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.caches = caches
    app.state.placeholder_service = PlaceholderService(app_settings, caches)

    # Added innermost first: timeout, rate limit, CORS, then request logging outermost.
    app.add_middleware(RequestTimeoutMiddleware, timeout_ms=app_settings.REQUEST_TIMEOUT)
    if app_settings.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            window_ms=app_settings.RATE_LIMIT_WINDOW,
            max_requests=app_settings.RATE_LIMIT_MAX,
        )
    if app_settings.CORS_ENABLED:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[o.strip() for o in app_settings.CORS_ORIGIN.split(",")],
            allow_methods=["GET", "HEAD", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(RequestLoggingMiddleware)

    # Fixed routes go before the catch-all image route.
    app.include_router(service.router, tags=["service"])
    if app_settings.HEALTH_CHECK_ENABLED:
        app.add_api_route(app_settings.HEALTH_CHECK_PATH, service.health, methods=["GET"], tags=["service"])
    app.include_router(images.router, tags=["images"])

    logger.info(
        "Placeholder service ready (format=%s, cache size=%d, environment=%s)",
        app_settings.IMAGE_FORMAT,
        app_settings.MAX_CACHE_SIZE,
        app_settings.ENVIRONMENT,
    )
    return app


app = create_app()
