"""
HTTP middleware: request logging, per-IP rate limiting and request timeouts.
"""
import asyncio
import logging
import time
from typing import Dict, Optional, Tuple

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and duration."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            '%s "%s %s" %s %.1fms',
            client,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request counter keyed by client IP."""

    def __init__(self, app, window_ms: int, max_requests: int):
        super().__init__(app)
        self.window_seconds = window_ms / 1000.0
        self.max_requests = max_requests
        # ip -> (window start, count)
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep: Optional[float] = None

    def _sweep(self, now: float) -> None:
        """Drop every window that has expired; runs at most once per window length."""
        if self._last_sweep is not None and now - self._last_sweep < self.window_seconds:
            return
        self._last_sweep = now
        expired = [ip for ip, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for ip in expired:
            del self._windows[ip]
        if expired:
            logger.debug("Rate limiter dropped %d expired windows", len(expired))

    def _hit(self, client_ip: str, now: float) -> bool:
        self._sweep(now)
        start, count = self._windows.get(client_ip, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0
        count += 1
        self._windows[client_ip] = (start, count)
        return count <= self.max_requests

    async def dispatch(self, request: Request, call_next):
        client_ip = request.client.host if request.client else "unknown"
        if not self._hit(client_ip, time.monotonic()):
            logger.warning("Rate limit exceeded for %s", client_ip)
            return PlainTextResponse(RATE_LIMIT_MESSAGE, status_code=429)
        return await call_next(request)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 408 when a request takes longer than the configured timeout."""

    def __init__(self, app, timeout_ms: int):
        super().__init__(app)
        self.timeout_seconds = timeout_ms / 1000.0

    async def dispatch(self, request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Request timed out after %.1fs: %s", self.timeout_seconds, request.url.path)
            return PlainTextResponse("Request timeout", status_code=408)
