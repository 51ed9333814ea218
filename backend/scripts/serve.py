"""Run the placeholder image service.

Usage:
    python scripts/serve.py [--host 0.0.0.0] [--port 5930] [--reload]

Host and port default to the HOST / PORT settings.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from settings import settings  # noqa: E402

logger = logging.getLogger("serve")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve placeholder images over HTTP.")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args(argv)

    logger.info("Starting placeholder service on http://%s:%s", args.host, args.port)
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        app_dir=str(BACKEND_ROOT),
        log_level=str(settings.LOG_LEVEL).lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
