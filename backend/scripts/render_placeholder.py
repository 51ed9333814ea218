"""Render a single placeholder image to disk without starting the server.

Usage:
    python scripts/render_placeholder.py 800x600 ffffff 000000 --text "Hello" [--font-size 32]
        [--wrap --wrap-width 70] [--out placeholder.png]

Useful for checking font sizing and wrapping against the current settings.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from services.cache_keys import build_filename  # noqa: E402
from services.cache_store import CacheStore  # noqa: E402
from services.image_renderer import RenderError  # noqa: E402
from services.placeholder_service import PlaceholderService  # noqa: E402
from settings import settings  # noqa: E402

logger = logging.getLogger("render_placeholder")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render one placeholder image.")
    parser.add_argument("dims", help="WIDTHxHEIGHT, e.g. 800x600")
    parser.add_argument("bg_color", help="6-digit hex background colour")
    parser.add_argument("fg_color", help="6-digit hex text colour")
    parser.add_argument("--text")
    parser.add_argument("--font-size")
    parser.add_argument("--wrap", action="store_true")
    parser.add_argument("--wrap-width")
    parser.add_argument("--out", type=Path, help="Output path (defaults to placeholder-WxH.<ext>)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    service = PlaceholderService(settings, CacheStore(settings.MAX_CACHE_SIZE))
    request, failure = service.build_request(
        args.dims,
        args.bg_color,
        args.fg_color,
        text=args.text,
        font_size=args.font_size,
        text_wrap="true" if args.wrap else None,
        text_wrap_width=args.wrap_width,
    )
    if failure is not None:
        logger.error("%s", failure.message)
        return 2

    try:
        entry, _ = service.generate(request)
    except RenderError as exc:
        logger.error("Render failed: %s", exc.detail)
        return 1

    out_path = args.out or Path(build_filename(request.width, request.height, service.options.image_format))
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(entry.data)
    logger.info("Wrote %s (%s, %d bytes)", out_path, entry.mime_type, len(entry.data))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
