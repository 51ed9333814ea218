import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Settings that change rendered output or response headers; tests pass explicit overrides instead.
_RENDER_ENV_VARS = (
    "IMAGE_FORMAT",
    "IMAGE_QUALITY",
    "MAX_CACHE_SIZE",
    "ETAG_ENABLED",
    "FONT_PATH",
    "CONTENT_DISPOSITION",
    "RATE_LIMIT_ENABLED",
    "CORS_ENABLED",
    "LOG_FILE_ENABLED",
    "DEFAULT_TEXT_WRAP",
    "DEFAULT_TEXT_WRAP_WIDTH",
    "MIN_TEXT_WRAP_WIDTH",
    "MAX_TEXT_WRAP_WIDTH",
    "MIN_FONT_SIZE",
    "MAX_FONT_SIZE",
    "MIN_IMAGE_DIMENSION",
    "MAX_IMAGE_DIMENSION",
)


@pytest.fixture(autouse=True)
def _clean_render_env(monkeypatch):
    for name in _RENDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
