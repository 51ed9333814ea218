import os
from typing import Any, Optional

# Basic settings helper to read environment configuration.


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    # Unparseable or zero values fall back to the default.
    try:
        parsed = int(val) if val is not None else 0
    except ValueError:
        return default
    return parsed or default


def _as_str(val: str | None, default: Optional[str]) -> Optional[str]:
    return val if val else default


class Settings:
    def __init__(self, **overrides: Any) -> None:
        # Server
        self.HOST: str = _as_str(os.getenv("HOST"), "localhost")
        self.PORT: int = _as_int(os.getenv("PORT"), 5930)
        self.ENVIRONMENT: str = _as_str(os.getenv("ENVIRONMENT"), "development")
        self.DEBUG: bool = _as_bool(os.getenv("DEBUG"), False)
        self.REQUEST_TIMEOUT: int = _as_int(os.getenv("REQUEST_TIMEOUT"), 30000)

        # Caching
        self.MAX_CACHE_SIZE: int = _as_int(os.getenv("MAX_CACHE_SIZE"), 100)
        self.CACHE_MAX_AGE: int = _as_int(os.getenv("CACHE_MAX_AGE"), 31536000)
        self.CACHE_PUBLIC: bool = _as_bool(os.getenv("CACHE_PUBLIC"), True)
        self.CACHE_IMMUTABLE: bool = _as_bool(os.getenv("CACHE_IMMUTABLE"), True)
        self.ETAG_ENABLED: bool = _as_bool(os.getenv("ETAG_ENABLED"), True)

        # Image output
        self.IMAGE_FORMAT: str = _as_str(os.getenv("IMAGE_FORMAT"), "png").lower()
        self.IMAGE_QUALITY: int = _as_int(os.getenv("IMAGE_QUALITY"), 90)
        self.JPEG_PROGRESSIVE: bool = _as_bool(os.getenv("JPEG_PROGRESSIVE"), True)
        self.PNG_COMPRESSION_LEVEL: int = _as_int(os.getenv("PNG_COMPRESSION_LEVEL"), 6)
        self.MAX_IMAGE_DIMENSION: int = _as_int(os.getenv("MAX_IMAGE_DIMENSION"), 5000)
        self.MIN_IMAGE_DIMENSION: int = _as_int(os.getenv("MIN_IMAGE_DIMENSION"), 1)

        # Fonts
        self.MIN_FONT_SIZE: int = _as_int(os.getenv("MIN_FONT_SIZE"), 8)
        self.MAX_FONT_SIZE: int = _as_int(os.getenv("MAX_FONT_SIZE"), 128)
        self.FONT_PATH: Optional[str] = _as_str(os.getenv("FONT_PATH"), None)

        # Text wrapping
        self.DEFAULT_TEXT_WRAP: bool = _as_bool(os.getenv("DEFAULT_TEXT_WRAP"), False)
        self.DEFAULT_TEXT_WRAP_WIDTH: int = _as_int(os.getenv("DEFAULT_TEXT_WRAP_WIDTH"), 80)
        self.MIN_TEXT_WRAP_WIDTH: int = _as_int(os.getenv("MIN_TEXT_WRAP_WIDTH"), 50)
        self.MAX_TEXT_WRAP_WIDTH: int = _as_int(os.getenv("MAX_TEXT_WRAP_WIDTH"), 95)

        # Logging
        self.LOG_LEVEL: str = _as_str(os.getenv("LOG_LEVEL"), "info")
        self.LOG_FILE_ENABLED: bool = _as_bool(os.getenv("LOG_FILE_ENABLED"), False)
        self.LOG_FILE_PATH: str = _as_str(os.getenv("LOG_FILE_PATH"), "./logs/app.log")

        # CORS / rate limiting
        self.CORS_ENABLED: bool = _as_bool(os.getenv("CORS_ENABLED"), False)
        self.CORS_ORIGIN: str = _as_str(os.getenv("CORS_ORIGIN"), "*")
        self.RATE_LIMIT_ENABLED: bool = _as_bool(os.getenv("RATE_LIMIT_ENABLED"), False)
        self.RATE_LIMIT_WINDOW: int = _as_int(os.getenv("RATE_LIMIT_WINDOW"), 900000)
        self.RATE_LIMIT_MAX: int = _as_int(os.getenv("RATE_LIMIT_MAX"), 100)

        # Health check
        self.HEALTH_CHECK_ENABLED: bool = _as_bool(os.getenv("HEALTH_CHECK_ENABLED"), True)
        self.HEALTH_CHECK_PATH: str = _as_str(os.getenv("HEALTH_CHECK_PATH"), "/health")

        # Responses
        self.CONTENT_DISPOSITION: Optional[str] = _as_str(os.getenv("CONTENT_DISPOSITION"), None)
        self.VERBOSE_ERRORS: bool = _as_bool(os.getenv("VERBOSE_ERRORS"), False)

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Unknown setting: {name}")
            setattr(self, name, value)


settings = Settings()
