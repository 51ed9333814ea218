import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def setup_logging(settings) -> logging.Logger:
    """Configure the root logger from settings; safe to call more than once."""
    level = getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)
    if settings.DEBUG:
        level = logging.DEBUG

    root = logging.getLogger()
    root.setLevel(level)

    # Drop handlers from a previous call (app factory reuse in tests).
    for handler in list(root.handlers):
        if getattr(handler, "_placeholder_handler", False):
            root.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._placeholder_handler = True
    root.addHandler(console_handler)

    if settings.LOG_FILE_ENABLED:
        log_file = Path(settings.LOG_FILE_PATH)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        file_handler._placeholder_handler = True
        root.addHandler(file_handler)

    # Request lines come from our own middleware.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.INFO)

    return root
