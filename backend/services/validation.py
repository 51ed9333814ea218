"""
Request validation for placeholder images.

Every check returns a ValidationFailure (or None) instead of raising; the
route turns a failure into a 400 before any cache or render work happens.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from domain.models import ValidationFailure, ValidationKind
from services.color import is_valid_hex_color

DIMENSIONS_FORMAT_MESSAGE = "Invalid dimensions format. Use WxH with positive numbers, e.g., 800x600"

_INT_RE = re.compile(r"-?[0-9]+")


def _parse_int(value: str | None) -> Optional[int]:
    # ASCII digits with an optional leading minus; no whitespace or '_' grouping.
    if value is None or _INT_RE.fullmatch(value) is None:
        return None
    return int(value)


def parse_dimensions(dims: str) -> Optional[Tuple[int, int]]:
    """Parse '800x600' into (800, 600); None when the shape is wrong."""
    parts = (dims or "").split("x")
    if len(parts) != 2:
        return None
    width = _parse_int(parts[0])
    height = _parse_int(parts[1])
    if width is None or height is None:
        return None
    return width, height


def validate_dimensions(width: int, height: int, min_dimension: int, max_dimension: int) -> Optional[ValidationFailure]:
    if width <= 0 or height <= 0:
        return ValidationFailure(ValidationKind.DIMENSIONS_FORMAT, DIMENSIONS_FORMAT_MESSAGE)
    if width > max_dimension or height > max_dimension:
        return ValidationFailure(
            ValidationKind.DIMENSIONS_TOO_LARGE,
            f"Image dimensions exceed maximum allowed size of {max_dimension}x{max_dimension}",
        )
    if width < min_dimension or height < min_dimension:
        return ValidationFailure(
            ValidationKind.DIMENSIONS_TOO_SMALL,
            f"Image dimensions below minimum allowed size of {min_dimension}x{min_dimension}",
        )
    return None


def validate_colors(bg_color: str, fg_color: str) -> Optional[ValidationFailure]:
    if not is_valid_hex_color(bg_color):
        return ValidationFailure(
            ValidationKind.BACKGROUND_COLOR,
            "Invalid background color format. Use 6-digit hex, e.g., ffffff",
        )
    if not is_valid_hex_color(fg_color):
        return ValidationFailure(
            ValidationKind.FOREGROUND_COLOR,
            "Invalid foreground color format. Use 6-digit hex, e.g., 000000",
        )
    return None


def validate_font_size(font_size: Optional[int], min_size: int, max_size: int) -> Optional[ValidationFailure]:
    if font_size is not None and (font_size < min_size or font_size > max_size):
        return ValidationFailure(
            ValidationKind.FONT_SIZE,
            f"Invalid font size. Must be between {min_size} and {max_size} pixels",
        )
    return None


def validate_text_wrap_width(text_wrap_width: Optional[int], min_width: int, max_width: int) -> Optional[ValidationFailure]:
    if text_wrap_width is None or text_wrap_width < min_width or text_wrap_width > max_width:
        return ValidationFailure(
            ValidationKind.TEXT_WRAP_WIDTH,
            f"Invalid text wrap width. Must be between {min_width} and {max_width} percent",
        )
    return None


def parse_font_size(raw: str | None) -> Tuple[Optional[int], bool]:
    """Return (size, ok). A missing value means auto sizing and is ok."""
    if raw is None or raw == "":
        return None, True
    value = _parse_int(raw)
    return value, value is not None


def parse_text_wrap_width(raw: str | None, default: int) -> Optional[int]:
    """Missing falls back to the configured default; garbage becomes None."""
    if raw is None or raw == "":
        return default
    return _parse_int(raw)


@dataclass(frozen=True)
class ValidatedParams:
    width: int
    height: int
    font_size: Optional[int]
    text_wrap_width: int


def validate_request(
    dims: str,
    bg_color: str,
    fg_color: str,
    font_size: str | None,
    text_wrap_width: str | None,
    settings,
) -> Tuple[Optional[ValidatedParams], Optional[ValidationFailure]]:
    """
    Parse and check raw request values in order, stopping at the first failure.

    Order: dimensions format, dimension bounds, background colour,
    foreground colour, font size, wrap width.
    """
    parsed = parse_dimensions(dims)
    if parsed is None:
        return None, ValidationFailure(ValidationKind.DIMENSIONS_FORMAT, DIMENSIONS_FORMAT_MESSAGE)
    width, height = parsed

    failure = validate_dimensions(width, height, settings.MIN_IMAGE_DIMENSION, settings.MAX_IMAGE_DIMENSION)
    if failure is None:
        failure = validate_colors(bg_color, fg_color)
    if failure is not None:
        return None, failure

    size, size_ok = parse_font_size(font_size)
    if not size_ok:
        return None, ValidationFailure(
            ValidationKind.FONT_SIZE,
            f"Invalid font size. Must be between {settings.MIN_FONT_SIZE} and {settings.MAX_FONT_SIZE} pixels",
        )
    failure = validate_font_size(size, settings.MIN_FONT_SIZE, settings.MAX_FONT_SIZE)
    if failure is not None:
        return None, failure

    wrap_width = parse_text_wrap_width(text_wrap_width, settings.DEFAULT_TEXT_WRAP_WIDTH)
    failure = validate_text_wrap_width(wrap_width, settings.MIN_TEXT_WRAP_WIDTH, settings.MAX_TEXT_WRAP_WIDTH)
    if failure is not None:
        return None, failure

    return ValidatedParams(width=width, height=height, font_size=size, text_wrap_width=wrap_width), None
