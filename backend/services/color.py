import re
from typing import Tuple

_HEX_COLOR_RE = re.compile(r"[0-9A-Fa-f]{6}")


def is_valid_hex_color(value: str | None) -> bool:
    """True for exactly six hex digits (no '#', no shorthand)."""
    if not value:
        return False
    return _HEX_COLOR_RE.fullmatch(value) is not None


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """Convert 'ff8800' to (255, 136, 0)."""
    value = value[:6]
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def hex_to_rgba(value: str, alpha: int = 255) -> Tuple[int, int, int, int]:
    r, g, b = hex_to_rgb(value)
    return (r, g, b, alpha)
