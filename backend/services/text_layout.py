"""
Text placement for placeholder images.

Two modes:
- single line: the whole text centred on the canvas
- wrapped: greedy word-wrap into lines no wider than a percentage of the
  canvas, then the block is centred vertically and each line horizontally

All coordinates are clamped to be non-negative; text wider than the canvas
starts at x=0 and runs off the right edge.
"""
from typing import List

from domain.models import FontHandle, LayoutLine, LayoutResult

LINE_SPACING = 1.2
DEFAULT_LINE_HEIGHT = 16


def measure_text_width(font: FontHandle, text: str) -> int:
    return font.measure(text)


def _font_line_height(font: FontHandle) -> int:
    return font.line_height or DEFAULT_LINE_HEIGHT


def wrap_text(text: str, font: FontHandle, max_width: int) -> List[str]:
    """
    Split on single spaces and fill lines greedily.

    A word that is wider than max_width on its own still gets a line; no
    word is ever dropped.
    """
    if not text:
        return []

    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        candidate = f"{current} {word}" if current else word
        if measure_text_width(font, candidate) <= max_width:
            current = candidate
        elif current:
            lines.append(current)
            current = word
        else:
            lines.append(word)

    if current:
        lines.append(current)
    return lines


def calculate_wrapped_positions(width: int, height: int, lines: List[str], font: FontHandle) -> List[LayoutLine]:
    line_height = int(_font_line_height(font) * LINE_SPACING)
    start_y = max(0, (height - len(lines) * line_height) / 2)

    positions: List[LayoutLine] = []
    for index, line in enumerate(lines):
        x = max(0, (width - measure_text_width(font, line)) / 2)
        y = max(0, start_y + index * line_height)
        positions.append(LayoutLine(x=x, y=y, text=line))
    return positions


def calculate_single_line_position(width: int, height: int, text: str, font: FontHandle) -> LayoutLine:
    x = max(0, (width - measure_text_width(font, text)) / 2)
    y = max(0, (height - _font_line_height(font)) / 2)
    return LayoutLine(x=x, y=y, text=text)


def layout_text(
    text: str,
    font: FontHandle,
    width: int,
    height: int,
    text_wrap: bool = False,
    text_wrap_width: int = 80,
) -> LayoutResult:
    if text_wrap:
        max_line_width = (width * text_wrap_width) // 100
        lines = wrap_text(text, font, max_line_width)
        return LayoutResult(is_wrapped=True, lines=calculate_wrapped_positions(width, height, lines, font))

    if not text:
        return LayoutResult(is_wrapped=False, lines=[])
    return LayoutResult(is_wrapped=False, lines=[calculate_single_line_position(width, height, text, font)])
