from domain.models import FontHandle
from services.text_layout import (
    calculate_single_line_position,
    layout_text,
    wrap_text,
)

CHAR_WIDTH = 10


class _MonoFont:
    def getlength(self, text):
        return CHAR_WIDTH * len(text)


def _font(line_height=20):
    return FontHandle(key="mono", size=line_height, font=_MonoFont(), line_height=line_height)


def test_single_line_centered():
    pos = calculate_single_line_position(200, 100, "hello", _font(20))
    assert pos.x == (200 - 50) / 2
    assert pos.y == (100 - 20) / 2
    assert pos.text == "hello"


def test_single_line_wider_than_canvas_clamps_to_zero():
    pos = calculate_single_line_position(30, 10, "much too long", _font(20))
    assert pos.x == 0
    assert pos.y == 0


def test_short_text_wraps_to_one_line():
    assert wrap_text("hello world", _font(), 500) == ["hello world"]


def test_wrap_is_greedy_and_keeps_every_word():
    text = "the quick brown fox jumps over the lazy dog"
    lines = wrap_text(text, _font(), 100)

    assert lines == ["the quick", "brown fox", "jumps over", "the lazy", "dog"]
    assert " ".join(lines) == text
    assert all(len(line) * CHAR_WIDTH <= 100 for line in lines)


def test_overlong_word_gets_its_own_line():
    lines = wrap_text("a supercalifragilistic word", _font(), 60)
    assert lines == ["a", "supercalifragilistic", "word"]


def test_wrap_empty_text():
    assert wrap_text("", _font(), 100) == []


def test_wrapped_layout_centers_block():
    font = _font(line_height=20)
    result = layout_text("aaaa bbbb cccc", font, 100, 200, text_wrap=True, text_wrap_width=50)

    assert result.is_wrapped
    assert result.texts == ["aaaa", "bbbb", "cccc"]
    line_height = int(20 * 1.2)
    start_y = (200 - 3 * line_height) / 2
    assert [line.y for line in result.lines] == [start_y + i * line_height for i in range(3)]
    assert all(line.x == (100 - 40) / 2 for line in result.lines)


def test_wrapped_layout_taller_than_canvas_starts_at_top():
    result = layout_text("a b c d e f", _font(line_height=20), 10, 30, text_wrap=True, text_wrap_width=50)
    assert result.lines[0].y == 0
    assert all(line.y >= 0 and line.x >= 0 for line in result.lines)


def test_wrap_width_uses_floor_of_percentage():
    # 95 * 70 / 100 = 66.5 -> 66px, so "abcdef g" (80px) cannot share a line
    result = layout_text("abcdef g", _font(), 95, 100, text_wrap=True, text_wrap_width=70)
    assert result.texts == ["abcdef", "g"]


def test_empty_text_produces_no_lines():
    assert layout_text("", _font(), 100, 100).lines == []
    assert layout_text("", _font(), 100, 100, text_wrap=True).lines == []
