"""Unit tests for core/decorations.py"""

import pytest

from diffpaint.core.ansi import strip_ansi
from diffpaint.core.decorations import paint_decorated
from diffpaint.core.style import Decoration, NamedColor, Style


BLUE = Style(foreground=NamedColor("blue"))


def _plain(lines):
    return [strip_ansi(line) for line in lines]


def test_box_closes_right_of_text():
    lines = paint_decorated("abc", Style(), BLUE.replace(decoration=Decoration.BOX), width=40)
    assert _plain(lines) == ["────┐", "abc │", "────┘"]


def test_box_frame_uses_decoration_style():
    lines = paint_decorated("abc", Style(), BLUE.replace(decoration=Decoration.BOX))
    assert lines[0].startswith(BLUE.prefix())
    assert lines[1].startswith("abc" + BLUE.prefix())


@pytest.mark.parametrize("decoration,width,expected", [
    (Decoration.UNDERLINE, 6, ["abc", "──────"]),
    (Decoration.OVERLINE, 6, ["──────", "abc"]),
    (Decoration.UNDEROVERLINE, None, ["───", "abc", "───"]),
    (Decoration.NONE, 6, ["abc"]),
])
def test_rules_span_width_or_text(decoration, width, expected):
    """Without a fixed width the rule is as wide as the text."""
    lines = paint_decorated("abc", Style(), Style(decoration=decoration), width)
    assert _plain(lines) == expected


def test_text_keeps_its_own_style():
    bold = Style(bold=True)
    lines = paint_decorated("abc", bold, Style(decoration=Decoration.UNDERLINE), 3)
    assert lines[0] == bold.prefix() + "abc" + "\x1b[0m"
