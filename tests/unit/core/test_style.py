"""Unit tests for core/style.py"""

import pytest

from diffpaint.core.style import (
    Decoration,
    FixedColor,
    NamedColor,
    RGBColor,
    Style,
    StyleParseError,
    SyntaxColor,
    default_background,
    parse_color,
    parse_decoration,
    parse_decoration_style,
    parse_style,
    rgb_to_ansi256,
    to_terminal_color,
)


@pytest.mark.parametrize("word,expected", [
    ("red", NamedColor("red")),
    ("Purple", NamedColor("magenta")),
    ("#3f0001", RGBColor(0x3f, 0x00, 0x01)),
    ("52", FixedColor(52)),
])
def test_parse_color(word, expected):
    assert parse_color(word) == expected


@pytest.mark.parametrize("word", ["#12345", "#gggggg", "256", "chartreuse"])
def test_parse_color_rejects_unknown(word):
    with pytest.raises(StyleParseError):
        parse_color(word)


def test_parse_color_hex_without_true_color():
    """Hex colors fall back to the nearest palette entry when true color is off."""
    assert parse_color("#ff0000", true_color=False) == FixedColor(196)


@pytest.mark.parametrize("rgb,expected", [
    ((255, 0, 0), 196),
    ((0, 0, 0), 16),
    ((128, 128, 128), 244),
    ((255, 255, 255), 231),
])
def test_rgb_to_ansi256(rgb, expected):
    assert rgb_to_ansi256(*rgb) == expected


def test_to_terminal_color():
    """Alpha 0 is a raw palette index; otherwise true color decides RGB vs palette."""
    assert to_terminal_color(SyntaxColor(3, 0, 0, 0), true_color=True) == FixedColor(3)
    assert to_terminal_color(SyntaxColor(255, 0, 0), true_color=True) == RGBColor(255, 0, 0)
    assert to_terminal_color(SyntaxColor(255, 0, 0), true_color=False) == FixedColor(196)


def test_parse_style_syntax_auto():
    """'syntax auto' defers the foreground to the highlighter and takes the default background."""
    bg = RGBColor(0, 0x28, 0)
    style = parse_style("syntax auto", default_background=bg)
    assert style.is_syntax_highlighted
    assert style.foreground is None
    assert style.background == bg


def test_parse_style_colors_and_attributes():
    style = parse_style("normal #3f0001 bold ul")
    assert style.foreground is None
    assert style.background == RGBColor(0x3f, 0x00, 0x01)
    assert style.bold and style.underline
    assert not style.is_syntax_highlighted


def test_parse_style_auto_auto_uses_both_defaults():
    fg, bg = NamedColor("white"), NamedColor("red")
    style = parse_style("auto auto", fg, bg)
    assert (style.foreground, style.background) == (fg, bg)


def test_parse_style_flags():
    style = parse_style("raw omit", is_emph=True)
    assert style.is_raw and style.is_omitted and style.is_emph


def test_parse_style_empty_is_plain():
    assert parse_style("") == Style()
    assert Style().is_plain


@pytest.mark.parametrize("text", ["red blue green", "normal syntax", "bogus"])
def test_parse_style_errors(text):
    """Bad style strings raise StyleParseError, a ValueError."""
    with pytest.raises(ValueError):
        parse_style(text)


def test_style_prefix_order():
    """Attributes come before foreground, which comes before background."""
    style = Style(foreground=RGBColor(1, 2, 3), background=FixedColor(52), bold=True, italic=True)
    assert style.prefix() == "\x1b[1;3;38;2;1;2;3;48;5;52m"


def test_style_is_hashable_value():
    """Equal styles hash equal, so they can key coalescing and caches."""
    assert hash(Style(bold=True)) == hash(Style(bold=True))
    assert Style(bold=True).replace(bold=False) == Style()


@pytest.mark.parametrize("text,expected", [
    ("box", Decoration.BOX),
    ("ul", Decoration.UNDERLINE),
    ("ol", Decoration.OVERLINE),
    ("ul ol", Decoration.UNDEROVERLINE),
    ("overline", Decoration.OVERLINE),
    ("underoverline", Decoration.UNDEROVERLINE),
    ("none", Decoration.NONE),
    ("", Decoration.NONE),
])
def test_parse_decoration(text, expected):
    assert parse_decoration(text) is expected


def test_parse_decoration_style_splits_colors_from_decoration():
    """'ul' in a decoration style names the decoration, not the underline attribute."""
    style = parse_decoration_style("blue ul")
    assert style.decoration is Decoration.UNDERLINE
    assert style.foreground == NamedColor("blue")
    assert not style.underline


def test_parse_decoration_style_rejects_bad_color():
    with pytest.raises(StyleParseError):
        parse_decoration_style("nocolor box")


def test_default_backgrounds():
    assert default_background("minus", is_light_mode=False, true_color=True) == RGBColor(0x3f, 0x00, 0x01)
    assert default_background("minus", is_light_mode=False, true_color=False) == FixedColor(52)
    assert default_background("plus_emph", is_light_mode=True, true_color=True) == RGBColor(0xa0, 0xef, 0xa0)
