"""Unit tests for core/ansi.py"""

from diffpaint.core.ansi import (
    ANSI_CSI_ERASE_IN_LINE,
    ANSI_SGR_RESET,
    extend_background_to_width,
    render_sections,
    strip_ansi,
)
from diffpaint.core.sections import PaintedSection
from diffpaint.core.style import NamedColor, Style


RED_BG = Style(background=NamedColor("red"))
BOLD_BLUE = Style(foreground=NamedColor("blue"), bold=True)


def test_render_plain_sections_has_no_escapes():
    """Plain styles produce bare text."""
    assert render_sections([PaintedSection(Style(), "ab"), PaintedSection(Style(), "c")]) == "abc"


def test_render_single_style():
    """A styled run is wrapped in its prefix and a final reset."""
    assert render_sections([PaintedSection(BOLD_BLUE, "x")]) == "\x1b[1;34mx\x1b[0m"


def test_render_same_style_emits_prefix_once():
    """Adjacent sections sharing a style do not repeat the prefix."""
    out = render_sections([PaintedSection(RED_BG, "a"), PaintedSection(RED_BG, "b")])
    assert out == "\x1b[41mab\x1b[0m"


def test_render_style_switch_resets_first():
    """Switching styles resets before applying the next style."""
    out = render_sections([PaintedSection(BOLD_BLUE, "a"), PaintedSection(RED_BG, "b")])
    assert out == "\x1b[1;34ma\x1b[0m\x1b[41mb\x1b[0m"


def test_render_empty_section_still_switches_style():
    """A zero-length section leaves its style active at the end of the line."""
    out = render_sections([PaintedSection(BOLD_BLUE, "a"), PaintedSection(RED_BG, "")])
    assert out == "\x1b[1;34ma\x1b[0m\x1b[41m\x1b[0m"


def test_extend_background_replaces_trailing_reset():
    """The trailing reset moves after the erase-in-line sequence."""
    line = "\x1b[41mx\x1b[0m"
    assert extend_background_to_width(line) == "\x1b[41mx" + ANSI_CSI_ERASE_IN_LINE + ANSI_SGR_RESET


def test_extend_background_without_reset():
    assert extend_background_to_width("x") == "x" + ANSI_CSI_ERASE_IN_LINE + ANSI_SGR_RESET


def test_extend_background_is_idempotent():
    """Extending an already extended line does not add a second erase sequence."""
    once = extend_background_to_width("\x1b[41mx\x1b[0m")
    twice = extend_background_to_width(once)
    assert twice == once
    assert twice.count(ANSI_CSI_ERASE_IN_LINE) == 1


def test_strip_ansi():
    assert strip_ansi("\x1b[1;34ma\x1b[0m\x1b[41mb\x1b[K\x1b[0m") == "ab"
