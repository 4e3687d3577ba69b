"""ANSI control sequences: composing styled sections and extending backgrounds to the terminal edge"""

import re
from typing import Iterable

from diffpaint.core.sections import PaintedSection


ANSI_CSI_ERASE_IN_LINE = "\x1b[K"
ANSI_SGR_RESET = "\x1b[0m"

_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def render_sections(sections: Iterable[PaintedSection]) -> str:
    """Compose painted sections into one string of text and SGR sequences.

    Style changes are emitted even for empty sections, so a trailing empty
    section leaves its style active for whatever follows. The result ends
    with a reset whenever the final style is not plain.
    """
    parts = []
    active = ""
    for style, text in sections:
        prefix = style.prefix()
        if prefix != active:
            if active:
                parts.append(ANSI_SGR_RESET)
            parts.append(prefix)
            active = prefix
        parts.append(text)
    if active:
        parts.append(ANSI_SGR_RESET)
    return "".join(parts)


def extend_background_to_width(line: str) -> str:
    """Erase to end of line in the line's final style, then reset."""
    if line.endswith(ANSI_CSI_ERASE_IN_LINE + ANSI_SGR_RESET):
        return line
    if line.lower().endswith(ANSI_SGR_RESET.lower()):
        line = line[:-len(ANSI_SGR_RESET)]
    return line + ANSI_CSI_ERASE_IN_LINE + ANSI_SGR_RESET


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)
