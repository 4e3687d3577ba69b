"""Drive a Painter over a line diff of two texts, one hunk at a time"""

import difflib
from pathlib import Path
from typing import Optional, TextIO

from diffpaint.config import PaintPolicy
from diffpaint.core.highlight import PygmentsHighlighter
from diffpaint.core.paint import Painter, Side


def _format_range(start: int, length: int) -> str:
    # An empty range is numbered by the line before it.
    if length == 0:
        return f"{start},0"
    return f"{start + 1},{length}"


def _hunk_header(group: list[tuple]) -> str:
    first, last = group[0], group[-1]
    old_range = _format_range(first[1], last[2] - first[1])
    new_range = _format_range(first[3], last[4] - first[3])
    return f"@@ -{old_range} +{new_range} @@"


def make_painter(policy: PaintPolicy, extension: Optional[str] = None) -> Painter:
    """Painter with a Pygments highlighter when the policy selects a theme."""
    highlighter = PygmentsHighlighter(policy.theme, extension) if policy.theme else None
    return Painter(policy, highlighter)


def paint_diff(
    old_text: str,
    new_text: str,
    painter: Painter,
    writer: TextIO,
    context: int = 3,
    ) -> int:
    """Paint every hunk of the old -> new line diff to writer. Returns the hunk count."""
    old_lines = old_text.splitlines(keepends=True)
    new_lines = new_text.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    hunks = 0
    for group in matcher.get_grouped_opcodes(context):
        hunks += 1
        painter.paint_hunk_header(_hunk_header(group))
        painter.set_line_numbers(group[0][1] + 1, group[0][3] + 1)
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                for line in old_lines[i1:i2]:
                    painter.paint_zero_line(" " + line)
                continue
            for line in old_lines[i1:i2]:
                painter.add_line(Side.MINUS, "-" + line)
            for line in new_lines[j1:j2]:
                painter.add_line(Side.PLUS, "+" + line)
            painter.paint_buffered_lines()
        painter.emit(writer)
    return hunks


def run_compare(old_path: Path, new_path: Path, policy: PaintPolicy, writer: TextIO) -> int:
    """Paint the diff between two files, highlighting by the new file's extension."""
    old_text = old_path.read_text(encoding="utf-8")
    new_text = new_path.read_text(encoding="utf-8")
    painter = make_painter(policy, new_path.suffix or None)
    return paint_diff(old_text, new_text, painter, writer)
