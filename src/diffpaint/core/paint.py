"""Line rendering and the per-hunk paint buffer that drives highlighting, edit inference and output"""

import logging
from enum import Enum
from typing import Callable, Optional, Sequence, TextIO

from diffpaint.core.ansi import extend_background_to_width, render_sections
from diffpaint.core.decorations import paint_decorated
from diffpaint.core.edits import infer_edits
from diffpaint.core.gutter import has_line_numbers, paint_gutter
from diffpaint.core.sections import (
    LINE_TERMINATOR,
    PaintedSection,
    Section,
    has_multiple_styles,
    superimpose_style_sections,
)
from diffpaint.core.style import Style


logger = logging.getLogger(__name__)

LineNumbers = tuple[Optional[int], Optional[int]]

# Longest first, so CRLF is removed as one terminator.
LINE_ENDINGS = ("\r\n", "\n", "\r")


class Side(str, Enum):
    MINUS = "minus"
    ZERO = "zero"
    PLUS = "plus"


class OutputBuffer:
    """Append-only text accumulator, drained explicitly by the caller."""

    def __init__(self):
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def clear(self) -> None:
        self._parts.clear()

    def __len__(self) -> int:
        return sum(len(part) for part in self._parts)

    def __bool__(self) -> bool:
        return any(self._parts)


def paint_lines(
    syntax_sections: Sequence[Sequence[Section]],
    diff_sections: Sequence[Sequence[Section]],
    line_numbers: Sequence[LineNumbers],
    output: OutputBuffer,
    policy,
    prefix: str,
    style: Style,
    non_emph_style: Style,
    background_color_extends_to_terminal_width: Optional[bool] = None,
    ) -> None:
    """Superimpose syntax and diff styles for each line and append the rendered lines to output.

    `style` fills to the right of lines whose diff sections use a single
    style; `non_emph_style` fills lines that contain an emph section, so the
    fill never takes on the emph color of the last section.
    """
    if background_color_extends_to_terminal_width is None:
        background_color_extends_to_terminal_width = policy.background_color_extends_to_terminal_width

    for line_syntax_sections, line_diff_sections, numbers in zip(syntax_sections, diff_sections, line_numbers):
        fill_style = non_emph_style if has_multiple_styles(line_diff_sections) else style
        painted: list[PaintedSection] = []

        if policy.show_line_numbers and has_line_numbers(numbers):
            painted.extend(paint_gutter(numbers, policy))

        superimposed = superimpose_style_sections(
            line_syntax_sections,
            line_diff_sections,
            policy.true_color,
            policy.null_syntax_style,
        )
        if prefix and not superimposed:
            painted.append(PaintedSection(style, prefix))
        for i, (section_style, text) in enumerate(superimposed):
            if i == 0 and prefix:
                # The marker replaces the first column of the line.
                painted.append(PaintedSection(section_style, prefix))
                text = text[1:]
            painted.append(PaintedSection(section_style, text))

        have_background_for_right_fill = fill_style.background is not None
        if have_background_for_right_fill:
            painted.append(PaintedSection(fill_style, ""))

        line = render_sections(painted)
        if background_color_extends_to_terminal_width and have_background_for_right_fill:
            line = extend_background_to_width(line)
        output.write(line)
        output.write(LINE_TERMINATOR)


def set_non_emph_styles(line_sections: list[list[Section]], non_emph_style: Style) -> None:
    """In lines carrying more than one diff style, restyle the non-emph sections in place."""
    for sections in line_sections:
        if has_multiple_styles(sections):
            sections[:] = [
                section if section.style.is_emph else Section(non_emph_style, section.text)
                for section in sections
            ]


class Painter:
    """Buffers one hunk's removed and added lines and paints them on flush."""

    def __init__(self, policy, highlighter=None, edit_inferrer: Callable = infer_edits):
        self.policy = policy
        self.highlighter = highlighter
        self.edit_inferrer = edit_inferrer
        self.minus_lines: list[str] = []
        self.plus_lines: list[str] = []
        self.output_buffer = OutputBuffer()
        self.minus_line_number = 0
        self.plus_line_number = 0

    @property
    def is_idle(self) -> bool:
        return not self.minus_lines and not self.plus_lines

    def set_syntax(self, extension: Optional[str]) -> None:
        if self.highlighter is not None:
            self.highlighter.set_syntax(extension)

    def set_line_numbers(self, minus_start: int, plus_start: int) -> None:
        self.minus_line_number = minus_start
        self.plus_line_number = plus_start

    def prepare_line(self, raw_line: str, append_newline: bool = True) -> str:
        """Swap the diff marker column for a space, expand tabs and add the terminator."""
        terminator = LINE_TERMINATOR if append_newline else ""
        if not raw_line:
            return terminator
        body = raw_line[1:]
        for ending in LINE_ENDINGS:
            if body.endswith(ending):
                body = body[:-len(ending)]
                break
        return " " + body.replace("\t", " " * self.policy.tab_width) + terminator

    def add_line(self, side: Side, raw_line: str) -> None:
        line = self.prepare_line(raw_line)
        if side is Side.MINUS:
            self.minus_lines.append(line)
        elif side is Side.PLUS:
            self.plus_lines.append(line)
        else:
            raise ValueError(f"Only minus and plus lines are buffered, not {side.value}")

    def should_compute_syntax_highlighting(self, side: Side) -> bool:
        policy = self.policy
        if policy.theme is None or self.highlighter is None:
            return False
        if side is Side.MINUS:
            return policy.minus_style.is_syntax_highlighted or policy.minus_emph_style.is_syntax_highlighted
        if side is Side.PLUS:
            return policy.plus_style.is_syntax_highlighted or policy.plus_emph_style.is_syntax_highlighted
        return policy.zero_style.is_syntax_highlighted

    def remember_syntax_context(self, line: str, *sides: Side) -> None:
        """Feed a line the painter will not highlight into the lexing context of each side."""
        if self.policy.theme is None or self.highlighter is None:
            return
        for side in sides:
            self.highlighter.remember(line, side)

    def syntax_sections_for_lines(self, lines: Sequence[str], side: Side) -> list[list[Section]]:
        """Syntax sections per line, lexed in the context of the side's earlier lines."""
        if not self.should_compute_syntax_highlighting(side):
            for line in lines:
                self.remember_syntax_context(line, side)
            return [[Section(self.policy.null_syntax_style, line)] for line in lines]
        return [self.highlighter.highlight(line, side) for line in lines]

    def diff_sections_for_lines(self) -> tuple[list[list[Section]], list[list[Section]]]:
        policy = self.policy
        minus_sections, plus_sections = self.edit_inferrer(
            self.minus_lines,
            self.plus_lines,
            policy.minus_style,
            policy.minus_emph_style,
            policy.plus_style,
            policy.plus_emph_style,
            policy.max_line_distance,
            policy.max_line_distance_for_naively_paired_lines,
        )
        if policy.minus_non_emph_style != policy.minus_emph_style:
            set_non_emph_styles(minus_sections, policy.minus_non_emph_style)
        if policy.plus_non_emph_style != policy.plus_emph_style:
            set_non_emph_styles(plus_sections, policy.plus_non_emph_style)
        return minus_sections, plus_sections

    def paint_buffered_lines(self) -> None:
        """Render all buffered lines, minus side first, then empty both buffers."""
        policy = self.policy
        minus_syntax_sections = self.syntax_sections_for_lines(self.minus_lines, Side.MINUS)
        plus_syntax_sections = self.syntax_sections_for_lines(self.plus_lines, Side.PLUS)
        minus_diff_sections, plus_diff_sections = self.diff_sections_for_lines()

        minus_numbers = [(self.minus_line_number + i, None) for i in range(len(self.minus_lines))]
        plus_numbers = [(None, self.plus_line_number + i) for i in range(len(self.plus_lines))]
        logger.debug("Painting %d minus and %d plus lines", len(self.minus_lines), len(self.plus_lines))

        if self.minus_lines:
            paint_lines(
                minus_syntax_sections, minus_diff_sections, minus_numbers,
                self.output_buffer, policy, policy.minus_line_marker,
                policy.minus_style, policy.minus_non_emph_style,
            )
        if self.plus_lines:
            paint_lines(
                plus_syntax_sections, plus_diff_sections, plus_numbers,
                self.output_buffer, policy, policy.plus_line_marker,
                policy.plus_style, policy.plus_non_emph_style,
            )
        self.minus_line_number += len(self.minus_lines)
        self.plus_line_number += len(self.plus_lines)
        self.minus_lines.clear()
        self.plus_lines.clear()

    def paint_zero_line(self, raw_line: str) -> None:
        """Render one unchanged context line, numbered on both sides."""
        line = self.prepare_line(raw_line)
        zero_style = self.policy.zero_style
        # Context lines belong to both files; they are lexed on the minus side.
        if self.should_compute_syntax_highlighting(Side.ZERO):
            syntax_sections = [self.highlighter.highlight(line, Side.MINUS)]
            self.remember_syntax_context(line, Side.PLUS)
        else:
            self.remember_syntax_context(line, Side.MINUS, Side.PLUS)
            syntax_sections = [[Section(self.policy.null_syntax_style, line)]]
        paint_lines(
            syntax_sections,
            [[Section(zero_style, line)]],
            [(self.minus_line_number, self.plus_line_number)],
            self.output_buffer,
            self.policy,
            " ",
            zero_style,
            zero_style,
        )
        self.minus_line_number += 1
        self.plus_line_number += 1

    def paint_hunk_header(self, text: str) -> None:
        """Render a hunk header line with the configured style and decoration."""
        policy = self.policy
        for line in paint_decorated(
            text,
            policy.hunk_header_style,
            policy.hunk_header_decoration_style,
            policy.decorations_width.columns,
        ):
            self.output_buffer.write(line)
            self.output_buffer.write(LINE_TERMINATOR)

    def emit(self, writer: TextIO) -> None:
        """Write the output buffer to the sink and clear it."""
        writer.write(self.output_buffer.getvalue())
        self.output_buffer.clear()
