"""Style sections and the superimposition of syntax styles onto diff styles"""

from itertools import groupby
from typing import NamedTuple, Sequence, Union

from diffpaint.core.style import Style, SyntaxStyle, to_terminal_color


LINE_TERMINATOR = "\n"


class Section(NamedTuple):
    """A styled run of text taken from a caller-owned line (input partition)."""
    style: Union[Style, SyntaxStyle]
    text: str


class PaintedSection(NamedTuple):
    """A styled run of text produced for rendering; owns its text."""
    style: Style
    text: str


class SectionMismatchError(RuntimeError):
    """Syntax and diff partitions of one line disagree about its text.

    Raised when the two annotation sources are out of step. This is a broken
    collaborator, not bad input, and must not be recovered from.
    """

    def __init__(self, position: int, syntax_char: str, diff_char: str):
        self.position = position
        self.syntax_char = syntax_char
        self.diff_char = diff_char
        super().__init__(
            "String mismatch encountered while superimposing style sections "
            f"at position {position}: {syntax_char!r} vs {diff_char!r}"
        )


def explode(sections: Sequence[Section]) -> list[tuple]:
    """Split a partition into one (style, char) pair per character."""
    return [(style, c) for style, text in sections for c in text]


def superimpose(syntax_chars: list[tuple], diff_chars: list[tuple]) -> list[tuple]:
    """Pair two exploded partitions position by position into ((syntax, diff), char)."""
    for position in range(min(len(syntax_chars), len(diff_chars))):
        (_, c1), (_, c2) = syntax_chars[position], diff_chars[position]
        if c1 != c2:
            raise SectionMismatchError(position, c1, c2)
    if len(syntax_chars) != len(diff_chars):
        position = min(len(syntax_chars), len(diff_chars))
        syntax_char = syntax_chars[position][1] if position < len(syntax_chars) else ""
        diff_char = diff_chars[position][1] if position < len(diff_chars) else ""
        raise SectionMismatchError(position, syntax_char, diff_char)

    return [
        ((syntax_style, diff_style), c)
        for (syntax_style, c), (diff_style, _) in zip(syntax_chars, diff_chars)
    ]


def superimposed_style(
    syntax_style: SyntaxStyle,
    diff_style: Style,
    true_color: bool,
    null_syntax_style: SyntaxStyle,
    ) -> Style:
    """Diff style with its foreground taken from the syntax style, when the diff style asks for it."""
    if diff_style.is_syntax_highlighted and syntax_style != null_syntax_style:
        return diff_style.replace(foreground=to_terminal_color(syntax_style.foreground, true_color))
    return diff_style


def coalesce(
    pairs: list[tuple],
    true_color: bool,
    null_syntax_style: SyntaxStyle,
    ) -> list[PaintedSection]:
    """Merge runs of identical style pairs and resolve each run's final style."""
    resolved: dict = {}
    coalesced = []
    for style_pair, group in groupby(pairs, key=lambda pair: pair[0]):
        if style_pair not in resolved:
            resolved[style_pair] = superimposed_style(*style_pair, true_color, null_syntax_style)
        coalesced.append(PaintedSection(resolved[style_pair], "".join(c for _, c in group)))

    # The terminator was only there for the highlighter.
    if coalesced and coalesced[-1].text.endswith(LINE_TERMINATOR):
        last = coalesced[-1]
        coalesced[-1] = PaintedSection(last.style, last.text[:-len(LINE_TERMINATOR)])
    return coalesced


def superimpose_style_sections(
    syntax_sections: Sequence[Section],
    diff_sections: Sequence[Section],
    true_color: bool,
    null_syntax_style: SyntaxStyle,
    ) -> list[PaintedSection]:
    """Combine a line's syntax partition and diff partition into one painted partition.

    Raises SectionMismatchError if the two partitions do not cover identical text.
    """
    return coalesce(
        superimpose(explode(syntax_sections), explode(diff_sections)),
        true_color,
        null_syntax_style,
    )


def has_multiple_styles(sections: Sequence[Section]) -> bool:
    """True if the partition uses more than one distinct style (sections are not coalesced)."""
    if len(sections) <= 1:
        return False
    first_style = sections[0].style
    return any(style != first_style for style, _ in sections)
