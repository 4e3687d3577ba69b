"""Within-line edit inference: pair removed/added lines and mark the changed tokens"""

import difflib
import logging
import re

from diffpaint.core.sections import Section
from diffpaint.core.style import Style


logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(r"\w+|\W")


def tokenize(line: str) -> list[str]:
    """Split into word runs and single non-word characters; tokens concatenate to the line."""
    return TOKEN_RE.findall(line)


def _matcher(a_tokens: list[str], b_tokens: list[str]) -> difflib.SequenceMatcher:
    return difflib.SequenceMatcher(None, a_tokens, b_tokens, autojunk=False)


def line_distance(a: str, b: str) -> float:
    """Normalized dissimilarity in [0, 1]: the fraction of characters not in matching tokens."""
    total = len(a) + len(b)
    if total == 0:
        return 0.0
    a_tokens, b_tokens = tokenize(a), tokenize(b)
    matched = sum(
        len(token)
        for block in _matcher(a_tokens, b_tokens).get_matching_blocks()
        for token in a_tokens[block.a:block.a + block.size]
    )
    return 1.0 - 2.0 * matched / total


def _annotate_pair(
    minus_line: str,
    plus_line: str,
    minus_style: Style,
    minus_emph_style: Style,
    plus_style: Style,
    plus_emph_style: Style,
    ) -> tuple[list[Section], list[Section]]:
    a_tokens, b_tokens = tokenize(minus_line), tokenize(plus_line)
    minus_sections, plus_sections = [], []
    for tag, i1, i2, j1, j2 in _matcher(a_tokens, b_tokens).get_opcodes():
        a_text = "".join(a_tokens[i1:i2])
        b_text = "".join(b_tokens[j1:j2])
        if tag == "equal":
            minus_sections.append(Section(minus_style, a_text))
            plus_sections.append(Section(plus_style, b_text))
            continue
        if a_text:
            minus_sections.append(Section(minus_emph_style, a_text))
        if b_text:
            plus_sections.append(Section(plus_emph_style, b_text))
    return minus_sections, plus_sections


def _pair_lines(
    minus_lines: list[str],
    plus_lines: list[str],
    max_line_distance: float,
    max_line_distance_for_naively_paired_lines: float,
    ) -> dict[int, int]:
    """Map minus line index -> plus line index for lines judged to be edits of each other."""
    pairs: dict[int, int] = {}
    consumed: set[int] = set()

    if max_line_distance_for_naively_paired_lines > 0:
        for i in range(min(len(minus_lines), len(plus_lines))):
            if line_distance(minus_lines[i], plus_lines[i]) <= max_line_distance_for_naively_paired_lines:
                pairs[i] = i
                consumed.add(i)

    plus_start = 0
    for i, minus_line in enumerate(minus_lines):
        if i in pairs:
            plus_start = max(plus_start, pairs[i] + 1)
            continue
        for j in range(plus_start, len(plus_lines)):
            if j in consumed:
                continue
            if line_distance(minus_line, plus_lines[j]) <= max_line_distance:
                pairs[i] = j
                consumed.add(j)
                plus_start = j + 1
                break
    return pairs


def infer_edits(
    minus_lines: list[str],
    plus_lines: list[str],
    minus_style: Style,
    minus_emph_style: Style,
    plus_style: Style,
    plus_emph_style: Style,
    max_line_distance: float,
    max_line_distance_for_naively_paired_lines: float,
    ) -> tuple[list[list[Section]], list[list[Section]]]:
    """Return one diff-style partition per minus line and per plus line.

    Lines paired as edits get emph sections over their changed tokens; all
    other lines get a single section in the side's base style. Sections are
    not coalesced, so adjacent sections may share a style.
    """
    for name, value in (
        ("max_line_distance", max_line_distance),
        ("max_line_distance_for_naively_paired_lines", max_line_distance_for_naively_paired_lines),
    ):
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{name} must be between 0 and 1, got {value}")

    minus_sections = [[Section(minus_style, line)] for line in minus_lines]
    plus_sections = [[Section(plus_style, line)] for line in plus_lines]

    pairs = _pair_lines(minus_lines, plus_lines, max_line_distance, max_line_distance_for_naively_paired_lines)
    for i, j in pairs.items():
        minus_sections[i], plus_sections[j] = _annotate_pair(
            minus_lines[i], plus_lines[j],
            minus_style, minus_emph_style, plus_style, plus_emph_style,
        )
    logger.debug("Paired %d of %d minus / %d plus lines", len(pairs), len(minus_lines), len(plus_lines))
    return minus_sections, plus_sections
