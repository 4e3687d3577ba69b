"""Line-number gutter formatting"""

from typing import Optional

from diffpaint.core.sections import PaintedSection


PLACEHOLDER = "%ln"
NUMBER_WIDTH = 4


class GutterFormatError(ValueError):
    """A line-number format does not contain exactly one placeholder."""


def format_line_number(number: Optional[int]) -> str:
    """Center the number in a fixed-width column, or blank the column when absent."""
    if number is None:
        return " " * NUMBER_WIDTH
    return f"{number:^{NUMBER_WIDTH}}"


def split_number_format(template: str) -> tuple[str, str]:
    """Return the literal text before and after the placeholder."""
    count = template.count(PLACEHOLDER)
    if count != 1:
        problem = "missing" if count == 0 else f"repeated {count} times"
        raise GutterFormatError(f"Line number format {template!r}: placeholder {PLACEHOLDER} {problem}")
    before, after = template.split(PLACEHOLDER)
    return before, after


def line_number_components(number: Optional[int], template: str) -> tuple[str, str, str]:
    before, after = split_number_format(template)
    return before, format_line_number(number), after


def has_line_numbers(line_numbers: tuple[Optional[int], Optional[int]]) -> bool:
    minus, plus = line_numbers
    return minus is not None or plus is not None


def paint_gutter(line_numbers: tuple[Optional[int], Optional[int]], policy) -> list[PaintedSection]:
    """Six styled pieces: minus before/number/after, then plus before/number/after."""
    minus, plus = line_numbers
    minus_before, minus_number, minus_after = line_number_components(minus, policy.number_minus_format)
    plus_before, plus_number, plus_after = line_number_components(plus, policy.number_plus_format)
    return [
        PaintedSection(policy.number_minus_format_style, minus_before),
        PaintedSection(policy.number_minus_style, minus_number),
        PaintedSection(policy.number_minus_format_style, minus_after),
        PaintedSection(policy.number_plus_format_style, plus_before),
        PaintedSection(policy.number_plus_style, plus_number),
        PaintedSection(policy.number_plus_format_style, plus_after),
    ]
