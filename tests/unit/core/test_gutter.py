"""Unit tests for core/gutter.py"""

import pytest

from diffpaint.core.gutter import (
    PLACEHOLDER,
    GutterFormatError,
    format_line_number,
    has_line_numbers,
    line_number_components,
    paint_gutter,
    split_number_format,
)
from diffpaint.core.style import NamedColor, Style

from samples import make_policy


@pytest.mark.parametrize("number,expected", [
    (5, " 5  "),
    (12, " 12 "),
    (1234, "1234"),
    (0, " 0  "),
    (None, "    "),
])
def test_format_line_number(number, expected):
    """Numbers are centered in a four-column field; absent numbers are blank."""
    assert format_line_number(number) == expected


def test_split_number_format():
    """The template splits into the literal text around the placeholder."""
    assert split_number_format("%ln│ ") == ("", "│ ")
    assert split_number_format("[%ln]") == ("[", "]")


@pytest.mark.parametrize("template", ["no placeholder", "%ln %ln", ""])
def test_split_number_format_rejects_bad_templates(template):
    """A missing or repeated placeholder is a configuration error."""
    with pytest.raises(GutterFormatError):
        split_number_format(template)


@pytest.mark.parametrize("number", [None, 0, 7, 12345])
@pytest.mark.parametrize("template", ["%ln⋮", "%ln│ ", "<%ln>", "line %ln: "])
def test_components_preserve_literals(number, template):
    """The literal text either side of the number is unchanged whatever the number."""
    before, number_text, after = line_number_components(number, template)
    assert before + PLACEHOLDER + after == template
    assert number_text == format_line_number(number)


def test_has_line_numbers():
    assert has_line_numbers((1, None))
    assert has_line_numbers((None, 2))
    assert not has_line_numbers((None, None))


def test_paint_gutter_styles_each_piece():
    """Six pieces, minus side first, each in its format or number style."""
    fmt = Style(foreground=NamedColor("blue"))
    num = Style(foreground=NamedColor("yellow"))
    policy = make_policy(
        number_minus_format="[%ln]",
        number_plus_format="%ln│ ",
        number_minus_format_style=fmt,
        number_minus_style=num,
        number_plus_format_style=fmt,
        number_plus_style=num,
    )
    sections = paint_gutter((3, None), policy)
    assert [text for _, text in sections] == ["[", " 3  ", "]", "", "    ", "│ "]
    assert [style for style, _ in sections] == [fmt, num, fmt, fmt, num, fmt]
