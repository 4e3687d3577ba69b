"""Box and rule decorations drawn around header text"""

from typing import Optional

from diffpaint.core.ansi import render_sections
from diffpaint.core.sections import PaintedSection
from diffpaint.core.style import Decoration, Style


HORIZONTAL = "─"
VERTICAL = "│"
TOP_RIGHT = "┐"
BOTTOM_RIGHT = "┘"


def paint_decorated(
    text: str,
    text_style: Style,
    decoration_style: Style,
    width: Optional[int] = None,
    ) -> list[str]:
    """Render text with the decoration carried by decoration_style, one string per output line.

    Under- and overlines span `width` columns, or just the text when width is
    None. A box always closes one column to the right of the text.
    """
    decoration = decoration_style.decoration
    rule_width = len(text) if width is None else width

    def rule(columns: int, corner: str = "") -> str:
        return render_sections([PaintedSection(decoration_style, HORIZONTAL * columns + corner)])

    if decoration is Decoration.BOX:
        box_width = len(text) + 1
        return [
            rule(box_width, TOP_RIGHT),
            render_sections([
                PaintedSection(text_style, text),
                PaintedSection(decoration_style, " " + VERTICAL),
            ]),
            rule(box_width, BOTTOM_RIGHT),
        ]

    body = render_sections([PaintedSection(text_style, text)])
    if decoration is Decoration.UNDERLINE:
        return [body, rule(rule_width)]
    if decoration is Decoration.OVERLINE:
        return [rule(rule_width), body]
    if decoration is Decoration.UNDEROVERLINE:
        return [rule(rule_width), body, rule(rule_width)]
    return [body]
