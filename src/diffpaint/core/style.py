"""Terminal style model: colors, font attributes, and the syntax-to-terminal color mapping"""

from dataclasses import dataclass, field, replace as _replace
from enum import Enum
from typing import Optional, Union


NAMED_COLORS = {
    "black": 0, "red": 1, "green": 2, "yellow": 3,
    "blue": 4, "magenta": 5, "purple": 5, "cyan": 6, "white": 7,
}

ATTRIBUTE_WORDS = {
    "bold": "bold",
    "dim": "dim",
    "italic": "italic",
    "ul": "underline",
    "underline": "underline",
    "blink": "blink",
    "reverse": "reverse",
    "hidden": "hidden",
    "strike": "strikethrough",
}

# SGR parameter per font attribute, in emission order.
_ATTRIBUTE_CODES = (
    ("bold", "1"), ("dim", "2"), ("italic", "3"), ("underline", "4"),
    ("blink", "5"), ("reverse", "7"), ("hidden", "8"), ("strikethrough", "9"),
)

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


class StyleParseError(ValueError):
    """A style string could not be interpreted."""


@dataclass(frozen=True)
class NamedColor:
    """One of the eight basic terminal colors."""
    name: str

    def sgr(self, background: bool = False) -> str:
        base = 40 if background else 30
        return str(base + NAMED_COLORS[self.name])


@dataclass(frozen=True)
class FixedColor:
    """An entry in the 256-color palette."""
    index: int

    def sgr(self, background: bool = False) -> str:
        return f"{48 if background else 38};5;{self.index}"


@dataclass(frozen=True)
class RGBColor:
    """A 24-bit true color."""
    r: int
    g: int
    b: int

    def sgr(self, background: bool = False) -> str:
        return f"{48 if background else 38};2;{self.r};{self.g};{self.b}"


Color = Union[NamedColor, FixedColor, RGBColor]


class Decoration(str, Enum):
    NONE = "none"
    BOX = "box"
    UNDERLINE = "ul"
    OVERLINE = "ol"
    UNDEROVERLINE = "ul ol"


@dataclass(frozen=True)
class Style:
    """A terminal style plus the flags the painter uses to combine styles."""
    foreground:    Optional[Color] = None
    background:    Optional[Color] = None
    bold:          bool = False
    dim:           bool = False
    italic:        bool = False
    underline:     bool = False
    blink:         bool = False
    reverse:       bool = False
    hidden:        bool = False
    strikethrough: bool = False
    is_emph:               bool = False
    is_syntax_highlighted: bool = False
    is_raw:                bool = False
    is_omitted:            bool = False
    decoration: Decoration = Decoration.NONE

    def sgr_params(self) -> list[str]:
        params = [code for name, code in _ATTRIBUTE_CODES if getattr(self, name)]
        if self.foreground is not None:
            params.append(self.foreground.sgr())
        if self.background is not None:
            params.append(self.background.sgr(background=True))
        return params

    @property
    def is_plain(self) -> bool:
        return not self.sgr_params()

    def prefix(self) -> str:
        """SGR sequence switching a plain terminal to this style; empty for a plain style."""
        params = self.sgr_params()
        return f"\x1b[{';'.join(params)}m" if params else ""

    def replace(self, **changes) -> "Style":
        return _replace(self, **changes)


@dataclass(frozen=True)
class SyntaxColor:
    """A highlighter color. Alpha 0 marks `r` as a raw 8-bit palette index."""
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0xFF


@dataclass(frozen=True)
class SyntaxStyle:
    """Per-token style produced by the syntax highlighter."""
    foreground: SyntaxColor = field(default_factory=lambda: SyntaxColor(0, 0, 0, 0))
    background: SyntaxColor = field(default_factory=lambda: SyntaxColor(0, 0, 0, 0))
    bold:       bool = False
    italic:     bool = False
    underline:  bool = False


# Sentinel meaning "the highlighter has nothing to say about this text".
NULL_SYNTAX_STYLE = SyntaxStyle()


def _nearest_level(value: int) -> int:
    return min(range(len(_CUBE_LEVELS)), key=lambda i: abs(_CUBE_LEVELS[i] - value))


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Closest 256-palette index, choosing between the color cube and the gray ramp."""
    ri, gi, bi = _nearest_level(r), _nearest_level(g), _nearest_level(b)
    cube = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])
    cube_index = 16 + 36 * ri + 6 * gi + bi

    gray_step = min(23, max(0, round(((r + g + b) / 3 - 8) / 10)))
    gray_value = 8 + 10 * gray_step
    gray = (gray_value,) * 3

    def dist(c):
        return (c[0] - r) ** 2 + (c[1] - g) ** 2 + (c[2] - b) ** 2

    return cube_index if dist(cube) <= dist(gray) else 232 + gray_step


def to_terminal_color(color: SyntaxColor, true_color: bool) -> Color:
    """Map a highlighter color onto a color the terminal can render."""
    if color.a == 0:
        return FixedColor(color.r)
    if true_color:
        return RGBColor(color.r, color.g, color.b)
    return FixedColor(rgb_to_ansi256(color.r, color.g, color.b))


def parse_color(word: str, true_color: bool = True) -> Color:
    """Parse a named, #rrggbb or 0-255 color word."""
    lowered = word.lower()
    if lowered in NAMED_COLORS:
        return NamedColor("magenta" if lowered == "purple" else lowered)
    if lowered.startswith("#") and len(lowered) == 7:
        try:
            r, g, b = (int(lowered[i:i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            raise StyleParseError(f"Invalid color: {word!r}") from None
        if true_color:
            return RGBColor(r, g, b)
        return FixedColor(rgb_to_ansi256(r, g, b))
    if lowered.isdigit():
        index = int(lowered)
        if 0 <= index <= 255:
            return FixedColor(index)
    raise StyleParseError(f"Invalid color: {word!r}")


def parse_style(
    text: str,
    default_foreground: Optional[Color] = None,
    default_background: Optional[Color] = None,
    true_color: bool = True,
    is_emph: bool = False,
    ) -> Style:
    """Parse a style string such as 'syntax #3f0001 bold'.

    The first color word is the foreground and the second the background.
    'auto' takes the supplied default, 'normal' leaves the slot uncolored and
    'syntax' (foreground only) defers the foreground to the highlighter.
    """
    attrs: dict = {"is_emph": is_emph}
    colors: list[Optional[Color]] = []
    for word in text.split():
        lowered = word.lower()
        if lowered in ATTRIBUTE_WORDS:
            attrs[ATTRIBUTE_WORDS[lowered]] = True
        elif lowered == "raw":
            attrs["is_raw"] = True
        elif lowered == "omit":
            attrs["is_omitted"] = True
        elif len(colors) >= 2:
            raise StyleParseError(f"Too many colors in style {text!r}")
        elif lowered == "syntax":
            if colors:
                raise StyleParseError(f"'syntax' is only valid as a foreground color: {text!r}")
            attrs["is_syntax_highlighted"] = True
            colors.append(default_foreground)
        elif lowered == "auto":
            colors.append(default_background if colors else default_foreground)
        elif lowered == "normal":
            colors.append(None)
        else:
            colors.append(parse_color(word, true_color))

    foreground = colors[0] if colors else None
    background = colors[1] if len(colors) > 1 else None
    return Style(foreground=foreground, background=background, **attrs)


DECORATION_WORDS = {"box", "ul", "ol", "overline", "underoverline", "none"}


def parse_decoration(text: str) -> Decoration:
    words = set(text.lower().split())
    if not words or words == {"none"}:
        return Decoration.NONE
    if "box" in words:
        return Decoration.BOX
    if "underoverline" in words or {"ul", "ol"} <= words or {"ul", "overline"} <= words:
        return Decoration.UNDEROVERLINE
    if "ul" in words:
        return Decoration.UNDERLINE
    if "ol" in words or "overline" in words:
        return Decoration.OVERLINE
    raise StyleParseError(f"Invalid decoration style: {text!r}")


def parse_decoration_style(text: str, true_color: bool = True) -> Style:
    """Parse a decoration style such as 'blue box': colors and attributes plus one decoration kind."""
    words = text.split()
    decoration = parse_decoration(" ".join(w for w in words if w.lower() in DECORATION_WORDS))
    style = parse_style(" ".join(w for w in words if w.lower() not in DECORATION_WORDS), true_color=true_color)
    return style.replace(decoration=decoration)


# (true color, 256-color) backgrounds for each hunk style, per mode.
_DEFAULT_BACKGROUNDS = {
    ("dark", "minus"):      ("#3f0001", 52),
    ("dark", "minus_emph"): ("#901011", 124),
    ("dark", "plus"):       ("#002800", 22),
    ("dark", "plus_emph"):  ("#006000", 28),
    ("light", "minus"):      ("#ffe0e0", 224),
    ("light", "minus_emph"): ("#ffc0c0", 217),
    ("light", "plus"):       ("#d0ffd0", 194),
    ("light", "plus_emph"):  ("#a0efa0", 157),
}


def default_background(kind: str, is_light_mode: bool, true_color: bool) -> Color:
    """Default background for 'minus', 'minus_emph', 'plus' or 'plus_emph' lines."""
    hex_color, index = _DEFAULT_BACKGROUNDS[("light" if is_light_mode else "dark", kind)]
    return parse_color(hex_color) if true_color else FixedColor(index)
