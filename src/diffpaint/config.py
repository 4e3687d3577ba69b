"""Application configuration: settings schema, diffpaint.yaml loader, and the resolved paint policy"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from diffpaint.core.gutter import split_number_format
from diffpaint.core.highlight import is_no_syntax_highlighting_theme
from diffpaint.core.style import (
    NULL_SYNTAX_STYLE,
    Style,
    SyntaxStyle,
    default_background,
    parse_decoration_style,
    parse_style,
)


CONFIG_FILE = "diffpaint.yaml"


class Settings(BaseModel):
    theme:                str = Field(default="monokai", description="Pygments style name; 'none' disables highlighting")
    light:                bool = Field(default=False, description="Use light-background default colors")
    minus_style:          str = "normal auto"
    minus_emph_style:     str = "normal auto"
    minus_non_emph_style: str = "auto auto"
    zero_style:           str = "syntax normal"
    plus_style:           str = "syntax auto"
    plus_emph_style:      str = "syntax auto"
    plus_non_emph_style:  str = "auto auto"
    hunk_header_style:    str = "syntax"
    hunk_header_decoration_style: str = Field(default="blue box", description="Colors plus one of box, ul, ol, ul ol or none")
    number:               bool = Field(default=False, description="Show line-number gutters")
    number_minus_format:  str = "%ln⋮"
    number_plus_format:   str = "%ln│ "
    number_minus_style:        str = Field(default="", description="Empty falls back to hunk_header_style")
    number_plus_style:         str = Field(default="", description="Empty falls back to hunk_header_style")
    number_minus_format_style: str = Field(default="", description="Empty falls back to hunk_header_style")
    number_plus_format_style:  str = Field(default="", description="Empty falls back to hunk_header_style")
    keep_plus_minus_markers: bool = False
    width:      Union[int, str, None] = Field(default=None, description="'variable', an integer, or unset for terminal width")
    tabs:       int = Field(default=4, ge=0, description="Spaces per tab")
    max_line_distance: float = Field(default=0.6, ge=0.0, le=1.0)
    max_line_distance_for_naively_paired_lines: float = Field(default=0.0, ge=0.0, le=1.0)
    true_color: str = Field(default="auto", pattern="^(auto|always|never)$", description="auto, always or never")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from diffpaint.yaml, then DIFFPAINT_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"DIFFPAINT_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


@dataclass(frozen=True)
class Width:
    """Decoration width: a fixed column count, or None for variable width."""
    columns: Optional[int] = None

    @classmethod
    def fixed(cls, columns: int) -> "Width":
        return cls(columns)

    @classmethod
    def variable(cls) -> "Width":
        return cls(None)

    @property
    def is_variable(self) -> bool:
        return self.columns is None


def resolve_width(setting: Union[int, str, None], terminal_width: int) -> tuple[Width, bool]:
    """Return (width, background_extends_to_terminal_width).

    One column is held back for pagers that add a status column.
    """
    available = terminal_width - 1
    if setting is None:
        return Width.fixed(available), True
    if setting == "variable":
        return Width.variable(), False
    try:
        requested = int(setting)
    except ValueError:
        raise ValueError(f"Could not parse width as a positive integer: {setting!r}") from None
    if requested <= 0:
        raise ValueError(f"Could not parse width as a positive integer: {setting!r}")
    return Width.fixed(min(requested, available)), True


def resolve_true_color(setting: str, environ: Mapping[str, str] = None) -> bool:
    if setting == "always":
        return True
    if setting == "never":
        return False
    environ = os.environ if environ is None else environ
    return environ.get("COLORTERM", "").lower() in ("truecolor", "24bit")


@dataclass(frozen=True)
class PaintPolicy:
    """Fully resolved styles and rendering options consumed read-only by the painter."""
    minus_style:          Style
    minus_emph_style:     Style
    minus_non_emph_style: Style
    zero_style:           Style
    plus_style:           Style
    plus_emph_style:      Style
    plus_non_emph_style:  Style
    number_minus_format:       str = "%ln⋮"
    number_plus_format:        str = "%ln│ "
    number_minus_style:        Style = Style()
    number_plus_style:         Style = Style()
    number_minus_format_style: Style = Style()
    number_plus_format_style:  Style = Style()
    hunk_header_style:            Style = Style()
    hunk_header_decoration_style: Style = Style()
    show_line_numbers: bool = False
    minus_line_marker: str = " "
    plus_line_marker:  str = " "
    tab_width:  int = 4
    decorations_width: Width = Width.variable()
    background_color_extends_to_terminal_width: bool = False
    true_color: bool = True
    theme: Optional[str] = None
    max_line_distance: float = 0.6
    max_line_distance_for_naively_paired_lines: float = 0.0
    null_syntax_style: SyntaxStyle = NULL_SYNTAX_STYLE


def _or_default(value: str, default: str) -> str:
    return value if value else default


def build_policy(
    settings: Settings,
    terminal_width: Optional[int] = None,
    environ: Mapping[str, str] = None,
    ) -> PaintPolicy:
    """Resolve Settings into a PaintPolicy. Raises ValueError for unusable settings."""
    true_color = resolve_true_color(settings.true_color, environ)
    if terminal_width is None:
        terminal_width = shutil.get_terminal_size().columns
    width, background_extends = resolve_width(settings.width, terminal_width)

    def hunk_style(text: str, kind: str, is_emph: bool = False) -> Style:
        background = default_background(kind, settings.light, true_color)
        return parse_style(text, default_background=background, true_color=true_color, is_emph=is_emph)

    minus_style = hunk_style(settings.minus_style, "minus")
    plus_style = hunk_style(settings.plus_style, "plus")

    def non_emph_style(text: str, base: Style) -> Style:
        return parse_style(text, base.foreground, base.background, true_color)

    def number_style(text: str) -> Style:
        return parse_style(_or_default(text, settings.hunk_header_style), true_color=true_color)

    for template in (settings.number_minus_format, settings.number_plus_format):
        split_number_format(template)

    theme = None if is_no_syntax_highlighting_theme(settings.theme) else settings.theme
    return PaintPolicy(
        minus_style=minus_style,
        minus_emph_style=hunk_style(settings.minus_emph_style, "minus_emph", is_emph=True),
        minus_non_emph_style=non_emph_style(settings.minus_non_emph_style, minus_style),
        zero_style=parse_style(settings.zero_style, true_color=true_color),
        plus_style=plus_style,
        plus_emph_style=hunk_style(settings.plus_emph_style, "plus_emph", is_emph=True),
        plus_non_emph_style=non_emph_style(settings.plus_non_emph_style, plus_style),
        number_minus_format=settings.number_minus_format,
        number_plus_format=settings.number_plus_format,
        number_minus_style=number_style(settings.number_minus_style),
        number_plus_style=number_style(settings.number_plus_style),
        number_minus_format_style=number_style(settings.number_minus_format_style),
        number_plus_format_style=number_style(settings.number_plus_format_style),
        hunk_header_style=parse_style(settings.hunk_header_style, true_color=true_color),
        hunk_header_decoration_style=parse_decoration_style(settings.hunk_header_decoration_style, true_color),
        show_line_numbers=settings.number,
        minus_line_marker="-" if settings.keep_plus_minus_markers else " ",
        plus_line_marker="+" if settings.keep_plus_minus_markers else " ",
        tab_width=settings.tabs,
        decorations_width=width,
        background_color_extends_to_terminal_width=background_extends,
        true_color=true_color,
        theme=theme,
        max_line_distance=settings.max_line_distance,
        max_line_distance_for_naively_paired_lines=settings.max_line_distance_for_naively_paired_lines,
    )
