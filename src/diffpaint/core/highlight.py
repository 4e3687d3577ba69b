"""Pygments-backed syntax highlighting of single diff lines into style sections"""

import logging
from collections import deque
from functools import lru_cache
from typing import Hashable, Optional

from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from diffpaint.core.sections import Section
from diffpaint.core.style import NULL_SYNTAX_STYLE, SyntaxColor, SyntaxStyle


logger = logging.getLogger(__name__)

NO_SYNTAX_HIGHLIGHTING_THEME = "none"

DEFAULT_CONTEXT_LINES = 500

# Lines must come back from the lexer exactly as given.
_LEXER_OPTIONS = {"stripnl": False, "stripall": False, "ensurenl": False}

# Pygments ansi color names, by 8-bit palette index.
_ANSI_COLOR_NAMES = [
    "ansiblack", "ansired", "ansigreen", "ansiyellow",
    "ansiblue", "ansimagenta", "ansicyan", "ansigray",
    "ansibrightblack", "ansibrightred", "ansibrightgreen", "ansibrightyellow",
    "ansibrightblue", "ansibrightmagenta", "ansibrightcyan", "ansiwhite",
]


def is_no_syntax_highlighting_theme(name: Optional[str]) -> bool:
    return name is None or name.lower() == NO_SYNTAX_HIGHLIGHTING_THEME


def list_themes() -> list[str]:
    return sorted(get_all_styles())


@lru_cache(maxsize=32)
def get_lexer(extension: Optional[str]):
    """Lexer for a file extension (cached), falling back to plain text."""
    if extension:
        try:
            return get_lexer_for_filename(f"file.{extension.lstrip('.')}", **_LEXER_OPTIONS)
        except ClassNotFound:
            logger.debug("No lexer for extension %r; using plain text", extension)
    return TextLexer(**_LEXER_OPTIONS)


def parse_pygments_color(value: Optional[str]) -> Optional[SyntaxColor]:
    """Convert a Pygments style color ('f8f8f2', '#f8f8f2' or 'ansired') to a SyntaxColor."""
    if not value:
        return None
    if value in _ANSI_COLOR_NAMES:
        return SyntaxColor(_ANSI_COLOR_NAMES.index(value), 0, 0, 0)
    value = value.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    return SyntaxColor(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


class PygmentsHighlighter:
    """Highlights one line at a time with a Pygments style and lexer.

    Each stream (one per diff side) keeps the lines seen so far and lexes a
    new line after them, so a line inside a multi-line string or comment
    keeps that token's color. At most `context_lines` earlier lines are kept.
    """

    def __init__(self, theme: str, extension: Optional[str] = None, context_lines: int = DEFAULT_CONTEXT_LINES):
        try:
            self.theme = get_style_by_name(theme)
        except ClassNotFound:
            raise ValueError(f"Unknown syntax theme: {theme!r}") from None
        self.theme_name = theme
        self.lexer = get_lexer(extension)
        self.context_lines = context_lines
        self._styles: dict = {}
        self._contexts: dict[Hashable, deque] = {}

    def set_syntax(self, extension: Optional[str]) -> None:
        self.lexer = get_lexer(extension)
        self._contexts.clear()

    def _context(self, stream: Hashable) -> deque:
        if stream not in self._contexts:
            self._contexts[stream] = deque(maxlen=self.context_lines)
        return self._contexts[stream]

    def remember(self, line: str, stream: Hashable = None) -> None:
        """Add a line to the stream's lexing context without highlighting it."""
        self._context(stream).append(line)

    def syntax_style(self, token_type) -> SyntaxStyle:
        if token_type not in self._styles:
            token_style = self.theme.style_for_token(token_type)
            foreground = parse_pygments_color(token_style.get("color"))
            if foreground is None:
                self._styles[token_type] = NULL_SYNTAX_STYLE
            else:
                self._styles[token_type] = SyntaxStyle(
                    foreground=foreground,
                    background=parse_pygments_color(token_style.get("bgcolor")) or SyntaxColor(0, 0, 0, 0),
                    bold=bool(token_style.get("bold")),
                    italic=bool(token_style.get("italic")),
                    underline=bool(token_style.get("underline")),
                )
        return self._styles[token_type]

    def highlight(self, line: str, stream: Hashable = None) -> list[Section]:
        """Partition the line, terminator included, into syntax-styled sections."""
        context = self._context(stream)
        preceding = "".join(context)
        text = preceding + line
        tokens = [(token_type, value) for token_type, value in self.lexer.get_tokens(text) if value]
        if "".join(value for _, value in tokens) != text:
            # The lexer normalised the text (e.g. CRLF); leave the line unannotated.
            logger.debug("Lexer %s altered line %r; skipping highlighting", self.lexer.name, line)
            context.clear()
            return [Section(NULL_SYNTAX_STYLE, line)]
        context.append(line)

        sections = []
        start = len(preceding)
        position = 0
        for token_type, value in tokens:
            end = position + len(value)
            if end > start:
                sections.append(Section(self.syntax_style(token_type), value[max(0, start - position):]))
            position = end
        return sections
