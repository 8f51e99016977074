"""Pygments integration helpers for HTML rendering."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from pygments.lexer import Lexer
from pygments.lexers import (
    ClassNotFound,
    TextLexer,
    get_lexer_by_name,
    get_lexer_for_filename,
)
from pygments.styles import get_style_by_name
from pygments.token import Token, _TokenType

from pagesmith.core.exceptions import ConfigError, HighlightError

from .escape import escape_html


DEFAULT_STYLE = "monokai"

TokenLine = list[tuple[_TokenType, str]]


def resolve_lexer(language: str) -> Lexer:
    """Return the lexer matching a fence hint.

    The hint is tried as a lexer alias first, then as a file extension. Plain
    text is used when neither matches.
    """
    hint = language.strip()
    if hint:
        try:
            return get_lexer_by_name(hint, stripnl=False)
        except ClassNotFound:
            pass
        try:
            return get_lexer_for_filename(f"code.{hint.lstrip('.')}", stripnl=False)
        except ClassNotFound:
            pass
    return TextLexer(stripnl=False)


def _style_declarations(definition: Mapping[str, object]) -> str:
    declarations: list[str] = []
    color = definition.get("color")
    if color:
        declarations.append(f"color:#{color}")
    if definition.get("bold"):
        declarations.append("font-weight:bold")
    if definition.get("italic"):
        declarations.append("font-style:italic")
    if definition.get("underline"):
        declarations.append("text-decoration:underline")
    return ";".join(declarations)


def split_token_lines(tokens: Iterable[tuple[_TokenType, str]]) -> Iterator[TokenLine]:
    """Regroup a token stream into lines, keeping each line terminator."""
    line: TokenLine = []
    for ttype, value in tokens:
        parts = value.split("\n")
        for index, part in enumerate(parts):
            last = index == len(parts) - 1
            if not last:
                line.append((ttype, part + "\n"))
                yield line
                line = []
            elif part:
                line.append((ttype, part))
    if line:
        yield line


class PygmentsHtmlHighlighter:
    """Convert source code to inline-styled HTML spans using Pygments.

    Only foreground attributes of the style are emitted so the output sits on
    whatever background the surrounding container provides. Pygments'
    ``HtmlFormatter`` is not used: its inline styles carry token background
    colours and it cannot hand back one fragment per source line.
    """

    def __init__(self, *, style: str = DEFAULT_STYLE) -> None:
        try:
            style_cls = get_style_by_name(style)
        except ClassNotFound as exc:
            raise ConfigError(f"Unknown Pygments style '{style}'.") from exc
        self.style = style
        self.background_color: str = style_cls.background_color or "#ffffff"
        self._declarations: Mapping[_TokenType, str] = MappingProxyType(
            {ttype: _style_declarations(definition) for ttype, definition in style_cls}
        )

    def _declarations_for(self, ttype: _TokenType) -> str:
        while ttype not in self._declarations and ttype is not Token:
            ttype = ttype.parent
        return self._declarations.get(ttype, "")

    def format_line(self, tokens: TokenLine) -> str:
        """Return the HTML fragment for one line of tokens."""
        parts: list[str] = []
        for ttype, value in tokens:
            text = escape_html(value)
            declarations = self._declarations_for(ttype)
            if declarations:
                parts.append(f'<span style="{declarations}">{text}</span>')
            else:
                parts.append(text)
        return "".join(parts)

    def highlight_lines(self, code: str, language: str) -> list[str]:
        """Return one HTML fragment per source line, in source order."""
        if not code:
            return []
        lexer = resolve_lexer(language)
        fragments: list[str] = []
        try:
            for tokens in split_token_lines(lexer.get_tokens(code)):
                fragments.append(self.format_line(tokens))
        except Exception as exc:
            line_number = len(fragments) + 1
            raise HighlightError(
                f"Error highlighting line {line_number} of '{language or 'text'}' code block: {exc}"
            ) from exc
        return fragments

    def __call__(self, code: str, language: str) -> str:
        return "".join(self.highlight_lines(code, language))


__all__ = [
    "DEFAULT_STYLE",
    "PygmentsHtmlHighlighter",
    "resolve_lexer",
    "split_token_lines",
]
