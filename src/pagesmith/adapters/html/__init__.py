"""HTML rendering adapters: escaping, syntax highlighting, and event rendering."""

from __future__ import annotations

from .escape import escape_html
from .pygments import DEFAULT_STYLE, PygmentsHtmlHighlighter, resolve_lexer


__all__ = [
    "DEFAULT_STYLE",
    "PygmentsHtmlHighlighter",
    "escape_html",
    "resolve_lexer",
]
