"""HTML escaping helpers."""

from __future__ import annotations


_HTML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(text: str) -> str:
    """Escape the five HTML-sensitive characters.

    Ampersands are replaced first so entities produced by later replacements
    are left untouched. Already escaped input is escaped again.
    """
    for char, entity in _HTML_ENTITIES:
        text = text.replace(char, entity)
    return text


__all__ = ["escape_html"]
