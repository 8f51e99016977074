"""Public API for converting Markdown documents to PDF."""

from __future__ import annotations

from .pipeline import (
    ConversionResult,
    convert_file,
    default_output_path,
    html_to_pdf,
    markdown_to_html,
    read_source,
)


__all__ = [
    "ConversionResult",
    "convert_file",
    "default_output_path",
    "html_to_pdf",
    "markdown_to_html",
    "read_source",
]
