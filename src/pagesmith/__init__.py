"""Markdown to PDF rendering through styled HTML and headless Chromium."""

from __future__ import annotations

from pagesmith.adapters.chromium import PdfCaptureOptions, render_pdf
from pagesmith.adapters.html import PygmentsHtmlHighlighter, escape_html
from pagesmith.adapters.html.renderer import RendererState, render_event, render_events
from pagesmith.adapters.markdown import iter_events, parse_document
from pagesmith.api import (
    ConversionResult,
    convert_file,
    default_output_path,
    html_to_pdf,
    markdown_to_html,
)
from pagesmith.core.config import PagesmithConfig, load_config
from pagesmith.core.exceptions import (
    ArtifactIOError,
    CaptureError,
    ConfigError,
    EngineLaunchError,
    HighlightError,
    NavigationError,
    PagesmithError,
    RenderError,
    SourceReadError,
    TemplateError,
)
from pagesmith.version import get_version


__version__ = get_version()

__all__ = [
    "ArtifactIOError",
    "CaptureError",
    "ConfigError",
    "ConversionResult",
    "EngineLaunchError",
    "HighlightError",
    "NavigationError",
    "PagesmithConfig",
    "PagesmithError",
    "PdfCaptureOptions",
    "PygmentsHtmlHighlighter",
    "RenderError",
    "RendererState",
    "SourceReadError",
    "TemplateError",
    "__version__",
    "convert_file",
    "default_output_path",
    "escape_html",
    "get_version",
    "html_to_pdf",
    "iter_events",
    "load_config",
    "markdown_to_html",
    "parse_document",
    "render_event",
    "render_events",
]
