"""Custom exception hierarchy for the Markdown to PDF pipeline."""

from __future__ import annotations

from pathlib import Path


class PagesmithError(RuntimeError):
    """Base exception for conversion failures.

    ``stage`` names the pipeline step that failed (``read``, ``highlight``,
    ``render`` or ``pdf``) and ``path`` the file involved, when there is one.
    """

    stage: str = "render"

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class SourceReadError(PagesmithError):
    """Raised when the Markdown source cannot be read."""

    stage = "read"


class HighlightError(PagesmithError):
    """Raised when a code block cannot be highlighted."""

    stage = "highlight"


class RenderError(PagesmithError):
    """Raised when the HTML document cannot be assembled."""

    stage = "render"


class TemplateError(RenderError):
    """Raised when a template cannot be located or rendered."""


class ConfigError(PagesmithError):
    """Raised when the configuration file is unreadable or invalid."""

    stage = "config"


class PdfError(PagesmithError):
    """Base class for failures while driving the rendering engine."""

    stage = "pdf"


class EngineLaunchError(PdfError):
    """Raised when the headless browser cannot be started."""


class NavigationError(PdfError):
    """Raised when the browser fails to load the intermediate document."""


class CaptureError(PdfError):
    """Raised when the browser fails to produce the PDF."""


class ArtifactIOError(PdfError):
    """Raised when a temporary or final file cannot be written or removed."""


__all__ = [
    "ArtifactIOError",
    "CaptureError",
    "ConfigError",
    "EngineLaunchError",
    "HighlightError",
    "NavigationError",
    "PagesmithError",
    "PdfError",
    "RenderError",
    "SourceReadError",
    "TemplateError",
]
