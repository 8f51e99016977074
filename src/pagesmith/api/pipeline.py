"""High-level conversion pipeline: Markdown source to styled HTML to PDF."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path

from pagesmith.adapters.chromium import (
    BrowserLauncher,
    PdfCaptureOptions,
    launch_chromium,
    render_pdf,
)
from pagesmith.adapters.html.pygments import PygmentsHtmlHighlighter
from pagesmith.adapters.html.renderer import render_events
from pagesmith.adapters.markdown import parse_document
from pagesmith.core.config import PagesmithConfig
from pagesmith.core.diagnostics import DiagnosticEmitter, ensure_emitter
from pagesmith.core.exceptions import ArtifactIOError, PagesmithError, SourceReadError
from pagesmith.core.templates import load_template


logger = logging.getLogger(__name__)

Highlighter = Callable[[str, str], str]

_FALLBACK_CODE_BACKGROUND = "#2b303b"


@dataclass(slots=True)
class ConversionResult:
    """Outcome of a successful conversion."""

    input_path: Path
    output_path: Path
    title: str
    html_only: bool = False


def default_output_path(input_path: Path | str) -> Path:
    """Return ``input_path`` with its extension replaced by ``.pdf``."""
    return Path(input_path).with_suffix(".pdf")


def read_source(path: Path | str) -> str:
    """Read a Markdown file as UTF-8 text."""
    source_path = Path(path)
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Error reading file {source_path}: {exc}", path=source_path) from exc


def _render_document(
    source: str,
    settings: PagesmithConfig,
    title: str | None,
    highlighter: Highlighter | None,
) -> tuple[str, str]:
    document = parse_document(source)
    if highlighter is None:
        highlighter = PygmentsHtmlHighlighter(style=settings.highlight.style)

    resolved_title = document.title or title or ""
    wrapper = load_template(
        settings.template,
        title=resolved_title,
        lang=settings.lang,
        code_background=getattr(highlighter, "background_color", _FALLBACK_CODE_BACKGROUND),
    )
    return render_events(document.events(), wrapper, highlight=highlighter), resolved_title


def markdown_to_html(
    source: str,
    *,
    config: PagesmithConfig | None = None,
    title: str | None = None,
    highlighter: Highlighter | None = None,
) -> str:
    """Render Markdown ``source`` into a complete, self-contained HTML document.

    A ``title`` entry in the front matter takes precedence over ``title``.
    """
    html, _ = _render_document(source, config or PagesmithConfig(), title, highlighter)
    return html


def html_to_pdf(
    html: str,
    output_path: Path | str,
    *,
    margin: int | None = None,
    config: PagesmithConfig | None = None,
    launcher: BrowserLauncher = launch_chromium,
    emitter: DiagnosticEmitter | None = None,
) -> Path:
    """Print a rendered HTML document to ``output_path``."""
    settings = config or PagesmithConfig()
    options = PdfCaptureOptions.from_page_config(settings.page, margin=margin)
    return render_pdf(
        html,
        output_path,
        options=options,
        settle_seconds=settings.page.settle_seconds,
        launcher=launcher,
        emitter=emitter,
        keep_html=settings.keep_html,
    )


def convert_file(
    input_path: Path | str,
    output_path: Path | str | None = None,
    *,
    margin: int | None = None,
    config: PagesmithConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
    launcher: BrowserLauncher = launch_chromium,
    html_only: bool = False,
) -> ConversionResult:
    """Convert a Markdown file into a PDF (or only into HTML with ``html_only``).

    Every failure surfaces as a :class:`PagesmithError` whose ``stage`` names
    the failing step. No output file is left behind on failure.
    """
    emitter = ensure_emitter(emitter)
    settings = config or PagesmithConfig()
    source_path = Path(input_path)
    target = Path(output_path) if output_path is not None else default_output_path(source_path)

    source = read_source(source_path)
    try:
        html, title = _render_document(source, settings, source_path.stem, None)
    except PagesmithError as exc:
        if exc.path is None:
            exc.path = source_path
        raise

    if html_only:
        target = target.with_suffix(".html")
        try:
            target.write_text(html, encoding="utf-8")
        except OSError as exc:
            raise ArtifactIOError(f"Unable to write HTML: {exc}", path=target) from exc
        logger.info("Wrote HTML document to %s", target)
        return ConversionResult(source_path, target, title, html_only=True)

    try:
        html_to_pdf(
            html, target, margin=margin, config=settings, launcher=launcher, emitter=emitter
        )
    except PagesmithError as exc:
        if exc.path is None:
            exc.path = target
        raise
    logger.info("Converted %s to %s", source_path, target)
    return ConversionResult(source_path, target, title)


__all__ = [
    "ConversionResult",
    "convert_file",
    "default_output_path",
    "html_to_pdf",
    "markdown_to_html",
    "read_source",
]
