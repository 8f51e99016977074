"""Headless Chromium driver turning an HTML document into PDF bytes.

One conversion owns one browser: the HTML is written to a temporary file next
to the requested output, Chromium loads it through a ``file://`` URL, waits a
fixed settle period, prints it to PDF and is shut down again. The temporary
file and the browser are released on every exit path.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from contextlib import AbstractContextManager, ExitStack, contextmanager
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import shutil
import time
from typing import Any

from playwright.sync_api import Error as PlaywrightError, sync_playwright

from pagesmith.core.config import PIXELS_PER_INCH, PageConfig
from pagesmith.core.diagnostics import DiagnosticEmitter, ensure_emitter
from pagesmith.core.exceptions import (
    ArtifactIOError,
    CaptureError,
    EngineLaunchError,
    NavigationError,
)


logger = logging.getLogger(__name__)

LAUNCH_ARGS = ("--no-sandbox", "--disable-gpu")

BrowserLauncher = Callable[[], AbstractContextManager[Any]]

_PLAYWRIGHT_INSTALL_HINT = (
    "Install the Chromium build used by Playwright with `playwright install chromium` "
    "(add `--with-deps` on Debian/Ubuntu to pull the system libraries)."
)


@dataclass(frozen=True, slots=True)
class PdfCaptureOptions:
    """Parameters of the PDF print request."""

    margin_inches: float
    width: str = "8.5in"
    height: str = "11in"
    landscape: bool = False
    print_background: bool = True
    prefer_css_page_size: bool = True

    @classmethod
    def from_page_config(cls, page: PageConfig, *, margin: int | None = None) -> PdfCaptureOptions:
        margin_px = page.margin if margin is None else margin
        return cls(
            margin_inches=margin_px / PIXELS_PER_INCH,
            width=page.width,
            height=page.height,
            landscape=page.landscape,
            print_background=page.print_background,
            prefer_css_page_size=page.prefer_css_page_size,
        )

    @property
    def margins(self) -> Mapping[str, str]:
        value = f"{self.margin_inches:.6g}in"
        return {"top": value, "right": value, "bottom": value, "left": value}

    def to_playwright(self) -> dict[str, Any]:
        """Return keyword arguments for ``Page.pdf``."""
        return {
            "print_background": self.print_background,
            "landscape": self.landscape,
            "width": self.width,
            "height": self.height,
            "prefer_css_page_size": self.prefer_css_page_size,
            "margin": dict(self.margins),
        }


def artifact_path_for(output_path: Path) -> Path:
    """Return the temporary HTML path used for ``output_path``."""
    candidate = output_path.with_suffix(".html")
    if candidate == output_path:
        candidate = output_path.with_suffix(".pagesmith.html")
    return candidate


def file_url(path: Path) -> str:
    """Return a ``file://`` URL for ``path`` with reserved characters percent-encoded."""
    return path.resolve().as_uri()


def _close_quietly(
    close: Callable[[], Any], label: str, emitter: DiagnosticEmitter | None = None
) -> None:
    try:
        close()
    except Exception as exc:
        ensure_emitter(emitter).warning(f"Failed to close {label}: {exc}", exc)


@contextmanager
def launch_chromium() -> Iterator[Any]:
    """Start Playwright and a headless Chromium, stopping both on exit."""
    try:
        playwright = sync_playwright().start()
    except PlaywrightError as exc:
        raise EngineLaunchError(f"Unable to start Playwright: {exc}") from exc

    try:
        try:
            browser = playwright.chromium.launch(
                headless=True,
                chromium_sandbox=False,
                args=list(LAUNCH_ARGS),
            )
        except PlaywrightError as exc:
            message = str(exc).strip() or exc.__class__.__name__
            hint = ""
            if "Executable doesn't exist" in message or "Failed to launch" in message:
                hint = f" {_PLAYWRIGHT_INSTALL_HINT}"
            raise EngineLaunchError(
                f"Unable to launch headless Chromium: {message}.{hint}"
            ) from exc
        try:
            yield browser
        finally:
            _close_quietly(browser.close, "browser")
    finally:
        _close_quietly(playwright.stop, "Playwright")


@contextmanager
def temporary_artifact(
    path: Path,
    html: str,
    *,
    emitter: DiagnosticEmitter | None = None,
    keep_copy: Path | None = None,
) -> Iterator[Path]:
    """Write ``html`` to ``path`` and remove it when the block exits.

    A removal failure is raised as :class:`ArtifactIOError` when the block
    succeeded and only reported as a warning when the block is already failing.
    """
    emitter = ensure_emitter(emitter)
    try:
        path.write_text(html, encoding="utf-8")
    except OSError as exc:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove partial artifact %s", path, exc_info=True)
        raise ArtifactIOError(f"Unable to write temporary HTML: {exc}", path=path) from exc
    logger.debug("Wrote intermediate HTML to %s", path)
    emitter.event("artifact_written", {"path": str(path)})

    failed = False
    try:
        yield path
    except BaseException:
        failed = True
        raise
    finally:
        if keep_copy is not None:
            try:
                shutil.copyfile(path, keep_copy)
            except OSError as exc:
                emitter.warning(f"Unable to keep a copy of {path}: {exc}", exc)
            else:
                logger.info("Kept intermediate HTML at %s", keep_copy)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            if not failed:
                raise ArtifactIOError(
                    f"Unable to remove temporary HTML: {exc}", path=path
                ) from exc
            emitter.warning(f"Unable to remove temporary HTML {path}: {exc}", exc)
        else:
            logger.debug("Removed intermediate HTML %s", path)
            emitter.event("artifact_removed", {"path": str(path)})


@contextmanager
def open_page(
    launcher: BrowserLauncher,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> Iterator[Any]:
    """Acquire a browser from ``launcher`` and open a fresh page on it."""
    emitter = ensure_emitter(emitter)
    with launcher() as browser:
        logger.debug("Launched headless Chromium %s", getattr(browser, "version", "unknown"))
        emitter.event(
            "engine_launched",
            {"browser": "chromium", "version": getattr(browser, "version", None)},
        )
        try:
            page = browser.new_page()
        except PlaywrightError as exc:
            raise NavigationError(f"Unable to open a browser page: {exc}") from exc
        try:
            yield page
        finally:
            _close_quietly(page.close, "page", emitter)


def write_pdf(output_path: Path, data: bytes) -> Path:
    """Write ``data`` to ``output_path`` without leaving a partial file behind."""
    partial = output_path.with_name(f"{output_path.name}.part")
    try:
        partial.write_bytes(data)
        os.replace(partial, output_path)
    except OSError as exc:
        try:
            partial.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove partial PDF %s", partial, exc_info=True)
        raise ArtifactIOError(f"Unable to write PDF: {exc}", path=output_path) from exc
    return output_path


def render_pdf(
    html: str,
    output_path: Path | str,
    *,
    options: PdfCaptureOptions,
    settle_seconds: float = 2.0,
    launcher: BrowserLauncher = launch_chromium,
    emitter: DiagnosticEmitter | None = None,
    keep_html: bool = False,
    sleep: Callable[[float], Any] = time.sleep,
) -> Path:
    """Print ``html`` to a PDF at ``output_path`` with headless Chromium.

    Raises:
        EngineLaunchError: the browser could not be started.
        NavigationError: the page could not be opened or loaded.
        CaptureError: printing to PDF failed.
        ArtifactIOError: the temporary HTML or the final PDF could not be
            written or removed.
    """
    emitter = ensure_emitter(emitter)
    output = Path(output_path)
    artifact = artifact_path_for(output)
    keep_copy = output.with_suffix(".debug.html") if keep_html else None

    with ExitStack() as stack:
        stack.enter_context(
            temporary_artifact(artifact, html, emitter=emitter, keep_copy=keep_copy)
        )
        page = stack.enter_context(open_page(launcher, emitter=emitter))

        url = file_url(artifact)
        try:
            page.goto(url, wait_until="load")
            page.wait_for_load_state("load")
        except PlaywrightError as exc:
            raise NavigationError(f"Unable to load {url}: {exc}", path=artifact) from exc
        logger.debug("Navigated to %s", url)

        if settle_seconds > 0:
            logger.debug("Waiting %.2fs for late content to settle", settle_seconds)
            sleep(settle_seconds)

        try:
            pdf_bytes = page.pdf(**options.to_playwright())
        except PlaywrightError as exc:
            raise CaptureError(f"Chromium failed to print the page: {exc}", path=output) from exc

        write_pdf(output, pdf_bytes)
        emitter.event("pdf_captured", {"path": str(output), "bytes": len(pdf_bytes)})

    return output


__all__ = [
    "LAUNCH_ARGS",
    "BrowserLauncher",
    "PdfCaptureOptions",
    "artifact_path_for",
    "file_url",
    "launch_chromium",
    "open_page",
    "render_pdf",
    "temporary_artifact",
    "write_pdf",
]
