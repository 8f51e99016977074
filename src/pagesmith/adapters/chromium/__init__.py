"""Chromium page renderer."""

from __future__ import annotations

from .engine import (
    LAUNCH_ARGS,
    BrowserLauncher,
    PdfCaptureOptions,
    artifact_path_for,
    file_url,
    launch_chromium,
    open_page,
    render_pdf,
    temporary_artifact,
    write_pdf,
)


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
