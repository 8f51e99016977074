"""Diagnostics reported by the conversion pipeline.

The pipeline never prints. It reports progress as named events with a small
payload through a :class:`DiagnosticEmitter`. The CLI renders them with Rich.
Library callers that pass no emitter get them through :mod:`logging`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class LoggingEmitter:
    """Forward diagnostics to a :class:`logging.Logger`.

    Known events are logged at INFO as one-line summaries, other events at
    DEBUG with their raw payload.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def _log(self, level: int, message: str, exc: BaseException | None) -> None:
        self._logger.log(level, message, exc_info=exc)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.WARNING, message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.ERROR, message, exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        summary = format_event_message(name, payload)
        if summary is None:
            self._logger.debug("event %s: %s", name, dict(payload))
        else:
            self._logger.info(summary)


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    return LoggingEmitter() if emitter is None else emitter


def _path(payload: Mapping[str, Any]) -> str:
    return str(payload.get("path") or "<unknown>")


def _engine_launched(payload: Mapping[str, Any]) -> str:
    browser = payload.get("browser") or "chromium"
    version = payload.get("version")
    return f"Launched headless {browser} {version}" if version else f"Launched headless {browser}"


def _pdf_captured(payload: Mapping[str, Any]) -> str:
    size = payload.get("bytes")
    suffix = "" if size is None else f" ({size} bytes)"
    return f"Captured PDF: {_path(payload)}{suffix}"


_EVENT_FORMATTERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "artifact_written": lambda payload: f"Wrote intermediate HTML: {_path(payload)}",
    "engine_launched": _engine_launched,
    "pdf_captured": _pdf_captured,
    "artifact_removed": lambda payload: f"Removed intermediate HTML: {_path(payload)}",
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a one-line summary for a pipeline event, ``None`` for unknown events."""
    formatter = _EVENT_FORMATTERS.get(name)
    return formatter(payload) if formatter else None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "ensure_emitter",
    "format_event_message",
]
