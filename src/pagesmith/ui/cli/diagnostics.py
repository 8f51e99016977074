"""Pipeline diagnostics rendered on the terminal."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pagesmith.core.diagnostics import format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state, render_message


class CliEmitter:
    """Record every pipeline event on the CLI state and echo known ones at ``-v``."""

    def __init__(self, state: CLIState | None = None) -> None:
        self._state = state if state is not None else get_cli_state()

    @property
    def debug_enabled(self) -> bool:
        return self._state.show_tracebacks

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._state.record_event(name, payload)
        if self._state.verbosity < 1:
            return
        summary = format_event_message(name, payload)
        if summary is not None:
            render_message("info", summary)


__all__ = ["CliEmitter"]
