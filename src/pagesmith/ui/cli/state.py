"""Per-invocation CLI state: verbosity, traceback switch, consoles and recorded events."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import sys
from typing import Any, TextIO

import click
from rich.console import Console
from rich.text import Text
import typer


__all__ = [
    "CLIState",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]

_LEVEL_STYLES = {"error": "red", "warning": "yellow"}


def _console_for(current: Console | None, stream: TextIO) -> Console:
    # CliRunner and capsys swap the standard streams between invocations.
    if current is not None and current.file is stream:
        return current
    return Console(file=stream, highlight=False)


@dataclass(slots=True)
class CLIState:
    """Settings and diagnostics collected while a command runs."""

    verbosity: int = 0
    show_tracebacks: bool = False
    events: defaultdict[str, list[dict[str, Any]]] = field(
        default_factory=lambda: defaultdict(list), init=False
    )
    _stdout: Console | None = field(default=None, init=False, repr=False)
    _stderr: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        self._stdout = _console_for(self._stdout, sys.stdout)
        return self._stdout

    @property
    def err_console(self) -> Console:
        self._stderr = _console_for(self._stderr, sys.stderr)
        return self._stderr

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events[name].append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return the events recorded under ``name`` and forget them."""
        return self.events.pop(name, [])


_CURRENT: ContextVar[CLIState | None] = ContextVar("pagesmith_cli_state", default=None)


def _context_chain(ctx: click.Context | None) -> Iterator[click.Context]:
    while ctx is not None:
        yield ctx
        ctx = ctx.parent


def get_cli_state(ctx: typer.Context | click.Context | None = None) -> CLIState:
    """Return the state bound to the running command, creating it on first use."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is None:
        state = _CURRENT.get()
    else:
        state = next(
            (item.obj for item in _context_chain(ctx) if isinstance(item.obj, CLIState)),
            None,
        )
        if state is None:
            state = ctx.obj = CLIState()
    if state is None:
        state = CLIState()
    _CURRENT.set(state)
    return state


def set_cli_state(
    *,
    ctx: typer.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(verbosity, 0)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def _causes(exc: BaseException) -> Iterator[BaseException]:
    seen = {id(exc)}
    current = exc.__cause__ or exc.__context__
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def _detail_lines(message: str, exception: BaseException, verbosity: int) -> list[str]:
    lines: list[str] = []
    detail = str(exception).strip()
    if detail and detail not in message:
        lines.append(detail)
    lines.append(f"type: {type(exception).__name__}")
    path = getattr(exception, "path", None)
    if path is not None:
        lines.append(f"path: {path}")
    lines.extend(str(note) for note in getattr(exception, "__notes__", ()))
    if verbosity >= 2:
        causes = [f"  {type(cause).__name__}: {cause}" for cause in _causes(exception)]
        if causes:
            lines.append("caused by:")
            lines.extend(causes)
    return lines


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message``; warnings and errors go to stderr with optional details.

    At ``-v`` the exception type, path and notes follow the message, at
    ``-vv`` the chain of causes as well.
    """
    state = get_cli_state()
    if level not in _LEVEL_STYLES:
        state.console.print(Text(message), soft_wrap=True)
        return

    style = _LEVEL_STYLES[level]
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        text.append("\n" + "\n".join(_detail_lines(message, exception, state.verbosity)), style)
    state.err_console.print(text, soft_wrap=True)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Whether full tracebacks were requested with ``--debug``."""
    return get_cli_state().show_tracebacks
