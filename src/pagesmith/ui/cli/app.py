"""Typer application wiring for the pagesmith CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.text import Text
from rich.traceback import Traceback
import typer

from pagesmith.adapters.chromium import launch_chromium
from pagesmith.api import convert_file
from pagesmith.core.config import load_config
from pagesmith.core.exceptions import PagesmithError
from pagesmith.version import get_version

from .diagnostics import CliEmitter
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Convert Markdown documents into styled PDFs with headless Chromium.",
    context_settings={"help_option_names": ["--help"]},
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pagesmith {get_version()}")
        raise typer.Exit()


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(name)s: %(message)s")


@app.command()
def convert(
    input_argument: Path | None = typer.Argument(
        None,
        metavar="INPUT",
        help="Markdown file to convert.",
        dir_okay=False,
    ),
    input_option: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="Markdown file to convert (alternative to the positional argument).",
        dir_okay=False,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF file. Defaults to the input path with a .pdf extension.",
        dir_okay=False,
    ),
    margin: int | None = typer.Option(
        None,
        "--margin",
        "-m",
        min=0,
        help="Page margin in pixels (96 px per inch, default: 50).",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML configuration file.",
        dir_okay=False,
    ),
    template: str | None = typer.Option(
        None,
        "--template",
        "-t",
        help="Built-in template name or path to a template directory.",
    ),
    style: str | None = typer.Option(
        None,
        "--style",
        help="Pygments style used for code blocks (default: monokai).",
    ),
    settle: float | None = typer.Option(
        None,
        "--settle",
        min=0,
        help="Seconds to wait after page load before printing (default: 2).",
    ),
    keep_html: bool | None = typer.Option(
        None,
        "--keep-html/--no-keep-html",
        help="Keep a copy of the intermediate HTML as <output>.debug.html.",
    ),
    html_only: bool = typer.Option(
        False,
        "--html-only",
        help="Write the styled HTML next to the output path and skip PDF generation.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the pagesmith version and exit.",
    ),
) -> None:
    """Convert a Markdown document into a styled PDF."""
    _ = version
    state = set_cli_state(verbosity=verbose, debug=debug)
    _configure_logging(state.verbosity)

    if input_argument is not None and input_option is not None:
        raise typer.BadParameter("Give the input either as an argument or with --input, not both.")
    source = input_option or input_argument
    if source is None:
        raise typer.BadParameter("Provide a Markdown file to convert.")

    emitter = CliEmitter(state)

    try:
        config = load_config(config_path).with_overrides(
            **{
                "page.margin": margin,
                "page.settle_seconds": settle,
                "highlight.style": style,
                "template": template,
                "keep_html": keep_html,
            }
        )
        result = convert_file(
            source,
            output,
            config=config,
            emitter=emitter,
            launcher=launch_chromium,
            html_only=html_only,
        )
    except PagesmithError as exc:
        if debug_enabled():
            raise
        emitter.error(f"{exc.stage} failed: {exc}", exc)
        raise typer.Exit(code=1) from exc

    label = "HTML" if result.html_only else "PDF"
    message = f"{label} generated successfully: {result.output_path}"
    state.console.print(Text(message), soft_wrap=True)


def main() -> None:
    """Console-script entry point; unexpected errors exit with status 1."""
    try:
        app()
    except (typer.Exit, SystemExit):
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Interrupted.", exception=exc)
        raise SystemExit(130) from exc
    except Exception as exc:  # pragma: no cover
        state = get_cli_state()
        if not state.show_tracebacks:
            emit_error(f"unexpected failure: {exc}", exception=exc)
            raise SystemExit(1) from exc
        state.err_console.print(
            Traceback.from_exception(
                type(exc), exc, exc.__traceback__, show_locals=state.verbosity >= 2
            )
        )
        raise SystemExit(1) from exc


__all__ = ["app", "convert", "main"]
