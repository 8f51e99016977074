"""Load the HTML wrapper placed around rendered documents.

A template is a directory holding ``template.html`` (a Jinja2 document) and an
optional ``style.css``. The template receives ``title``, ``lang``,
``stylesheet``, ``code_background`` and a ``content`` placeholder; the rendered
text before the placeholder becomes the document prefix, the text after it the
suffix.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateError as JinjaTemplateError
from jinja2 import TemplateNotFound

from pagesmith.adapters.html.escape import escape_html
from pagesmith.core.exceptions import TemplateError


BUILTIN_TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "builtin_templates"
DEFAULT_TEMPLATE = "default"
TEMPLATE_ENTRY = "template.html"
STYLESHEET_ENTRY = "style.css"

_CONTENT_SENTINEL = "\x00pagesmith-content\x00"


@dataclass(frozen=True, slots=True)
class DocumentTemplate:
    """Static text wrapped around the rendered document body."""

    prefix: str
    suffix: str
    root: Path | None = None


def _build_environment(template_root: Path) -> Environment:
    environment = Environment(
        loader=FileSystemLoader(str(template_root)),
        autoescape=False,
        keep_trailing_newline=True,
    )
    environment.filters.setdefault("html_escape", escape_html)
    return environment


def resolve_template_root(template: str | Path) -> Path:
    """Return the directory backing a template name or path."""
    if isinstance(template, str) and template in list_builtin_templates():
        return BUILTIN_TEMPLATES_DIR / template

    candidate = Path(template).expanduser()
    if candidate.is_dir():
        return candidate.resolve()

    available = ", ".join(list_builtin_templates()) or "none"
    raise TemplateError(
        f"Unknown template '{template}'. Provide a template directory or one of: {available}."
    )


def list_builtin_templates() -> list[str]:
    """Return the names of the templates shipped with the package."""
    if not BUILTIN_TEMPLATES_DIR.is_dir():
        return []
    return sorted(
        entry.name
        for entry in BUILTIN_TEMPLATES_DIR.iterdir()
        if entry.is_dir() and (entry / TEMPLATE_ENTRY).exists()
    )


def load_template(
    template: str | Path = DEFAULT_TEMPLATE,
    *,
    title: str = "",
    lang: str = "en",
    code_background: str = "#2b303b",
    **extra: Any,
) -> DocumentTemplate:
    """Render a template and split it around the content placeholder."""
    root = resolve_template_root(template)
    environment = _build_environment(root)

    stylesheet_path = root / STYLESHEET_ENTRY
    try:
        stylesheet = stylesheet_path.read_text(encoding="utf-8") if stylesheet_path.exists() else ""
    except OSError as exc:
        raise TemplateError(f"Unable to read stylesheet '{stylesheet_path}': {exc}") from exc

    try:
        entry = environment.get_template(TEMPLATE_ENTRY)
    except TemplateNotFound as exc:
        raise TemplateError(f"Template entry '{TEMPLATE_ENTRY}' is missing in {root}") from exc
    except JinjaTemplateError as exc:
        raise TemplateError(f"Failed to load template '{root}': {exc}") from exc

    context = dict(extra)
    context.update(
        title=title,
        lang=lang,
        stylesheet=stylesheet,
        code_background=code_background,
        content=_CONTENT_SENTINEL,
    )
    try:
        rendered = entry.render(context)
    except JinjaTemplateError as exc:
        raise TemplateError(f"Failed to render template '{root}': {exc}") from exc

    pieces = rendered.split(_CONTENT_SENTINEL)
    if len(pieces) != 2:
        raise TemplateError(
            f"Template '{root / TEMPLATE_ENTRY}' must reference {{{{ content }}}} exactly once."
        )
    prefix, suffix = pieces
    return DocumentTemplate(prefix=prefix, suffix=suffix, root=root)


__all__ = [
    "BUILTIN_TEMPLATES_DIR",
    "DEFAULT_TEMPLATE",
    "DocumentTemplate",
    "list_builtin_templates",
    "load_template",
    "resolve_template_root",
]
