"""Configuration models used by the PDF pipeline.

PageConfig

`margin` (`int`)
: Uniform page margin in CSS pixels. Converted to inches at 96 px per inch
  before being handed to the browser.

`width` / `height` (`str`)
: Paper dimensions forwarded to the PDF capture. A `@page { size: ... }` rule
  in the template wins when `prefer_css_page_size` is enabled.

`landscape` (`bool`)
: Print in landscape orientation instead of portrait.

`print_background` (`bool`)
: Include background colours and images in the PDF.

`prefer_css_page_size` (`bool`)
: Let CSS page size declarations override `width`/`height`.

`settle_seconds` (`float`)
: Fixed delay between the end of navigation and the PDF capture, leaving time
  for web fonts and late styles to apply. `0` captures immediately.

HighlightConfig

`style` (`str`)
: Pygments style used for fenced code blocks.

PagesmithConfig

`template` (`str`)
: Built-in template name or path to a template directory.

`lang` (`str`)
: Value of the `lang` attribute on the generated `<html>` element.

`keep_html` (`bool`)
: Copy the intermediate HTML next to the PDF as `<name>.debug.html` before it
  is removed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pygments.styles import get_all_styles
import yaml

from .exceptions import ConfigError


PIXELS_PER_INCH = 96
DEFAULT_MARGIN = 50
DEFAULT_SETTLE_SECONDS = 2.0


class PageConfig(BaseModel):
    """Paper layout and capture options."""

    model_config = ConfigDict(extra="forbid")

    margin: int = Field(default=DEFAULT_MARGIN, ge=0)
    width: str = "8.5in"
    height: str = "11in"
    landscape: bool = False
    print_background: bool = True
    prefer_css_page_size: bool = True
    settle_seconds: float = Field(default=DEFAULT_SETTLE_SECONDS, ge=0)

    @property
    def margin_inches(self) -> float:
        return self.margin / PIXELS_PER_INCH


class HighlightConfig(BaseModel):
    """Syntax highlighting options."""

    model_config = ConfigDict(extra="forbid")

    style: str = "monokai"

    @field_validator("style")
    @classmethod
    def _known_style(cls, value: str) -> str:
        candidate = value.strip()
        if candidate not in set(get_all_styles()):
            raise ValueError(f"unknown Pygments style '{value}'")
        return candidate


class PagesmithConfig(BaseModel):
    """Top-level configuration for a conversion."""

    model_config = ConfigDict(extra="forbid")

    page: PageConfig = Field(default_factory=PageConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    template: str = "default"
    lang: str = "en"
    keep_html: bool = False

    def with_overrides(self, **overrides: Any) -> PagesmithConfig:
        """Return a copy with the non-``None`` overrides applied.

        Keys are either top-level fields or dotted paths such as ``page.margin``.
        """
        data = self.model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            target = data
            *parents, leaf = key.split(".")
            for parent in parents:
                target = target[parent]
            target[leaf] = value
        try:
            return PagesmithConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration override: {exc}") from exc


def load_config(path: Path | str | None = None) -> PagesmithConfig:
    """Load a YAML configuration file, returning defaults when ``path`` is ``None``."""
    if path is None:
        return PagesmithConfig()

    config_path = Path(path)
    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}", path=config_path) from exc

    try:
        payload = yaml.safe_load(raw_text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}", path=config_path) from exc

    if not isinstance(payload, dict):
        raise ConfigError("Configuration file must contain a mapping.", path=config_path)

    try:
        return PagesmithConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}", path=config_path) from exc


__all__ = [
    "DEFAULT_MARGIN",
    "DEFAULT_SETTLE_SECONDS",
    "PIXELS_PER_INCH",
    "HighlightConfig",
    "PageConfig",
    "PagesmithConfig",
    "load_config",
]
