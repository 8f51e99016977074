"""Command-line interface for pagesmith."""

from __future__ import annotations

from .app import app, convert, main


__all__ = ["app", "convert", "main"]
