"""Resume Analyzer CLI app package."""

from __future__ import annotations

from .app import build_parser, main, render_record

__all__ = ["build_parser", "main", "render_record"]
