"""Render Markdown into sanitized, self-contained HTML with metadata.

This package exposes the rendering engine used by the ``md-viewer`` CLI and by
preview hosts, together with the CLI entry points.

Exports
-------
- ``MarkdownRenderer``: pipeline entry point for text and files.
- ``RenderOptions``: pass toggles, including fast mode.
- ``app``: Cyclopts application for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdpreview import MarkdownRenderer, RenderOptions
>>> document = MarkdownRenderer().render_document(
...     "# Notes", options=RenderOptions(fast_mode=True)
... )
>>> document.metadata.title
'Notes'
>>> document.headings
()
"""

from __future__ import annotations

from .cli import app, main
from .engine import MarkdownRenderer, render_markdown
from .errors import (
    InvalidSourceError,
    MarkdownRenderError,
    UnreadableSourceError,
    UnsupportedEncodingError,
)
from .models import HeadingItem, RenderedDocument, RenderMetadata, RenderOptions

__all__ = [
    "HeadingItem",
    "InvalidSourceError",
    "MarkdownRenderError",
    "MarkdownRenderer",
    "RenderMetadata",
    "RenderOptions",
    "RenderedDocument",
    "UnreadableSourceError",
    "UnsupportedEncodingError",
    "app",
    "main",
    "render_markdown",
]
