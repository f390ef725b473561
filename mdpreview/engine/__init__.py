"""Markdown rendering pipeline stages and the renderer that chains them."""

from .anchors import AnchoredHtml, SlugCounter, add_heading_anchors, slugify_heading
from .autolinker import autolink
from .converter import convert_markdown
from .document import assemble_document
from .front_matter import split_front_matter
from .highlighter import highlight_code, highlight_code_blocks
from .metadata import build_metadata, extract_keywords
from .renderer import MarkdownRenderer, render_markdown
from .sanitizer import sanitize_html

__all__ = [
    "AnchoredHtml",
    "MarkdownRenderer",
    "SlugCounter",
    "add_heading_anchors",
    "assemble_document",
    "autolink",
    "build_metadata",
    "convert_markdown",
    "extract_keywords",
    "highlight_code",
    "highlight_code_blocks",
    "render_markdown",
    "sanitize_html",
    "slugify_heading",
    "split_front_matter",
]
