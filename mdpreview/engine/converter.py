"""First-pass Markdown to HTML conversion via Python-Markdown."""

from __future__ import annotations

import re

from markdown import Markdown

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")


def convert_markdown(text: str) -> str:
    """Render Markdown into unsanitized HTML.

    Fenced code blocks keep their language as a ``language-X`` class on the
    ``<code>`` element so the highlighter can pick them up later. A fresh
    ``Markdown`` instance is built for every call because instances carry
    per-document state.

    Parameters
    ----------
    text : str
        Markdown body with any front matter already removed.

    Returns
    -------
    str
        HTML fragment; empty when ``text`` holds only whitespace.
    """
    normalized = _normalize_fenced_blocks(text)
    if not normalized.strip():
        return ""
    md = Markdown(extensions=list(MARKDOWN_EXTENSIONS), output_format="html")
    return md.convert(normalized)


def _normalize_fenced_blocks(text: str) -> str:
    """Prepare fences so ``fenced_code`` emits a usable ``language-X`` class.

    Fences indented by up to three spaces (typically inside list items) are
    moved to column zero, and info strings such as ``rust,no_run`` keep only
    the language before the comma.
    """
    dedented = FENCED_INDENT_PATTERN.sub(r"\1", text)
    return FENCE_LABEL_PATTERN.sub(
        lambda match: match.group(1) + (match.group(2) or ""), dedented
    )


__all__ = ["MARKDOWN_EXTENSIONS", "convert_markdown"]
