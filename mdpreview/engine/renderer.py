"""High-level orchestration of one Markdown render.

:class:`MarkdownRenderer` runs the pipeline stages in a fixed order:
front matter split, Markdown conversion, sanitizing, heading anchors,
highlighting, autolinking, metadata and document assembly. Each call is
independent and keeps no state, so a single renderer may be shared between
threads.

Example
-------
>>> from mdpreview.engine import MarkdownRenderer
>>> document = MarkdownRenderer().render_document("# Hello\\n\\nThis is a **preview**.")
>>> document.metadata.title
'Hello'
>>> '<h1 id="hello">Hello</h1>' in document.html
True
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote, urlsplit

from mdpreview._constants import DEFAULT_TITLE
from mdpreview.errors import (
    InvalidSourceError,
    UnreadableSourceError,
    UnsupportedEncodingError,
)
from mdpreview.models import RenderedDocument, RenderOptions

from .anchors import add_heading_anchors
from .autolinker import autolink
from .converter import convert_markdown
from .document import assemble_document
from .front_matter import split_front_matter
from .highlighter import highlight_code_blocks
from .metadata import build_metadata
from .sanitizer import sanitize_html

logger = logging.getLogger(__name__)


class MarkdownRenderer:
    """Render Markdown text or files into sanitized, self-contained HTML."""

    def render_document(
        self,
        markdown: str,
        title: str = DEFAULT_TITLE,
        options: RenderOptions | None = None,
    ) -> RenderedDocument:
        """Run the full pipeline over ``markdown``.

        Parameters
        ----------
        markdown : str
            Markdown source, optionally starting with a front matter block.
        title : str, optional
            Fallback title used when neither front matter nor an ``<h1>``
            provides one.
        options : RenderOptions, optional
            Pass toggles; fast mode is normalized here, once.

        Returns
        -------
        RenderedDocument
            The complete HTML document, its metadata and the collected
            headings (empty when outline collection is off).
        """
        effective = (options or RenderOptions()).normalized()
        body_markdown, front_matter = split_front_matter(markdown)
        raw_html = convert_markdown(body_markdown)
        sanitized = sanitize_html(raw_html)
        anchored = add_heading_anchors(
            sanitized, collect_outline=effective.toc_extraction_enabled
        )
        highlighted = highlight_code_blocks(
            anchored.html, enabled=effective.syntax_highlighting_enabled
        )
        body_html = autolink(highlighted)
        metadata = build_metadata(body_html, title, front_matter)
        html = assemble_document(body_html, metadata)
        logger.debug(
            "Rendered %d characters of Markdown into %d characters of HTML",
            len(markdown),
            len(html),
        )
        return RenderedDocument(html=html, metadata=metadata, headings=anchored.headings)

    def render(
        self,
        markdown: str,
        title: str = DEFAULT_TITLE,
        options: RenderOptions | None = None,
    ) -> str:
        """Return only the HTML produced by :meth:`render_document`."""
        return self.render_document(markdown, title, options).html

    def render_file(
        self, source: str | Path, options: RenderOptions | None = None
    ) -> RenderedDocument:
        """Read a local UTF-8 Markdown file and render it.

        Parameters
        ----------
        source : str or Path
            Filesystem path or ``file://`` URI.
        options : RenderOptions, optional
            Pass toggles forwarded to :meth:`render_document`.

        Returns
        -------
        RenderedDocument
            Rendered output titled after the file name by default.

        Raises
        ------
        InvalidSourceError
            If ``source`` names a non-local resource such as an HTTP URL.
        UnreadableSourceError
            If the file cannot be read.
        UnsupportedEncodingError
            If the file content is not valid UTF-8.
        """
        path = resolve_source_path(source)
        markdown = read_markdown(path)
        return self.render_document(markdown, title=path.name, options=options)


def resolve_source_path(source: str | Path) -> Path:
    """Return a local path for ``source``, rejecting non-file URIs.

    Only ``file:`` URIs and strings containing ``://`` are treated as URIs, so
    local names with a colon (``todo:list.md``) stay ordinary paths.
    """
    if isinstance(source, Path):
        return source.expanduser()
    parts = urlsplit(source)
    if parts.scheme.lower() == "file":
        if parts.netloc not in ("", "localhost"):
            raise InvalidSourceError(source)
        return Path(unquote(parts.path))
    if parts.scheme and "://" in source:
        raise InvalidSourceError(source)
    return Path(source).expanduser()


def read_markdown(path: Path) -> str:
    """Read ``path`` as strict UTF-8 text, mapping failures to render errors."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise UnreadableSourceError(path, exc) from exc
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise UnsupportedEncodingError(path) from exc


def render_markdown(
    markdown: str,
    title: str = DEFAULT_TITLE,
    options: RenderOptions | None = None,
) -> RenderedDocument:
    """Render ``markdown`` with a default :class:`MarkdownRenderer`."""
    return MarkdownRenderer().render_document(markdown, title, options)


__all__ = [
    "MarkdownRenderer",
    "read_markdown",
    "render_markdown",
    "resolve_source_path",
]
