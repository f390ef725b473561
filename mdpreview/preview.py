"""Preview and search surface built from a rendered document.

File previewers and search indexers need the primary HTML plus a small plain
text attachment with the title, description and keywords. Both are taken
verbatim from a :class:`~mdpreview.models.RenderedDocument`.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import METADATA_ATTACHMENT_NAME
from .engine import MarkdownRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import RenderedDocument, RenderOptions


@dc.dataclass(frozen=True, slots=True)
class PreviewReply:
    """HTML preview plus named plain-text attachments."""

    title: str
    html: str
    attachments: dict[str, str]


def metadata_attachment(document: RenderedDocument) -> str:
    """Return the title, description and joined keywords on separate lines."""
    metadata = document.metadata
    return "\n".join(
        (metadata.title, metadata.description, ", ".join(metadata.keywords))
    )


def build_preview_reply(
    source: str | Path,
    *,
    options: RenderOptions | None = None,
    renderer: MarkdownRenderer | None = None,
) -> PreviewReply:
    """Render ``source`` and package it for a file previewer.

    Raises
    ------
    MarkdownRenderError
        Propagated from :meth:`MarkdownRenderer.render_file`.
    """
    document = (renderer or MarkdownRenderer()).render_file(source, options)
    return PreviewReply(
        title=document.metadata.title,
        html=document.html,
        attachments={METADATA_ATTACHMENT_NAME: metadata_attachment(document)},
    )


__all__ = ["PreviewReply", "build_preview_reply", "metadata_attachment"]
