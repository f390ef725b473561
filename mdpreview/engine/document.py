"""Wrap rendered body HTML in a complete, self-contained HTML document."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

if typ.TYPE_CHECKING:
    from mdpreview.models import RenderMetadata

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
DOCUMENT_TEMPLATE = "document.jinja"


def _environment(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def assemble_document(
    body_html: str,
    metadata: RenderMetadata,
    *,
    templates_dir: Path | None = None,
) -> str:
    """Render the document shell around ``body_html``.

    Parameters
    ----------
    body_html : str
        Final body markup; inserted verbatim.
    metadata : RenderMetadata
        Values for the title, description and keywords meta tags and the
        hidden searchable-text element. All of them are HTML-escaped.
    templates_dir : Path, optional
        Directory holding ``document.jinja``; defaults to the package
        templates.

    Returns
    -------
    str
        A ``<!doctype html>`` document with an embedded stylesheet.
    """
    env = _environment(templates_dir or TEMPLATES_DIR)
    template = env.get_template(DOCUMENT_TEMPLATE)
    return template.render(
        title=metadata.title,
        description=metadata.description,
        keywords=", ".join(metadata.keywords),
        searchable_text=metadata.searchable_text,
        body_html=body_html,
    )


__all__ = ["DOCUMENT_TEMPLATE", "TEMPLATES_DIR", "assemble_document"]
