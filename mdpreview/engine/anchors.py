r"""Assign stable ``id`` anchors to headings and collect the document outline.

Headings that already carry an ``id`` keep it. Every other heading receives a
slug derived from its text, de-duplicated within the document by appending
``-2``, ``-3`` and so on.

Example
-------
>>> from mdpreview.engine.anchors import add_heading_anchors
>>> result = add_heading_anchors("<h2>Setup</h2><h2>Setup</h2>", collect_outline=True)
>>> result.html
'<h2 id="setup">Setup</h2><h2 id="setup-2">Setup</h2>'
>>> [item.anchor for item in result.headings]
['setup', 'setup-2']
"""

from __future__ import annotations

import dataclasses as dc
import re

from mdpreview._constants import FALLBACK_SLUG
from mdpreview.models import HeadingItem

from .text import compile_pattern, fold, plain_text

HEADING_PATTERN = compile_pattern(
    r"<h([1-6])([^>]*)>([\s\S]*?)</h\1\s*>", re.IGNORECASE
)
EXISTING_ID_PATTERN = compile_pattern(
    r"""(?<![\w-])id\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE
)
SLUG_SEPARATOR_PATTERN = compile_pattern(r"[^a-z0-9]+")


@dc.dataclass(slots=True)
class SlugCounter:
    """Per-document occurrence counts keyed by base slug."""

    counts: dict[str, int] = dc.field(default_factory=dict)

    def claim(self, base: str) -> str:
        """Return ``base`` on first use and ``base-N`` for the N-th repeat."""
        count = self.counts.get(base, 0) + 1
        self.counts[base] = count
        return base if count == 1 else f"{base}-{count}"


@dc.dataclass(frozen=True, slots=True)
class AnchoredHtml:
    """HTML with heading anchors applied and the headings collected on the way."""

    html: str
    headings: tuple[HeadingItem, ...]


def slugify_heading(text: str) -> str:
    """Convert heading text into a URL-fragment-safe slug.

    Examples
    --------
    >>> slugify_heading("Requisitos previos")
    'requisitos-previos'
    >>> slugify_heading("Canción del Niño")
    'cancion-del-nino'
    >>> slugify_heading("!!!")
    'section'
    """
    normalized = fold(text.strip())
    if SLUG_SEPARATOR_PATTERN is not None:
        normalized = SLUG_SEPARATOR_PATTERN.sub("-", normalized)
    slug = normalized.strip("-")
    return slug or FALLBACK_SLUG


def add_heading_anchors(
    html: str,
    *,
    collect_outline: bool,
    counter: SlugCounter | None = None,
) -> AnchoredHtml:
    """Give every ``<h1>``-``<h6>`` element an ``id`` and optionally record it.

    Parameters
    ----------
    html : str
        Sanitized HTML fragment.
    collect_outline : bool
        When ``True`` headings with non-empty text are returned in document
        order. Anchors are assigned either way so in-page links keep working.
    counter : SlugCounter, optional
        Slug accumulator for this document; a fresh one is created when
        omitted.

    Returns
    -------
    AnchoredHtml
        The rewritten HTML and the collected headings (empty when
        ``collect_outline`` is ``False``).
    """
    if HEADING_PATTERN is None:
        return AnchoredHtml(html=html, headings=())

    slugs = counter if counter is not None else SlugCounter()
    headings: list[HeadingItem] = []

    def _anchor(match: re.Match[str]) -> str:
        level, attributes, inner = match.groups()
        text = plain_text(inner, tag_replacement="")
        id_match = _find_id(attributes)
        existing = (id_match.group(1) or id_match.group(2)) if id_match else None
        if existing and existing.strip():
            anchor = existing
            replacement = match.group(0)
        else:
            if id_match is not None:
                # A blank id counts as missing and is replaced.
                attributes = (
                    attributes[: id_match.start()].rstrip() + attributes[id_match.end() :]
                )
            anchor = slugs.claim(slugify_heading(text))
            replacement = f'<h{level}{attributes} id="{anchor}">{inner}</h{level}>'
        if collect_outline and text:
            headings.append(HeadingItem(level=int(level), text=text, anchor=anchor))
        return replacement

    anchored = HEADING_PATTERN.sub(_anchor, html)
    return AnchoredHtml(html=anchored, headings=tuple(headings))


def _find_id(attributes: str) -> re.Match[str] | None:
    """Return the ``id`` attribute match on a heading's attribute string."""
    if EXISTING_ID_PATTERN is None:
        return None
    return EXISTING_ID_PATTERN.search(attributes)


__all__ = ["AnchoredHtml", "SlugCounter", "add_heading_anchors", "slugify_heading"]
