"""Derive title, description, keywords and searchable text for a document.

Front matter always wins when it provides a non-blank value; otherwise the
values are read off the rendered body HTML.
"""

from __future__ import annotations

import collections
import re
import typing as typ

from mdpreview._constants import (
    DESCRIPTION_FALLBACK_LENGTH,
    KEYWORD_LIMIT,
    KEYWORD_MIN_LENGTH,
    SEARCHABLE_TEXT_LIMIT,
)
from mdpreview.models import RenderMetadata

from .text import compile_pattern, fold, plain_text

if typ.TYPE_CHECKING:
    from mdpreview.models import FrontMatter

FIRST_H1_PATTERN = compile_pattern(r"<h1(?:\s[^>]*)?>([\s\S]*?)</h1\s*>", re.IGNORECASE)
FIRST_PARAGRAPH_PATTERN = compile_pattern(
    r"<p(?:\s[^>]*)?>([\s\S]*?)</p\s*>", re.IGNORECASE
)
KEYWORD_SEPARATOR_PATTERN = compile_pattern(r"[,;]")
NON_ALPHANUMERIC_PATTERN = compile_pattern(r"[\W_]+")


def build_metadata(
    body_html: str, fallback_title: str, front_matter: FrontMatter
) -> RenderMetadata:
    """Assemble :class:`RenderMetadata` for a rendered body.

    Parameters
    ----------
    body_html : str
        Final body HTML (sanitized, anchored, highlighted and autolinked).
    fallback_title : str
        Title used when neither front matter nor an ``<h1>`` provides one,
        typically the file name.
    front_matter : FrontMatter
        Parsed front matter; may be empty.

    Returns
    -------
    RenderMetadata
        Title, description, keywords and the capped searchable text.
    """
    searchable_text = plain_text(body_html)

    title = (
        _front_matter_value(front_matter, "title")
        or _first_element_text(FIRST_H1_PATTERN, body_html)
        or fallback_title
    )
    description = (
        _front_matter_value(front_matter, "description")
        or _first_element_text(FIRST_PARAGRAPH_PATTERN, body_html)
        or searchable_text[:DESCRIPTION_FALLBACK_LENGTH]
    )
    declared = _front_matter_value(front_matter, "tags") or _front_matter_value(
        front_matter, "keywords"
    )
    keywords = (
        split_keywords(declared) if declared else extract_keywords(searchable_text)
    )

    return RenderMetadata(
        title=title,
        description=description,
        keywords=tuple(keywords),
        searchable_text=searchable_text[:SEARCHABLE_TEXT_LIMIT],
    )


def split_keywords(value: str) -> list[str]:
    """Split a ``,``/``;`` separated keyword list, dropping blanks and repeats.

    Examples
    --------
    >>> split_keywords("a, b; a ,, c")
    ['a', 'b', 'c']
    """
    pieces = (
        KEYWORD_SEPARATOR_PATTERN.split(value)
        if KEYWORD_SEPARATOR_PATTERN is not None
        else [value]
    )
    stripped = (piece.strip() for piece in pieces)
    return list(dict.fromkeys(piece for piece in stripped if piece))


def extract_keywords(
    text: str, *, limit: int = KEYWORD_LIMIT, min_length: int = KEYWORD_MIN_LENGTH
) -> list[str]:
    """Return the most frequent folded words of ``text``.

    Words shorter than ``min_length`` are ignored. Ties in frequency are broken
    by ascending lexicographic order so the result is deterministic.

    Examples
    --------
    >>> extract_keywords("beta alpha beta gamma alpha beta tiny")
    ['beta', 'alpha', 'gamma', 'tiny']
    """
    if NON_ALPHANUMERIC_PATTERN is None:
        return []
    words = NON_ALPHANUMERIC_PATTERN.split(fold(text))
    counts = collections.Counter(word for word in words if len(word) >= min_length)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [word for word, _count in ranked[:limit]]


def _front_matter_value(front_matter: FrontMatter, key: str) -> str:
    return front_matter.get(key, "").strip()


def _first_element_text(pattern: re.Pattern[str] | None, html: str) -> str:
    if pattern is None:
        return ""
    match = pattern.search(html)
    if match is None:
        return ""
    return plain_text(match.group(1))


__all__ = ["build_metadata", "extract_keywords", "split_keywords"]
