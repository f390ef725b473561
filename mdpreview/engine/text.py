"""Plain-text helpers shared by the HTML rewriting passes."""

from __future__ import annotations

import html
import logging
import re
import unicodedata

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str, flags: int = 0) -> re.Pattern[str] | None:
    """Compile ``pattern``, returning ``None`` instead of raising on bad syntax.

    Every rewriting pass checks for ``None`` and leaves its input untouched, so
    a broken pattern disables one transformation rather than the whole render.
    """
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        logger.warning("Skipping pattern %r: %s", pattern, exc)
        return None


TAG_PATTERN = compile_pattern(r"<[^>]+>")
WHITESPACE_PATTERN = compile_pattern(r"\s+")


def strip_tags(markup: str, replacement: str = " ") -> str:
    """Replace every tag in ``markup`` with ``replacement``."""
    if TAG_PATTERN is None:
        return markup
    return TAG_PATTERN.sub(replacement, markup)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs into single spaces and trim the ends."""
    if WHITESPACE_PATTERN is None:
        return text.strip()
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def plain_text(markup: str, tag_replacement: str = " ") -> str:
    """Return the whitespace-normalized, entity-decoded text of ``markup``."""
    return collapse_whitespace(html.unescape(strip_tags(markup, tag_replacement)))


def fold(text: str) -> str:
    """Fold case, diacritics and compatibility width variants for matching.

    Examples
    --------
    >>> fold("Canción ＡＢＣ")
    'cancion abc'
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


__all__ = [
    "collapse_whitespace",
    "compile_pattern",
    "fold",
    "plain_text",
    "strip_tags",
]
