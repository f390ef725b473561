"""Best-effort removal of active content from converted HTML.

This is a denylist pass over the markup text rather than an HTML parser. Each
transformation is independent; if one pattern cannot be compiled it is
skipped and the markup flows through that step unchanged.
"""

from __future__ import annotations

import logging
import re

from .text import compile_pattern

logger = logging.getLogger(__name__)

ACTIVE_TAGS = r"script|iframe|object|embed"

SCRIPT_ELEMENT_PATTERN = compile_pattern(
    r"<script\b[^>]*>[\s\S]*?</script\s*>", re.IGNORECASE
)
EMBEDDED_ELEMENT_PATTERN = compile_pattern(
    r"<(iframe|object|embed)\b[^>]*>[\s\S]*?</\1\s*>", re.IGNORECASE
)
STRAY_TAG_PATTERN = compile_pattern(rf"</?(?:{ACTIVE_TAGS})\b[^>]*>", re.IGNORECASE)
DANGLING_OPEN_PATTERN = compile_pattern(rf"<(?=/?(?:{ACTIVE_TAGS})\b)", re.IGNORECASE)
# Quoted attribute values may contain ">".
TAG_PATTERN = compile_pattern(r"""<[A-Za-z](?:"[^"]*"|'[^']*'|[^'">])*>""")
EVENT_HANDLER_PATTERN = compile_pattern(
    r"""\son[a-z0-9_-]*\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>"']+)""", re.IGNORECASE
)
JAVASCRIPT_URI_PATTERN = compile_pattern(
    r"""\b(href|src)\s*=\s*(?:(["'])\s*javascript:.*?\2|javascript:[^\s>]*)""",
    re.IGNORECASE,
)


def sanitize_html(html: str) -> str:
    """Strip scripts, embedded objects, event handlers and ``javascript:`` URIs.

    Parameters
    ----------
    html : str
        First-pass HTML produced by the Markdown converter.

    Returns
    -------
    str
        HTML without ``<script>``, ``<iframe>``, ``<object>`` or ``<embed>``
        tags, with inline ``on*`` handlers removed and ``javascript:`` link
        targets replaced by ``#``.
    """
    sanitized = _remove(SCRIPT_ELEMENT_PATTERN, html)
    sanitized = _remove(EMBEDDED_ELEMENT_PATTERN, sanitized)
    sanitized = _remove(STRAY_TAG_PATTERN, sanitized)
    if DANGLING_OPEN_PATTERN is not None:
        sanitized = DANGLING_OPEN_PATTERN.sub("&lt;", sanitized)
    if TAG_PATTERN is not None:
        sanitized = TAG_PATTERN.sub(_clean_tag, sanitized)
    return sanitized


def _remove(pattern: re.Pattern[str] | None, html: str) -> str:
    if pattern is None:
        return html
    cleaned, count = pattern.subn("", html)
    if count:
        logger.debug("Removed %d element(s) matching %s", count, pattern.pattern)
    return cleaned


def _clean_tag(match: re.Match[str]) -> str:
    """Drop event handlers and neutralize script URIs within one start tag."""
    tag = match.group(0)
    if EVENT_HANDLER_PATTERN is not None:
        tag = EVENT_HANDLER_PATTERN.sub("", tag)
    if JAVASCRIPT_URI_PATTERN is not None:
        tag = JAVASCRIPT_URI_PATTERN.sub(_neutralize_uri, tag)
    return tag


def _neutralize_uri(match: re.Match[str]) -> str:
    attribute, quote = match.group(1), match.group(2) or '"'
    return f"{attribute}={quote}#{quote}"


__all__ = ["sanitize_html"]
