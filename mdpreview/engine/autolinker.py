"""Turn bare ``http(s)://`` URLs in text into links.

The markup is scanned left to right, alternating between tag spans and text
spans. Depth counters for ``code``, ``pre`` and ``a`` track whether the scanner
is inside a protected element; URLs are only linked when all three are zero.
"""

from __future__ import annotations

import re

from .text import compile_pattern

PROTECTED_TAGS = ("code", "pre", "a")
TRAILING_PUNCTUATION = ".,;:!?)]}"
URL_PATTERN = compile_pattern(r"\bhttps?://[^\s<]+", re.IGNORECASE)


def autolink(html: str) -> str:
    """Wrap bare URLs that sit outside ``<a>``, ``<code>`` and ``<pre>`` elements.

    Parameters
    ----------
    html : str
        HTML fragment after highlighting.

    Returns
    -------
    str
        The same markup with ``<a href="URL">URL</a>`` inserted around bare
        URLs. Trailing sentence punctuation stays outside the link.

    Examples
    --------
    >>> autolink("<p>Visit https://example.com.</p>")
    '<p>Visit <a href="https://example.com">https://example.com</a>.</p>'
    >>> autolink("<code>https://example.com</code>")
    '<code>https://example.com</code>'
    """
    parts: list[str] = []
    depths = dict.fromkeys(PROTECTED_TAGS, 0)
    index = 0
    length = len(html)

    while index < length:
        if html[index] == "<":
            tag_end = html.find(">", index)
            if tag_end == -1:
                parts.append(html[index:])
                break
            tag = html[index : tag_end + 1]
            parts.append(tag)
            _track_protected_depth(tag, depths)
            index = tag_end + 1
            continue

        text_end = html.find("<", index)
        if text_end == -1:
            text_end = length
        chunk = html[index:text_end]
        if any(depths.values()):
            parts.append(chunk)
        else:
            parts.append(linkify_urls(chunk))
        index = text_end

    return "".join(parts)


def linkify_urls(text: str) -> str:
    """Wrap every bare URL in ``text``, a span of markup without tags."""
    if URL_PATTERN is None:
        return text

    def _link(match: re.Match[str]) -> str:
        url, trailing = split_trailing_punctuation(match.group(0))
        if not url:
            return match.group(0)
        href = url.replace('"', "&quot;")
        return f'<a href="{href}">{url}</a>{trailing}'

    return URL_PATTERN.sub(_link, text)


def split_trailing_punctuation(candidate: str) -> tuple[str, str]:
    """Split ``candidate`` into the URL and any trailing punctuation run.

    Examples
    --------
    >>> split_trailing_punctuation("https://example.com/a).")
    ('https://example.com/a', ').')
    """
    url = candidate.rstrip(TRAILING_PUNCTUATION)
    return url, candidate[len(url) :]


def _track_protected_depth(tag: str, depths: dict[str, int]) -> None:
    """Update ``depths`` for an opening or closing protected tag."""
    core = tag[1:-1].strip()
    if not core or core.startswith(("!", "?")):
        return

    closing = core.startswith("/")
    if closing:
        core = core[1:]
    name_end = next(
        (i for i, ch in enumerate(core) if ch.isspace() or ch == "/"), len(core)
    )
    name = core[:name_end].lower()
    if name not in depths or core.endswith("/"):
        return

    if closing:
        depths[name] = max(0, depths[name] - 1)
    else:
        depths[name] += 1


__all__ = ["autolink", "linkify_urls", "split_trailing_punctuation"]
