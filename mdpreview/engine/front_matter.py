r"""Split a leading ``---`` metadata block off Markdown source.

Front matter is opt-in and must be well formed: the first line has to be
exactly ``---`` and a closing ``---`` or ``...`` line must follow. Anything
else is treated as ordinary Markdown and returned unchanged.

Example
-------
>>> from mdpreview.engine.front_matter import split_front_matter
>>> body, meta = split_front_matter("---\ntitle: Custom\n---\n# Body")
>>> body
'# Body'
>>> meta
{'title': 'Custom'}
"""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    from mdpreview.models import FrontMatter

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")
OPENING_DELIMITER = "---"
CLOSING_DELIMITERS = frozenset({"---", "..."})
QUOTE_CHARS = "\"'"


def split_front_matter(text: str) -> tuple[str, FrontMatter]:
    """Return the Markdown body and the parsed front matter mapping.

    Parameters
    ----------
    text : str
        Raw document text, possibly starting with a front matter block.

    Returns
    -------
    tuple[str, FrontMatter]
        The text following the closing delimiter (lines joined with ``\n``)
        and the parsed key/value pairs. When no well-formed block is present
        the original text is returned with an empty mapping.
    """
    lines = LINE_BREAK_PATTERN.split(text)
    if lines[0].strip() != OPENING_DELIMITER:
        return text, {}

    closing_index = next(
        (
            index
            for index in range(1, len(lines))
            if lines[index].strip() in CLOSING_DELIMITERS
        ),
        None,
    )
    if closing_index is None:
        return text, {}

    front_matter = parse_front_matter(lines[1:closing_index])
    body = "\n".join(lines[closing_index + 1 :])
    return body, front_matter


def parse_front_matter(lines: typ.Iterable[str]) -> FrontMatter:
    """Parse ``key: value`` lines into an ordered mapping with lowercase keys."""
    result: FrontMatter = {}
    current_key: str | None = None

    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if raw_line.startswith((" ", "\t")) and current_key is not None:
            existing = result.get(current_key, "")
            result[current_key] = f"{existing} {line}" if existing else line
            continue

        key, separator, value = line.partition(":")
        if not separator:
            continue
        key = key.strip().lower()
        if not key:
            continue

        result[key] = _normalize_value(value.strip())
        current_key = key

    return result


def _strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        return value[1:-1]
    return value


def _normalize_value(value: str) -> str:
    """Unquote a scalar and flatten ``[a, b]`` lists to ``a, b``."""
    value = _strip_quotes(value)
    if len(value) >= 2 and value.startswith("[") and value.endswith("]"):
        items = (item.strip().strip(QUOTE_CHARS) for item in value[1:-1].split(","))
        value = ", ".join(item for item in items if item)
    return value


__all__ = ["parse_front_matter", "split_front_matter"]
