"""Shared dataclasses passed between the rendering pipeline and its hosts."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import OUTLINE_MAX_LEVEL

FrontMatter: typ.TypeAlias = dict[str, str]


@dc.dataclass(frozen=True, slots=True)
class RenderOptions:
    """Toggles for the optional, comparatively expensive pipeline passes.

    Attributes
    ----------
    syntax_highlighting_enabled : bool
        Tokenize fenced code blocks into ``tok-*`` spans.
    toc_extraction_enabled : bool
        Collect the heading outline returned with the document.
    fast_mode : bool
        Disable both passes above regardless of their own values.
    """

    syntax_highlighting_enabled: bool = True
    toc_extraction_enabled: bool = True
    fast_mode: bool = False

    def normalized(self) -> RenderOptions:
        """Return the effective options, forcing optional passes off in fast mode."""
        if not self.fast_mode:
            return self
        return dc.replace(
            self, syntax_highlighting_enabled=False, toc_extraction_enabled=False
        )


@dc.dataclass(frozen=True, slots=True)
class HeadingItem:
    """A heading collected for the document outline.

    Attributes
    ----------
    level : int
        Heading level between 1 and 6.
    text : str
        Plain text of the heading with markup removed.
    anchor : str
        Value of the heading's ``id`` attribute.
    """

    level: int
    text: str
    anchor: str


@dc.dataclass(frozen=True, slots=True)
class RenderMetadata:
    """Descriptive metadata derived from front matter and the rendered body."""

    title: str
    description: str
    keywords: tuple[str, ...]
    searchable_text: str


@dc.dataclass(frozen=True, slots=True)
class RenderedDocument:
    """Terminal output of one render call."""

    html: str
    metadata: RenderMetadata
    headings: tuple[HeadingItem, ...] = ()


def outline_items(
    headings: typ.Iterable[HeadingItem], max_level: int = OUTLINE_MAX_LEVEL
) -> list[HeadingItem]:
    """Return the headings shallow enough to appear in an outline sidebar."""
    return [item for item in headings if item.level <= max_level]


__all__ = [
    "FrontMatter",
    "HeadingItem",
    "RenderMetadata",
    "RenderOptions",
    "RenderedDocument",
    "outline_items",
]
