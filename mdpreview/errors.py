"""Exceptions surfaced to callers of the rendering engine and its hosts."""

from __future__ import annotations

from pathlib import Path


class MarkdownRenderError(Exception):
    """Base class for failures that abort a single render call."""


class InvalidSourceError(MarkdownRenderError):
    """Raised when the source is not a local file (for example an HTTP URL)."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"The path {source} is not a local file.")


class UnreadableSourceError(MarkdownRenderError):
    """Raised when the source file cannot be read from disk."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Failed to read {path.name}: {reason}")


class UnsupportedEncodingError(MarkdownRenderError):
    """Raised when the source bytes are not valid UTF-8."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"The file {path.name} is not valid UTF-8 text.")


class ViewerLaunchError(RuntimeError):
    """Raised by the CLI when the external viewer cannot be started."""


__all__ = [
    "InvalidSourceError",
    "MarkdownRenderError",
    "UnreadableSourceError",
    "UnsupportedEncodingError",
    "ViewerLaunchError",
]
