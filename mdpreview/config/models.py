"""Typed dataclasses describing mdpreview host configuration."""

from __future__ import annotations

import dataclasses as dc

from mdpreview._constants import DEFAULT_LARGE_FILE_THRESHOLD
from mdpreview.models import RenderOptions


class ConfigError(ValueError):
    """Raised when the configuration file is invalid or incomplete."""


@dc.dataclass(slots=True)
class ViewerConfig:
    """Settings shared by the CLI and other hosts of the renderer.

    Attributes
    ----------
    render : RenderOptions
        Default pass toggles applied to every render.
    large_file_threshold : int
        Input size in bytes above which hosts switch to fast mode; ``0``
        disables the check.
    viewer_command : list[str]
        Command used to open rendered HTML; the file path is appended. An
        empty list means the system web browser.
    """

    render: RenderOptions = dc.field(default_factory=RenderOptions)
    large_file_threshold: int = DEFAULT_LARGE_FILE_THRESHOLD
    viewer_command: list[str] = dc.field(default_factory=list)

    def options_for_size(self, size: int, *, fast: bool = False) -> RenderOptions:
        """Return render options for an input of ``size`` bytes."""
        over_threshold = 0 < self.large_file_threshold < size
        if fast or over_threshold:
            return dc.replace(self.render, fast_mode=True)
        return self.render


__all__ = ["ConfigError", "ViewerConfig"]
