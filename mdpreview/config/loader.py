"""Load viewer configuration YAML into typed dataclasses."""

from __future__ import annotations

import os
import shlex
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mdpreview._constants import DEFAULT_LARGE_FILE_THRESHOLD
from mdpreview.models import RenderOptions

from .models import ConfigError, ViewerConfig

CONFIG_ENV_VAR = "MDPREVIEW_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/mdpreview/config.yaml")


def default_config_path() -> Path:
    """Return the config path from ``MDPREVIEW_CONFIG`` or the user default."""
    override = os.getenv(CONFIG_ENV_VAR)
    return Path(override or DEFAULT_CONFIG_PATH).expanduser()


def load_viewer_config(path: Path | None = None) -> ViewerConfig:
    """Load the YAML configuration used by mdpreview hosts.

    Parameters
    ----------
    path : Path, optional
        Explicit configuration file. When omitted the default location is
        used and a missing file simply yields the built-in defaults.

    Returns
    -------
    ViewerConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If an explicit ``path`` does not exist.
    ConfigError
        If the YAML cannot be parsed or a value has the wrong type.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdpreview.config import load_viewer_config
    >>> config = load_viewer_config(Path("mdpreview.yaml"))  # doctest: +SKIP
    >>> config.render.fast_mode  # doctest: +SKIP
    False
    """
    if path is None:
        resolved = default_config_path()
        if not resolved.exists():
            return ViewerConfig()
    else:
        resolved = path.expanduser()
        if not resolved.exists():
            msg = f"Configuration file '{resolved}' not found."
            raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with resolved.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Configuration file '{resolved}' is not valid YAML: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    return _build_viewer_config(loaded)


def _build_viewer_config(raw: typ.Mapping[str, typ.Any]) -> ViewerConfig:
    """Build a ViewerConfig from the top-level mapping."""
    render_raw = raw.get("render") or {}
    if not isinstance(render_raw, dict):
        msg = "'render' must be a mapping."
        raise ConfigError(msg)
    base = RenderOptions()
    render = RenderOptions(
        syntax_highlighting_enabled=_bool(
            render_raw, "syntax_highlighting", base.syntax_highlighting_enabled
        ),
        toc_extraction_enabled=_bool(
            render_raw, "toc_extraction", base.toc_extraction_enabled
        ),
        fast_mode=_bool(render_raw, "fast_mode", base.fast_mode),
    )

    threshold = raw.get("large_file_threshold", DEFAULT_LARGE_FILE_THRESHOLD)
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        msg = "'large_file_threshold' must be a non-negative integer."
        raise ConfigError(msg)

    return ViewerConfig(
        render=render,
        large_file_threshold=threshold,
        viewer_command=_command(raw.get("viewer_command")),
    )


def _bool(payload: typ.Mapping[str, typ.Any], key: str, default: bool) -> bool:  # noqa: FBT001
    value = payload.get(key, default)
    if not isinstance(value, bool):
        msg = f"'render.{key}' must be true or false."
        raise ConfigError(msg)
    return value


def _command(value: object | None) -> list[str]:
    """Normalize the viewer command into an argument list."""
    match value:
        case None:
            return []
        case str() as text:
            return shlex.split(text)
        case list() as items if all(isinstance(item, str) for item in items):
            return [item for item in items if item]
        case _:
            msg = "'viewer_command' must be a string or a list of strings."
            raise ConfigError(msg)


__all__ = ["CONFIG_ENV_VAR", "default_config_path", "load_viewer_config"]
