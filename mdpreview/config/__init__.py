"""Load and validate mdpreview host configuration.

This subpackage parses an optional YAML file (``~/.config/mdpreview/config.yaml``
by default, or the path in ``MDPREVIEW_CONFIG``) into a :class:`ViewerConfig`
holding default render options, the large-file threshold used to switch to
fast mode, and the viewer command the CLI hands rendered HTML to.

Examples
--------
>>> from mdpreview.config import ViewerConfig
>>> ViewerConfig().options_for_size(10_000_000).fast_mode
True
"""

from .loader import CONFIG_ENV_VAR, default_config_path, load_viewer_config
from .models import ConfigError, ViewerConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigError",
    "ViewerConfig",
    "default_config_path",
    "load_viewer_config",
]
