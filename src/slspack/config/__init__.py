# src/slspack/config/__init__.py

"""Configuration handling for slspack.

Plugin settings resolution (legacy and current shapes) and bundler config
loading.
"""

from .config_loader import Pending, load_config_file, resolve_build_config
from .config_resolve import (
    default_concurrency,
    describe_settings,
    parse_concurrency,
    resolve_settings,
)
from .config_types import (
    BuildConfig,
    PackagerId,
    PackagerOptions,
    PluginSettings,
    PluginSettingsResolved,
)


__all__ = [  # noqa: RUF022
    # config_loader
    "Pending",
    "load_config_file",
    "resolve_build_config",
    # config_resolve
    "default_concurrency",
    "describe_settings",
    "parse_concurrency",
    "resolve_settings",
    # config_types
    "BuildConfig",
    "PackagerId",
    "PackagerOptions",
    "PluginSettings",
    "PluginSettingsResolved",
]
