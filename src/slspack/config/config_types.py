# src/slspack/config/config_types.py


from typing import Any, Literal, TypedDict

from typing_extensions import NotRequired


PackagerId = Literal["npm", "yarn"]

# Opaque bundler configuration. Only entry, output.path, context, target and
# stats are read or written by this package.
BuildConfig = dict[str, Any]


class PackagerOptions(TypedDict, total=False):
    noInstall: bool
    lockFile: str
    scripts: list[str]


class PluginSettings(TypedDict, total=False):
    """Raw `custom.rspack` mapping as written by the user."""

    configPath: str
    # legacy name of configPath
    rspackConfig: str
    includeModules: bool | dict[str, Any]
    packager: str
    packagerOptions: PackagerOptions
    keepOutputDirectory: bool
    config: Any
    concurrency: int | str
    # legacy: forces concurrency to 1
    serializedCompile: bool
    excludeFiles: str | list[str]
    noBuild: bool


class PluginSettingsResolved(TypedDict):
    """Canonical settings with every default applied."""

    config_path: str
    include_modules: bool | dict[str, Any]
    packager: PackagerId
    packager_options: PackagerOptions
    keep_output_directory: bool
    # inline build config override (mapping, Pending, or None)
    config: Any
    concurrency: int
    exclude_files: list[str]
    no_build: bool
    has_legacy_config: bool

    # legacy keys that were read, only present when has_legacy_config is set
    legacy_keys: NotRequired[list[str]]
