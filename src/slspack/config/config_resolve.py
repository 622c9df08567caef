# src/slspack/config/config_resolve.py


import json
import os
from collections.abc import Mapping
from typing import Any, cast

from slspack.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_INCLUDE_MODULES,
    DEFAULT_KEEP_OUTPUT_DIRECTORY,
    DEFAULT_PACKAGER,
    LEGACY_INCLUDE_MODULES_KEY,
    SUPPORTED_PACKAGERS,
)
from slspack.errors import ConfigurationError
from slspack.logs import getAppLogger
from slspack.meta import PROGRAM_CONFIG

from .config_types import PackagerId, PackagerOptions, PluginSettings, PluginSettingsResolved


# --------------------------------------------------------------------------- #
# helpers
# --------------------------------------------------------------------------- #


def default_concurrency() -> int:
    return os.cpu_count() or 1


def parse_concurrency(value: Any) -> int:
    """Accept a positive int or a numeric string.

    Raises:
        ConfigurationError: for anything else, including 0 and negatives.
    """
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        parsed = int(value.strip())
    else:
        parsed = None

    if parsed is None or parsed < 1:
        xmsg = (
            f"concurrency must be a positive integer, got {value!r} "
            f"({type(value).__name__})"
        )
        raise ConfigurationError(xmsg)
    return parsed


def _normalize_exclude_files(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return cast("list[str]", value)
    xmsg = f"excludeFiles must be a glob string or a list of globs, got {value!r}"
    raise ConfigurationError(xmsg)


def _split_settings(custom: Mapping[str, Any]) -> tuple[PluginSettings, list[str]]:
    """Return the raw settings mapping and the legacy keys that were read.

    Legacy shapes: `custom.rspack` as a plain string (the config path) and the
    top-level `custom.rspackIncludeModules`. The object shape always wins.
    """
    raw: Any = custom.get(PROGRAM_CONFIG)
    legacy_keys: list[str] = []
    settings: dict[str, Any] = {}

    if LEGACY_INCLUDE_MODULES_KEY in custom:
        legacy_keys.append(LEGACY_INCLUDE_MODULES_KEY)
        settings["includeModules"] = custom[LEGACY_INCLUDE_MODULES_KEY]

    if isinstance(raw, str):
        legacy_keys.append(PROGRAM_CONFIG)
        settings["configPath"] = raw
    elif isinstance(raw, Mapping):
        settings.update(raw)
    elif raw is not None:
        xmsg = (
            f"custom.{PROGRAM_CONFIG} must be a mapping or a config file path, "
            f"got {type(raw).__name__}"
        )
        raise ConfigurationError(xmsg)

    return cast("PluginSettings", settings), legacy_keys


# --------------------------------------------------------------------------- #
# main resolver
# --------------------------------------------------------------------------- #


def resolve_settings(custom: Mapping[str, Any] | None = None) -> PluginSettingsResolved:
    """Normalize the service's `custom` block into resolved plugin settings."""
    logger = getAppLogger()
    settings, legacy_keys = _split_settings(custom or {})
    logger.trace(f"[resolve_settings] raw keys: {sorted(settings)}")

    config_path = settings.get("configPath") or settings.get(
        "rspackConfig", DEFAULT_CONFIG_PATH
    )
    if not isinstance(config_path, str):
        xmsg = f"configPath must be a string, got {type(config_path).__name__}"
        raise ConfigurationError(xmsg)

    packager = settings.get("packager", DEFAULT_PACKAGER)
    if packager not in SUPPORTED_PACKAGERS:
        xmsg = (
            f"Could not find packager '{packager}' "
            f"(supported: {', '.join(SUPPORTED_PACKAGERS)})"
        )
        raise ConfigurationError(xmsg)

    packager_options = settings.get("packagerOptions") or {}
    if not isinstance(packager_options, Mapping):
        xmsg = "packagerOptions must be a mapping"
        raise ConfigurationError(xmsg)

    if settings.get("serializedCompile"):
        concurrency = 1
    elif "concurrency" in settings:
        concurrency = parse_concurrency(settings["concurrency"])
    else:
        concurrency = default_concurrency()

    include_modules = settings.get("includeModules", DEFAULT_INCLUDE_MODULES)
    if include_modules and packager_options.get("noInstall"):
        xmsg = (
            '"includeModules" requires an installation, and cannot be used with '
            '"packagerOptions.noInstall".'
        )
        raise ConfigurationError(xmsg)

    resolved: PluginSettingsResolved = {
        "config_path": config_path,
        "include_modules": include_modules,
        "packager": cast("PackagerId", packager),
        "packager_options": cast("PackagerOptions", dict(packager_options)),
        "keep_output_directory": bool(
            settings.get("keepOutputDirectory", DEFAULT_KEEP_OUTPUT_DIRECTORY)
        ),
        "config": settings.get("config"),
        "concurrency": concurrency,
        "exclude_files": _normalize_exclude_files(settings.get("excludeFiles")),
        "no_build": settings.get("noBuild") is True,
        "has_legacy_config": bool(legacy_keys),
    }
    if legacy_keys:
        resolved["legacy_keys"] = legacy_keys
    return resolved


def describe_settings(settings: PluginSettingsResolved) -> str:
    """Render settings for verbose logging (inline config shown by type only)."""
    printable = dict(settings)
    if printable.get("config") is not None:
        printable["config"] = f"<{type(printable['config']).__name__}>"
    return json.dumps(printable, indent=2, default=str)
