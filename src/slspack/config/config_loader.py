# src/slspack/config/config_loader.py


import copy
import sys
import traceback
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from slspack.errors import ConfigurationError
from slspack.logs import getAppLogger
from slspack.utils import load_jsonc, remove_path_in_error_message

from .config_types import BuildConfig


T = TypeVar("T")

# names a python build config may export, in lookup order
PY_CONFIG_NAMES = ("config", "default")


@dataclass(frozen=True)
class Pending(Generic[T]):
    """Explicit tag for a build config that is still being produced.

    Only values wrapped in Pending are awaited. Anything else that merely
    looks awaitable is treated as a plain value.
    """

    awaitable: Awaitable[T]

    async def resolve(self) -> T:
        return await self.awaitable


def load_config_file(config_path: Path) -> Any:
    """Load a bundler configuration from a file.

    Supports:
      - Python configs: .py files exporting `config` or `default`
      - JSON/JSONC configs: .json, .jsonc files

    Returns the raw exported value; it may be a mapping, a config path
    string, or a Pending.
    """
    logger = getAppLogger()
    logger.trace(f"[load_config_file] Loading from {config_path} ({config_path.suffix})")

    if not config_path.is_file():
        xmsg = f"The rspack plugin could not find the configuration file at: {config_path}"
        raise ConfigurationError(xmsg)

    # --- Python config ---
    if config_path.suffix == ".py":
        config_globals: dict[str, Any] = {"__file__": str(config_path)}

        # Allow local imports in Python configs (e.g. from helpers import foo)
        parent_dir = str(config_path.parent)
        added_to_sys_path = parent_dir not in sys.path
        if added_to_sys_path:
            sys.path.insert(0, parent_dir)

        try:
            source = config_path.read_text(encoding="utf-8")
            exec(compile(source, str(config_path), "exec"), config_globals)  # noqa: S102
            logger.trace(f"[EXEC] globals after exec: {list(config_globals.keys())}")
        except Exception as e:
            tb = traceback.format_exc()
            logger.error("Could not load rspack config %r", str(config_path))
            xmsg = (
                f"Error while executing build config: {config_path.name}\n"
                f"{type(e).__name__}: {e}\n{tb}"
            )
            raise ConfigurationError(xmsg) from e
        finally:
            if added_to_sys_path and sys.path[0] == parent_dir:
                sys.path.pop(0)

        for key in PY_CONFIG_NAMES:
            if key in config_globals:
                return config_globals[key]

        xmsg = f"{config_path.name} did not define `config` or `default`"
        raise ConfigurationError(xmsg)

    # --- JSON / JSONC ---
    if config_path.suffix in {".json", ".jsonc"}:
        try:
            return load_jsonc(config_path)
        except ValueError as e:
            clean_msg = remove_path_in_error_message(str(e), config_path)
            xmsg = (
                f"Error while loading configuration file '{config_path.name}': "
                f"{clean_msg}"
            )
            raise ConfigurationError(xmsg) from e

    xmsg = (
        f"Unsupported build config file type {config_path.suffix!r} "
        f"({config_path.name}); use .py, .json or .jsonc"
    )
    raise ConfigurationError(xmsg)


async def resolve_build_config(source: Any, service_path: Path) -> BuildConfig:
    """Resolve a build config source to a private, mutable mapping.

    `source` is a config file path (relative to service_path), an inline
    mapping, or a Pending resolving to either. The returned dict is a deep
    copy so callers never mutate user-owned objects.
    """
    logger = getAppLogger()
    loaded_from: set[Path] = set()

    while True:
        if isinstance(source, Pending):
            logger.trace("[resolve_build_config] awaiting pending build config")
            source = await source.resolve()
            continue

        if isinstance(source, (str, Path)):
            config_path = (service_path / source).resolve()
            if config_path in loaded_from:
                xmsg = f"Build config {config_path} refers back to itself"
                raise ConfigurationError(xmsg)
            loaded_from.add(config_path)
            source = load_config_file(config_path)
            continue

        if isinstance(source, Mapping):
            return copy.deepcopy(dict(source))

        hint = ""
        if hasattr(source, "then") or hasattr(source, "__await__"):
            hint = " (wrap asynchronous configs in Pending)"
        xmsg = f"Build config must be a mapping, got {type(source).__name__}{hint}"
        raise ConfigurationError(xmsg)
