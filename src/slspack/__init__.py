# src/slspack/__init__.py

"""slspack: bundle serverless functions with Rspack.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use, custom integrations, or plugins.
Anything prefixed with "_" is considered internal and may change.
The `validate` and `cleanup` passes stay in their own submodules
(`slspack.validate.validate`, `slspack.cleanup.cleanup`).

Highlights:
    - main()              → CLI entrypoint
    - build_entry_map()   → Map declared functions to entry files
    - compile_all()       → Compile build configs one after another
    - WatchDriver         → Hash-gated rebuild loop
"""

from .cli import main
from .compile import (
    compile_all,
    compile_context,
    compile_one,
    get_external_module_name,
    get_external_modules,
    is_external_module,
)
from .compiler import Compiler, Watching
from .config import (
    BuildConfig,
    Pending,
    PluginSettings,
    PluginSettingsResolved,
    resolve_build_config,
    resolve_settings,
)
from .context import BuildContext, CommandOptions
from .entries import (
    EntrySpec,
    build_entry_map,
    extract_handler_file,
    resolve_entry_extension,
    resolve_entry_file,
    resolve_handler_reference,
)
from .errors import (
    CompileError,
    ConfigurationError,
    EntryPlanningError,
    HandlerResolutionError,
    MissingHandlerError,
    NoHandlerFoundError,
    SlspackError,
    WatchFatalError,
)
from .logs import getAppLogger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
)
from .offline import prepare_offline
from .package import Packager, run_package
from .planner import EntryFunctionBinding, plan_individual_packaging, plan_service_packaging
from .service import FunctionDefinition, ImageSpec, ServiceDescriptor, load_service_file
from .stats import MultiStats, Stats, normalize_stats, report
from .types import CompileResult, ExternalModule
from .watch import WatchDriver, resolve_poll_interval


__all__ = [  # noqa: RUF022
    # cli
    "main",
    # compile
    "compile_all",
    "compile_context",
    "compile_one",
    "get_external_module_name",
    "get_external_modules",
    "is_external_module",
    # compiler
    "Compiler",
    "Watching",
    # config
    "BuildConfig",
    "Pending",
    "PluginSettings",
    "PluginSettingsResolved",
    "resolve_build_config",
    "resolve_settings",
    # context
    "BuildContext",
    "CommandOptions",
    # entries
    "EntrySpec",
    "build_entry_map",
    "extract_handler_file",
    "resolve_entry_extension",
    "resolve_entry_file",
    "resolve_handler_reference",
    # errors
    "CompileError",
    "ConfigurationError",
    "EntryPlanningError",
    "HandlerResolutionError",
    "MissingHandlerError",
    "NoHandlerFoundError",
    "SlspackError",
    "WatchFatalError",
    # logs
    "getAppLogger",
    # meta
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # offline
    "prepare_offline",
    # package
    "Packager",
    "run_package",
    # planner
    "EntryFunctionBinding",
    "plan_individual_packaging",
    "plan_service_packaging",
    # service
    "FunctionDefinition",
    "ImageSpec",
    "ServiceDescriptor",
    "load_service_file",
    # stats
    "MultiStats",
    "Stats",
    "normalize_stats",
    "report",
    # types
    "CompileResult",
    "ExternalModule",
    # watch
    "WatchDriver",
    "resolve_poll_interval",
]
