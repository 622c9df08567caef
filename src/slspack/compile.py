# src/slspack/compile.py
"""Compile orchestrator: run build configs through the compiler service."""

import time
from collections.abc import Sequence
from pathlib import PurePath

from .compiler import Compiler
from .config import BuildConfig, PluginSettingsResolved
from .constants import EXTERNAL_MODULE_MARKER
from .context import BuildContext
from .errors import CompileError, ConfigurationError
from .logs import getAppLogger
from .stats import Stats, normalize_stats, report
from .types import CompileResult, ExternalModule
from .utils import is_builtin_module


# --------------------------------------------------------------------------- #
# externals
# --------------------------------------------------------------------------- #


def get_external_module_name(identifier: str) -> str:
    """Package name of a module identifier.

    'external @scoped/vendor/module2' → '@scoped/vendor'
    'external node-commonjs lodash'   → 'lodash'
    """
    parts = identifier.split(" ")
    if len(parts) < 2:  # noqa: PLR2004
        xmsg = f"Unable to extract module name from Rspack identifier: {identifier}"
        raise CompileError(xmsg)

    request = parts[-1].strip("\"'")
    components = request.split("/")
    main = components[0]
    if main.startswith("@") and len(components) > 1:
        return f"{main}/{components[1]}"
    return main


def is_external_module(identifier: str) -> bool:
    return identifier.startswith(EXTERNAL_MODULE_MARKER) and not is_builtin_module(
        get_external_module_name(identifier)
    )


def get_external_modules(stats: Stats) -> list[ExternalModule]:
    """Externals referenced by a target, deduplicated, in module order."""
    modules = stats.to_json({"modules": True}).get("modules") or []
    externals: dict[ExternalModule, None] = {}
    for module in modules:
        identifier = module.get("identifier", "")
        if is_external_module(identifier):
            externals[ExternalModule(external=get_external_module_name(identifier))] = None
    return list(externals)


# --------------------------------------------------------------------------- #
# compile
# --------------------------------------------------------------------------- #


def _compile_name(config: BuildConfig) -> str:
    output_path = (config.get("output") or {}).get("path") or ""
    return PurePath(str(output_path)).name


async def compile_one(compiler: Compiler, config: BuildConfig) -> list[CompileResult]:
    """Compile one config; one result per target it produced.

    Raises CompileError from the stats reporter when a target has errors.
    """
    logger = getAppLogger()
    name = _compile_name(config)
    start = time.monotonic()

    stats_list = normalize_stats(await compiler.compile(config))
    for stats in stats_list:
        report(stats, config.get("stats"))

    results = [
        CompileResult(
            output_path=stats.output_path,
            external_modules=get_external_modules(stats),
        )
        for stats in stats_list
    ]

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.info('[Rspack] Compiled function "%s" in %dms', name, elapsed_ms)
    return results


async def compile_all(
    compiler: Compiler,
    configs: Sequence[BuildConfig],
    settings: PluginSettingsResolved | None,
) -> list[CompileResult]:
    """Compile every config, one at a time, in the given order.

    Configs never build concurrently. A failing config does not stop the
    remaining ones; all failures are raised together afterwards.
    """
    logger = getAppLogger()
    if not configs:
        xmsg = "Unable to find Rspack configuration"
        raise ConfigurationError(xmsg)
    if settings is None:
        xmsg = "Missing plugin configuration"
        raise ConfigurationError(xmsg)

    logger.debug("[Rspack] Building with Rspack (%d config(s))", len(configs))

    results: list[CompileResult] = []
    errors: list[Exception] = []
    for config in configs:
        try:
            results.extend(await compile_one(compiler, config))
        except Exception as e:  # noqa: BLE001
            logger.debug("Build of %r failed: %s", _compile_name(config), e)
            errors.append(e)

    if errors:
        messages = "\n\n".join(str(e) for e in errors)
        xmsg = f"Rspack compilation failed:\n\n{messages}"
        raise CompileError(xmsg) from errors[0]

    return results


async def compile_context(ctx: BuildContext, compiler: Compiler) -> list[CompileResult]:
    """Compile the configs planned by validate and keep the results."""
    ctx.compile_results = await compile_all(compiler, ctx.build_configs, ctx.settings)
    return ctx.compile_results
