# src/slspack/validate.py
"""The validate pass: settings, entries, build config and packaging plan."""

import shutil
from pathlib import Path
from typing import Any

from .config import (
    BuildConfig,
    describe_settings,
    resolve_build_config,
    resolve_settings,
)
from .constants import DEFAULT_OUTPUT, DEFAULT_OUTPUT_DIR, DEFAULT_TARGET
from .context import BuildContext, CommandOptions
from .entries import build_entry_map
from .errors import ConfigurationError
from .logs import getAppLogger
from .planner import plan_individual_packaging, plan_service_packaging
from .service import ServiceDescriptor


def apply_build_defaults(config: BuildConfig, service_path: Path) -> BuildConfig:
    """Fill in context, target and output when the user left them out."""
    if not config.get("context"):
        config["context"] = str(service_path)
    if not config.get("target"):
        config["target"] = DEFAULT_TARGET
    if not config.get("output"):
        config["output"] = {
            "libraryTarget": DEFAULT_OUTPUT["libraryTarget"],
            "path": str(service_path / DEFAULT_OUTPUT_DIR),
            "filename": DEFAULT_OUTPUT["filename"],
        }
    return config


def remove_output_directory(output_path: Path) -> None:
    logger = getAppLogger()
    logger.debug("Removing %s", output_path)
    shutil.rmtree(output_path, ignore_errors=True)


async def validate(
    service: ServiceDescriptor,
    options: CommandOptions | None = None,
) -> BuildContext:
    """Prepare everything compile and package need.

    Resolves the plugin settings, maps functions to entries, loads the build
    config and turns it into one config (service packaging) or one per
    function (individual packaging).
    """
    logger = getAppLogger()
    options = options or CommandOptions()
    service_path = service.service_path

    # settings (includeModules vs noInstall is checked while resolving)
    settings = resolve_settings(service.custom)
    logger.debug("Using configuration:\n%s", describe_settings(settings))
    if settings["has_legacy_config"]:
        logger.warning(
            'Legacy configuration detected. Consider to use "custom.rspack" '
            "as object (see README)."
        )
        logger.debug("Legacy keys: %s", ", ".join(settings.get("legacy_keys", [])))

    # entries; resolved before the build config is loaded
    entries = build_entry_map(
        service,
        function_name=options.function,
        exclude_files=settings["exclude_files"] or None,
    )

    # build config
    source: Any = settings["config"]
    if source is None:
        source = settings["config_path"]
    config = await resolve_build_config(source, service_path)
    apply_build_defaults(config, service_path)

    if options.out:
        config["output"]["path"] = str(service_path / options.out)

    if not config["output"].get("path"):
        xmsg = "Rspack config sets output but no output.path"
        raise ConfigurationError(xmsg)

    output_path = Path(config["output"]["path"])
    keep_output = settings["keep_output_directory"]

    skip_compile = settings["no_build"] or options.skip_build
    if skip_compile:
        logger.info("Skipping build and using existing compiled output")
        if not output_path.exists():
            xmsg = "No compiled output found"
            raise ConfigurationError(xmsg)
        keep_output = True

    if not keep_output:
        remove_output_directory(output_path)

    ctx = BuildContext(
        service=service,
        options=options,
        settings=settings,
        entries=entries,
        output_path=output_path,
        individually=service.package_individually,
        skip_compile=skip_compile,
        keep_output_directory=keep_output,
    )

    if service.package_individually:
        logger.debug(
            "Individually packaging with concurrency at %d entries a time.",
            settings["concurrency"],
        )
        ctx.build_configs, ctx.bindings = plan_individual_packaging(
            entries, service, config
        )
    else:
        ctx.build_configs = [plan_service_packaging(entries, config)]

    logger.trace(f"[validate] planned {len(ctx.build_configs)} build config(s)")
    return ctx
