# src/slspack/planner.py
"""Packaging planner: one build config per service, or one per function."""

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import BuildConfig
from .constants import SERVICE_OUTPUT_SEGMENT
from .entries import EntrySpec, extract_handler_file, resolve_handler_reference
from .errors import EntryPlanningError
from .logs import getAppLogger
from .service import FunctionDefinition, ServiceDescriptor
from .utils import camel_case, strip_extension


@dataclass(frozen=True)
class EntryFunctionBinding:
    """Links an entry to the function it was resolved from.

    Placeholder bindings (an entry no function points at) carry only the
    entry; they keep bindings and configs aligned one to one.
    """

    entry: EntrySpec
    handler_file: str | None = None
    function_name: str | None = None
    function_def: FunctionDefinition | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.function_name is None

    @property
    def compile_name(self) -> str:
        """Output directory name for this binding's build."""
        return self.function_name or camel_case(self.entry.key)


def _join_output(output_path: Any, segment: str) -> Any:
    joined = Path(output_path) / segment
    return joined if isinstance(output_path, Path) else str(joined)


def _output_path(config: BuildConfig) -> Any:
    output = config.get("output")
    if not isinstance(output, dict) or not output.get("path"):
        xmsg = "Build config has no output.path to derive build directories from"
        raise EntryPlanningError(xmsg)
    return output["path"]


def plan_service_packaging(entries: dict[str, str], base_config: BuildConfig) -> BuildConfig:
    """Single build of every entry into `<output.path>/service`.

    An entry the user set explicitly is kept as is.
    """
    logger = getAppLogger()
    config = copy.deepcopy(base_config)
    output_path = _output_path(config)
    if config.get("entry"):
        logger.debug("Keeping the explicitly configured entry for service packaging")
    else:
        config["entry"] = dict(entries)
    config["output"]["path"] = _join_output(output_path, SERVICE_OUTPUT_SEGMENT)
    return config


def _handler_files(service: ServiceDescriptor) -> list[tuple[str, FunctionDefinition]]:
    """(handler file, function) for every bundled function, in declaration order."""
    result: list[tuple[str, FunctionDefinition]] = []
    for func in service.bundled_functions():
        handler_file = extract_handler_file(resolve_handler_reference(func))
        if handler_file is not None:
            result.append((handler_file, func))
    return result


def bind_entries(
    entries: dict[str, str],
    service: ServiceDescriptor,
) -> list[EntryFunctionBinding]:
    """Fan each entry out to every function whose handler file it is."""
    handler_files = _handler_files(service)
    bindings: list[EntryFunctionBinding] = []
    for key, value in entries.items():
        entry = EntrySpec(key=key, source_path=value)
        entry_file = strip_extension(value)
        matches = [
            EntryFunctionBinding(
                entry=entry,
                handler_file=handler_file,
                function_name=func.name,
                function_def=func,
            )
            for handler_file, func in handler_files
            if handler_file == entry_file
        ]
        bindings.extend(matches or [EntryFunctionBinding(entry=entry)])
    return bindings


def plan_individual_packaging(
    entries: dict[str, str],
    service: ServiceDescriptor,
    base_config: BuildConfig,
) -> tuple[list[BuildConfig], list[EntryFunctionBinding]]:
    """One isolated build config per entry-function binding.

    Every config is a deep copy of `base_config` narrowed to a single entry
    and writing to `<output.path>/<function name or camelCased entry key>`.
    """
    logger = getAppLogger()
    explicit_entry = base_config.get("entry")
    if explicit_entry and explicit_entry != entries:
        xmsg = (
            "Rspack entry must be automatically resolved when package.individually "
            "is set to true. In the build config, remove the entry declaration."
        )
        raise EntryPlanningError(xmsg)

    output_path = _output_path(base_config)
    bindings = bind_entries(entries, service)

    configs: list[BuildConfig] = []
    seen: dict[str, str] = {}
    for binding in bindings:
        name = binding.compile_name
        if name in seen:
            xmsg = (
                f"Output directory {name!r} would be shared by entries "
                f"{seen[name]!r} and {binding.entry.key!r}"
            )
            raise EntryPlanningError(xmsg)
        seen[name] = binding.entry.key

        config = copy.deepcopy(base_config)
        config["entry"] = {binding.entry.key: binding.entry.source_path}
        config["output"]["path"] = _join_output(output_path, name)
        configs.append(config)
        logger.trace(f"[plan] {binding.entry.key} → {config['output']['path']}")

    return configs, bindings
