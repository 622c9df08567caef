# src/slspack/context.py
"""Per-invocation state handed from validate to compile to package."""

from dataclasses import dataclass, field
from pathlib import Path

from .config import BuildConfig, PluginSettingsResolved
from .planner import EntryFunctionBinding
from .service import ServiceDescriptor
from .types import CompileResult


@dataclass
class CommandOptions:
    """Command-line options relevant to the build pipeline."""

    function: str | None = None
    out: str | None = None
    skip_build: bool = False
    watch: bool = False
    # True → default interval, int → milliseconds
    use_polling: bool | int | None = None
    no_watch: bool = False


@dataclass
class BuildContext:
    """Everything one command invocation knows about the build.

    Written by the validate pass; read-only for compile and package.
    """

    service: ServiceDescriptor
    options: CommandOptions = field(default_factory=CommandOptions)
    settings: PluginSettingsResolved | None = None
    entries: dict[str, str] = field(default_factory=dict)
    build_configs: list[BuildConfig] = field(default_factory=list)
    bindings: list[EntryFunctionBinding] = field(default_factory=list)
    output_path: Path | None = None
    individually: bool = False
    skip_compile: bool = False
    keep_output_directory: bool = False
    compile_results: list[CompileResult] = field(default_factory=list)
