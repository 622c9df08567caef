# src/slspack/types.py

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExternalModule:
    """A dependency left out of the bundle and required at runtime."""

    external: str
    # reserved for per-entry attribution; always None for now
    origin: str | None = None


@dataclass
class CompileResult:
    """Output of one compiled target."""

    output_path: str
    external_modules: list[ExternalModule] = field(default_factory=list)
