# tests/utils/service.py
"""Builders for service descriptors and handler files on disk."""

from pathlib import Path
from typing import Any

import slspack.service as mod_service


def touch(root: Path, *paths: str) -> None:
    """Create empty files (and their parents) below root."""
    for rel in paths:
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("// handler\n")


def make_service(
    root: Path,
    functions: dict[str, dict[str, Any]] | None = None,
    *,
    provider: dict[str, Any] | None = None,
    individually: bool = False,
    custom: dict[str, Any] | None = None,
) -> mod_service.ServiceDescriptor:
    raw: dict[str, Any] = {
        "functions": functions or {},
        "provider": provider or {"name": "aws", "runtime": "nodejs18.x"},
        "package": {"individually": individually},
        "custom": custom or {},
    }
    return mod_service.ServiceDescriptor.from_dict(raw, root)


def make_build_config(output_path: str | Path = "out", **extra: Any) -> dict[str, Any]:
    config: dict[str, Any] = {"output": {"path": output_path}}
    config.update(extra)
    return config
