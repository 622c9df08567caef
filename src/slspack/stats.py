# src/slspack/stats.py
"""Compiler stats: the shape we consume and how it is reported."""

import re
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from .constants import ERRORS_ONLY_STATS_OPTIONS, WARNINGS_ONLY_STATS_OPTIONS
from .errors import CompileError
from .logs import getAppLogger


@runtime_checkable
class Stats(Protocol):
    """Result of one compiled target, as produced by the compiler service."""

    @property
    def hash(self) -> str | None: ...

    @property
    def output_path(self) -> str: ...

    def to_string(self, options: Any = None) -> str: ...

    def to_json(self, options: Any = None) -> dict[str, Any]: ...

    def has_errors(self) -> bool: ...


class MultiStats(Protocol):
    """Several targets built by one compiler invocation."""

    @property
    def stats(self) -> Sequence[Stats]: ...


def normalize_stats(result: Stats | MultiStats) -> list[Stats]:
    """Flatten a single or multi result into per-target stats, in order."""
    children = getattr(result, "stats", None)
    if isinstance(children, (list, tuple)):
        return list(children)
    return [result]  # type: ignore[list-item]


def _format_block(text: str, *, strip_prefix: str | None = None) -> str:
    if strip_prefix:
        text = re.sub(re.escape(strip_prefix), "", text)
    return "\n  ".join(text.strip().split("\n"))


def report(stats: Stats, display_options: Any = None) -> None:
    """Log compiler output; raise CompileError if the target failed.

    With display options the full rendering is always logged. Without them
    only warnings are shown, and nothing at all when there are none.
    """
    logger = getAppLogger()

    if display_options is not None and display_options is not False:
        output = stats.to_string(display_options)
        if output:
            logger.info("\n  %s", _format_block(output))
    else:
        warnings = stats.to_string(WARNINGS_ONLY_STATS_OPTIONS)
        if warnings:
            logger.warning("\n  %s", _format_block(warnings, strip_prefix="WARNING "))

    if not stats.has_errors():
        return

    errors = stats.to_string(ERRORS_ONLY_STATS_OPTIONS)
    message = _format_block(errors, strip_prefix="ERROR ") if errors else ""
    raise CompileError(message or "Compilation failed with errors", stats=stats)
