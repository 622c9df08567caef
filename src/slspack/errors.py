# src/slspack/errors.py
"""slspack exception hierarchy.

Every error raised on purpose derives from SlspackError so the CLI can map it
to an exit code and print it without a traceback.
"""

from typing import Any


class SlspackError(Exception):
    """Base exception for all slspack errors."""

    code: int = 1

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(SlspackError):
    """Missing or invalid plugin settings or build configuration."""

    code = 2


class HandlerResolutionError(SlspackError):
    """A declared function could not be mapped to a source file."""


class MissingHandlerError(HandlerResolutionError):
    """Neither handler, entrypoint nor a usable image command is defined."""


class NoHandlerFoundError(HandlerResolutionError):
    """No file on disk matches the handler path."""


class EntryPlanningError(SlspackError):
    """Entries cannot be turned into build configurations."""


class CompileError(SlspackError):
    """One or more build targets reported compiler errors."""

    def __init__(self, message: str = "", *, stats: Any = None) -> None:
        super().__init__(message)
        self.stats = stats


class WatchFatalError(SlspackError):
    """The watch mechanism failed after it was already running."""
