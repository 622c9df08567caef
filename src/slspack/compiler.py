# src/slspack/compiler.py
"""Contract of the bundler service this package drives.

The bundler itself (rspack, webpack, ...) lives outside this package; an
adapter only has to satisfy these protocols.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from .config import BuildConfig
from .stats import MultiStats, Stats


WatchCallback = Callable[[BaseException | None, Stats | None], None]
BeforeCompileHook = Callable[[], Awaitable[None]]


class Watching(Protocol):
    """Handle of a running watch; closing it stops further callbacks."""

    def close(self) -> None: ...


class Compiler(Protocol):
    async def compile(self, config: BuildConfig) -> Stats | MultiStats:
        """Build `config` once. Raises on infrastructure failure."""
        ...

    def watch(
        self,
        config: BuildConfig,
        options: dict[str, Any],
        callback: WatchCallback,
        *,
        before_compile: BeforeCompileHook | None = None,
    ) -> Watching:
        """Start watching; `callback` runs on the event loop after every pass.

        `before_compile` is awaited before each recompilation starts.
        """
        ...
