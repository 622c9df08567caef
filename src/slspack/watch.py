# src/slspack/watch.py
"""Watch driver: rebuild when the compiled output actually changes.

The compiler service runs its own watch loop and calls back after every
pass. A pass only counts as a change when the stats hash differs from the
last one seen (comment-only edits keep the hash). Follow-up rebuilds are
coalesced: while one is in flight, further changes start nothing, and the
compiler's next pass waits for it through the before_compile hook.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from .compiler import Compiler, Watching
from .config import BuildConfig
from .constants import DEFAULT_POLL_INTERVAL_MS
from .errors import SlspackError, WatchFatalError
from .logs import getAppLogger
from .stats import Stats, report


RebuildHook = Callable[[], Awaitable[Any]]


def resolve_poll_interval(use_polling: bool | int | None) -> int | None:
    """Polling interval in ms, or None when polling is off.

    `True` selects the default interval; an int is taken as milliseconds.
    """
    if use_polling is None or use_polling is False:
        return None
    if use_polling is True:
        return DEFAULT_POLL_INTERVAL_MS
    if isinstance(use_polling, int) and use_polling > 0:
        return use_polling
    return DEFAULT_POLL_INTERVAL_MS


class WatchDriver:
    """Run `compiler.watch` for one build config until stopped."""

    def __init__(
        self,
        compiler: Compiler,
        config: BuildConfig,
        *,
        on_rebuild: RebuildHook | None = None,
        poll: bool | int | None = None,
    ) -> None:
        self.compiler = compiler
        self.config = config
        self.on_rebuild = on_rebuild
        self.poll_interval = resolve_poll_interval(poll)

        self.last_hash: str | None = None
        self.first_run = True
        self.fatal_error: BaseException | None = None

        self._rebuild: asyncio.Task[Any] | None = None
        self._watching: Watching | None = None
        self._ready: asyncio.Future[None] | None = None
        self._stopped: asyncio.Event | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    # --- public API ---------------------------------------------------------

    @property
    def watch_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self.poll_interval is not None:
            options["poll"] = self.poll_interval
        return options

    @property
    def rebuild_in_flight(self) -> bool:
        return self._rebuild is not None and not self._rebuild.done()

    async def start(self) -> None:
        """Start watching and wait for the initial build to finish.

        Raises whatever error the compiler reported for the initial build.
        """
        logger = getAppLogger()
        self._loop = asyncio.get_running_loop()
        self._ready = self._loop.create_future()
        self._stopped = asyncio.Event()

        if self.poll_interval is not None:
            logger.info("Enabled polling (%d ms)", self.poll_interval)
        logger.debug("[Rspack] Building with Rspack")

        self._watching = self.compiler.watch(
            self.config,
            self.watch_options,
            self._on_result,
            before_compile=self._before_compile,
        )
        try:
            await self._ready
        except BaseException:
            self.stop()
            raise

    def stop(self) -> None:
        """Close the compiler's watch and release wait_stopped()."""
        if self._watching is not None:
            self._watching.close()
            self._watching = None
        if self._stopped is not None:
            self._stopped.set()

    async def wait_stopped(self) -> None:
        """Block until stop() is called.

        Raises WatchFatalError when the watch ended because of a failure.
        """
        if self._stopped is None:
            xmsg = "WatchDriver.wait_stopped() called before start()"
            raise RuntimeError(xmsg)
        await self._stopped.wait()
        if self.fatal_error is not None:
            if isinstance(self.fatal_error, WatchFatalError):
                raise self.fatal_error
            xmsg = f"Watch failed: {self.fatal_error}"
            raise WatchFatalError(xmsg) from self.fatal_error

    # --- compiler callbacks -------------------------------------------------

    def _fail(self, error: BaseException) -> None:
        self.fatal_error = error
        self.stop()

    def _on_result(self, err: BaseException | None, stats: Stats | None) -> None:
        logger = getAppLogger()

        if err is not None:
            if self.first_run:
                self.first_run = False
                self._resolve_ready(err)
                return
            xmsg = f"Watch failed after the initial build: {err}"
            fatal = WatchFatalError(xmsg)
            fatal.__cause__ = err
            self._fail(fatal)
            raise fatal

        new_hash = stats.hash if stats is not None else None
        logger.debug("Rspack watch invoke: HASH NEW=%s CUR=%s", new_hash, self.last_hash)

        # unchanged hash: no effective code change
        if stats is not None and new_hash == self.last_hash:
            if self.first_run:
                self.first_run = False
                self._resolve_ready()
            return

        if stats is not None:
            self.last_hash = new_hash
            try:
                report(stats, self.config.get("stats"))
            except SlspackError as e:
                logger.error(e.message)

        if self.first_run:
            self.first_run = False
            logger.debug("[Rspack] Watch service...")
            self._resolve_ready()
        elif self.on_rebuild is not None and self._rebuild is None:
            logger.info("Sources changed.")
            self._start_rebuild()

    async def _before_compile(self) -> None:
        task = self._rebuild
        if task is None:
            return
        try:
            await task
        except Exception as e:
            xmsg = f"Rebuild failed: {e}"
            fatal = WatchFatalError(xmsg)
            self._fail(fatal)
            raise fatal from e
        self._rebuild = None

    # --- internals ----------------------------------------------------------

    def _resolve_ready(self, err: BaseException | None = None) -> None:
        if self._ready is None or self._ready.done():
            return
        if err is None:
            self._ready.set_result(None)
        else:
            self._ready.set_exception(err)

    def _start_rebuild(self) -> None:
        if self._loop is None or self.on_rebuild is None:
            xmsg = "Cannot start a rebuild: watch not started or no rebuild hook"
            raise RuntimeError(xmsg)
        task = self._loop.create_task(self.on_rebuild())
        task.add_done_callback(self._log_rebuild_failure)
        self._rebuild = task

    @staticmethod
    def _log_rebuild_failure(task: "asyncio.Task[Any]") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            getAppLogger().error("Rebuild failed: %s", error)
