# src/slspack/package.py
"""Packaging phases run after compile.

Installing dependencies and zipping artifacts belong to a packager service
outside this package; here we only sequence its phases.
"""

from typing import Protocol

from .context import BuildContext
from .logs import getAppLogger
from .types import ExternalModule


PACKAGE_PHASES: tuple[str, ...] = (
    "packExternalModules",
    "packageModules",
    "copyExistingArtifacts",
)


class Packager(Protocol):
    async def pack_external_modules(self, ctx: BuildContext) -> None: ...

    async def package_modules(self, ctx: BuildContext) -> None: ...

    async def copy_existing_artifacts(self, ctx: BuildContext) -> None: ...


def collect_external_modules(ctx: BuildContext) -> list[ExternalModule]:
    """Externals of every compiled target, deduplicated, in compile order."""
    seen: dict[ExternalModule, None] = {}
    for result in ctx.compile_results:
        for module in result.external_modules:
            seen[module] = None
    return list(seen)


async def run_package(ctx: BuildContext, packager: Packager | None = None) -> None:
    logger = getAppLogger()

    externals = collect_external_modules(ctx)
    if externals:
        logger.debug(
            "External modules: %s", ", ".join(m.external for m in externals)
        )

    if packager is None:
        for phase in PACKAGE_PHASES:
            logger.warning("No packager configured, skipping %s", phase)
        return

    await packager.pack_external_modules(ctx)
    await packager.package_modules(ctx)
    await packager.copy_existing_artifacts(ctx)
