# src/slspack/offline.py
"""Settings for running the service under a local offline emulator."""

import dataclasses
import os

from .constants import SERVICE_OUTPUT_SEGMENT
from .context import BuildContext, CommandOptions
from .errors import ConfigurationError
from .service import ServiceDescriptor
from .validate import validate


OFFLINE_PLUGIN_KEY = "serverless-offline"


async def prepare_offline(
    service: ServiceDescriptor,
    options: CommandOptions | None = None,
    *,
    location: str | None = None,
) -> BuildContext:
    """Validate for a local run and point the emulator at the service build.

    Local runs always use service packaging. The emulator's `location` is
    set to the build output, relative to the service, unless the user chose
    one (`location` argument or `custom.serverless-offline.location`).
    """
    service = dataclasses.replace(service, package_individually=False)
    ctx = await validate(service, options)

    offline = service.custom.setdefault(OFFLINE_PLUGIN_KEY, {})
    if not location and not offline.get("location"):
        if ctx.output_path is None:
            xmsg = "Validate planned no output path for the offline location"
            raise ConfigurationError(xmsg)
        offline["location"] = os.path.relpath(
            ctx.output_path / SERVICE_OUTPUT_SEGMENT, service.service_path
        )
    return ctx
