# src/slspack/cleanup.py

import shutil

from .context import BuildContext
from .logs import getAppLogger


def cleanup(ctx: BuildContext) -> None:
    """Remove the build output once packaging is done, unless it is kept."""
    logger = getAppLogger()
    output_path = ctx.output_path
    if output_path is None:
        return

    keep = ctx.keep_output_directory or bool(
        ctx.settings and ctx.settings["keep_output_directory"]
    )
    if keep:
        logger.info("Keeping %s", output_path)
        return

    logger.debug("Remove %s", output_path)
    if not output_path.is_dir():
        return
    try:
        shutil.rmtree(output_path)
    except OSError as e:
        logger.error("Error occurred while removing %s: %s", output_path, e)
        return
    logger.debug("Removing %s done", output_path)
