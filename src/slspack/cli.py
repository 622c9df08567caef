# src/slspack/cli.py

import argparse
import asyncio
import importlib
import logging
import platform
import sys
from difflib import get_close_matches
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from apathetic_logging import safeLog

from .cleanup import cleanup
from .compile import compile_all, compile_context
from .compiler import Compiler
from .constants import DEFAULT_SERVICE_FILE, LOG_LEVEL_CHOICES
from .context import BuildContext, CommandOptions
from .errors import ConfigurationError, SlspackError
from .logs import getAppLogger
from .meta import PROGRAM_DISPLAY, PROGRAM_PACKAGE, PROGRAM_SCRIPT
from .offline import prepare_offline
from .package import run_package
from .service import ServiceDescriptor, load_service_file
from .validate import validate
from .watch import WatchDriver


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --wach ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _add_build_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "--out", help="Path to output directory.")
    parser.add_argument(
        "-f",
        "--function",
        help="Only resolve the entry of this function.",
    )
    parser.add_argument(
        "--skip-build",
        action="store_true",
        help="Skip compilation and use the existing compiled output.",
    )


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description="Bundle serverless functions with Rspack.",
    )

    parser.add_argument(
        "--service",
        default=DEFAULT_SERVICE_FILE,
        help=f"Path to the service descriptor (JSON/JSONC, default: {DEFAULT_SERVICE_FILE}).",
    )
    parser.add_argument(
        "--compiler",
        metavar="MODULE:ATTR",
        help="Compiler service to build with, as an import path.",
    )
    parser.add_argument("--version", action="store_true", help="Show version info.")

    # --- Verbosity ---
    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    validate_cmd = commands.add_parser("validate", help="Resolve entries and plan builds.")
    _add_build_options(validate_cmd)

    compile_cmd = commands.add_parser("compile", help="Validate, then compile.")
    _add_build_options(compile_cmd)
    compile_cmd.add_argument(
        "--watch",
        action="store_true",
        help="Keep watching and rebuild on effective source changes.",
    )
    compile_cmd.add_argument(
        "--rspack-use-polling",
        nargs="?",
        type=int,
        const=True,
        default=None,
        metavar="MS",
        dest="use_polling",
        help="Poll for changes every MS milliseconds (default: 3000).",
    )
    compile_cmd.add_argument(
        "--rspack-no-watch",
        action="store_true",
        dest="no_watch",
        help="Disable watch mode and compile once.",
    )

    package_cmd = commands.add_parser("package", help="Validate, compile and package.")
    _add_build_options(package_cmd)

    return parser


def _command_options(args: argparse.Namespace) -> CommandOptions:
    return CommandOptions(
        function=getattr(args, "function", None),
        out=getattr(args, "out", None),
        skip_build=getattr(args, "skip_build", False),
        watch=getattr(args, "watch", False),
        use_polling=getattr(args, "use_polling", None),
        no_watch=getattr(args, "no_watch", False),
    )


def _initialize_logger(args: argparse.Namespace) -> None:
    """Apply the CLI log level on top of env vars and defaults."""
    logger = getAppLogger()
    if args.log_level:
        logger.setLevel(args.log_level.upper())
    logger.trace(f"[BOOT] log-level initialized: {logging.getLevelName(logger.level)}")

    logger.debug(
        "Runtime: Python %s (%s)\n    %s",
        platform.python_version(),
        platform.python_implementation(),
        sys.version.replace("\n", " "),
    )


def _get_version() -> str:
    try:
        return version(PROGRAM_PACKAGE)
    except PackageNotFoundError:
        return "unknown"


def load_compiler(spec: str | None) -> Compiler:
    """Import a compiler from 'module:attr'.

    A class or factory is called without arguments; anything else is used
    as is.
    """
    if not spec:
        xmsg = "No compiler configured. Pass --compiler MODULE:ATTR."
        raise ConfigurationError(xmsg)

    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        xmsg = f"Invalid compiler import path {spec!r}; expected MODULE:ATTR"
        raise ConfigurationError(xmsg)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        xmsg = f"Could not import compiler module {module_name!r}: {e}"
        raise ConfigurationError(xmsg) from e

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            xmsg = f"Compiler {attr!r} not found in module {module_name!r}"
            raise ConfigurationError(xmsg) from e

    if callable(target) and not hasattr(target, "compile"):
        target = target()
    elif isinstance(target, type):
        target = target()
    return target


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


async def _compile_or_skip(ctx: BuildContext, compiler_spec: str | None) -> None:
    logger = getAppLogger()
    if ctx.skip_compile:
        logger.info("Skipping compilation (--skip-build / noBuild)")
        return
    await compile_context(ctx, load_compiler(compiler_spec))


async def _run_watch(
    service: ServiceDescriptor,
    options: CommandOptions,
    compiler_spec: str | None,
) -> None:
    logger = getAppLogger()
    ctx = await prepare_offline(service, options)
    if ctx.skip_compile:
        logger.info("Skipping compilation (--skip-build / noBuild)")
        return

    compiler = load_compiler(compiler_spec)
    if options.no_watch:
        ctx.compile_results = await compile_all(compiler, ctx.build_configs, ctx.settings)
        return

    driver = WatchDriver(compiler, ctx.build_configs[0], poll=options.use_polling)
    await driver.start()
    logger.info("Watching for changes... Press Ctrl+C to stop.")
    try:
        await driver.wait_stopped()
    finally:
        driver.stop()


async def _run_command(args: argparse.Namespace) -> None:
    logger = getAppLogger()
    options = _command_options(args)
    service = load_service_file(Path(args.service))
    logger.debug("Service path: %s", service.service_path)

    if args.command == "compile" and options.watch:
        await _run_watch(service, options, args.compiler)
        return

    ctx = await validate(service, options)
    logger.info(
        "Planned %d build config(s) (%s packaging)",
        len(ctx.build_configs),
        "individual" if ctx.individually else "service",
    )
    if args.command == "validate":
        return

    await _compile_or_skip(ctx, args.compiler)
    if args.command == "compile":
        return

    await run_package(ctx)
    cleanup(ctx)


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        _initialize_logger(args)

        if args.version:
            logger.info("%s %s", PROGRAM_DISPLAY, _get_version())
            return 0

        if not args.command:
            parser.print_help()
            return 1

        asyncio.run(_run_command(args))

    except KeyboardInterrupt:
        logger.info("\nStopped.")
        return 0

    except (SlspackError, FileNotFoundError, ValueError, TypeError, RuntimeError) as e:
        # controlled termination
        try:
            if logger.isEnabledFor(logging.DEBUG):
                logger.exception(str(e))
            else:
                logger.error(str(e))
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            if logger.isEnabledFor(logging.DEBUG):
                logger.exception("Unexpected internal error: %s", e)
            else:
                logger.critical("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    else:
        return 0
