# src/slspack/entries.py
"""Entry discovery: map declared functions to bundler entry files on disk."""

import glob as globlib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .constants import PREFERRED_EXTENSIONS
from .errors import EntryPlanningError, MissingHandlerError, NoHandlerFoundError
from .logs import getAppLogger
from .service import FunctionDefinition, ImageSpec, ServiceDescriptor
from .utils import is_excluded_raw, to_posix


CONTAINER_DOCS_LINK = "https://www.serverless.com/blog/container-support-for-lambda"


@dataclass(frozen=True)
class EntrySpec:
    """One bundler entry: extension-less key and './'-prefixed source path."""

    key: str
    source_path: str


# --------------------------------------------------------------------------- #
# handler parsing
# --------------------------------------------------------------------------- #


def resolve_handler_reference(func: FunctionDefinition) -> str:
    """Return the handler string that points at the function's source.

    Precedence: layer `entrypoint`, `handler`, plain-string `image`,
    `image.command[0]`.
    """
    if func.has_entrypoint:
        return str(func.entrypoint)
    if func.has_handler:
        return str(func.handler)
    if isinstance(func.image, str):
        return func.image
    if isinstance(func.image, ImageSpec) and func.image.command:
        return func.image.command[0]

    xmsg = (
        f"Function {func.name!r}: either function.handler or function.image must "
        "be defined. Pass the handler name (i.e. 'index.handler') as the value "
        f"for function.image.command[0]. For help see: {CONTAINER_DOCS_LINK}"
    )
    raise MissingHandlerError(xmsg)


def extract_handler_file(handler: str) -> str | None:
    """'path/to/file.exported' → 'path/to/file'; None without a '.symbol' suffix."""
    head, dot, _symbol = handler.rpartition(".")
    if not dot or not head:
        return None
    return to_posix(head)


# --------------------------------------------------------------------------- #
# file resolution
# --------------------------------------------------------------------------- #


def _preferred_rank(file_name: str) -> tuple[int, int]:
    return (len(file_name), PREFERRED_EXTENSIONS.index(Path(file_name).suffix))


def order_candidates(files: Iterable[str]) -> list[str]:
    """Move preferred-extension candidates to the front.

    Preferred candidates are ordered by name length (shorter is taken to be
    less decorated, e.g. 'handler.js' before 'handler.test.js'), ties broken
    by PREFERRED_EXTENSIONS order. Everything else keeps its original order.
    """
    files = list(dict.fromkeys(files))
    preferred = [f for f in files if Path(f).suffix in PREFERRED_EXTENSIONS]
    others = [f for f in files if f not in preferred]
    return sorted(preferred, key=_preferred_rank) + others


def list_entry_candidates(
    file_stem: str,
    service_path: Path,
    exclude_files: list[str] | None = None,
) -> list[str]:
    """List files named `file_stem.*` below service_path, minus excludes."""
    pattern = f"{globlib.escape(file_stem)}.*"
    found = sorted(
        Path(match).as_posix()
        for match in globlib.glob(pattern, root_dir=service_path)
        if (service_path / match).is_file()
    )
    if exclude_files:
        found = [f for f in found if not is_excluded_raw(f, exclude_files, service_path)]
    return found


def resolve_entry_file(
    file_stem: str,
    service_path: Path,
    exclude_files: list[str] | None = None,
) -> str:
    """Pick the source file for `file_stem`, warning when it was ambiguous."""
    logger = getAppLogger()
    files = list_entry_candidates(file_stem, service_path, exclude_files)
    logger.trace(f"[resolve_entry_file] {file_stem!r} candidates: {files}")

    if not files:
        xmsg = (
            f"No matching handler found for '{file_stem}' in '{service_path}'. "
            "Check your service definition."
        )
        raise NoHandlerFoundError(xmsg)

    ordered = order_candidates(files)
    if len(ordered) > 1:
        logger.warning(
            'More than one matching handlers found for "%s". Using "%s"',
            file_stem,
            ordered[0],
        )
    return ordered[0]


def resolve_entry_extension(
    file_stem: str,
    service_path: Path,
    exclude_files: list[str] | None = None,
) -> str:
    """Extension ('.js', '.ts', ...) of the file chosen for `file_stem`."""
    return Path(resolve_entry_file(file_stem, service_path, exclude_files)).suffix


# --------------------------------------------------------------------------- #
# entry map
# --------------------------------------------------------------------------- #


def get_entry_for_function(
    func: FunctionDefinition,
    service: ServiceDescriptor,
    exclude_files: list[str] | None = None,
) -> EntrySpec | None:
    logger = getAppLogger()
    handler = resolve_handler_reference(func)
    handler_file = extract_handler_file(handler)
    if handler_file is None:
        # Google functions export a bare symbol from the service's index file
        if not service.is_provider_google:
            logger.warning(
                "Entry for %s@%s could not be retrieved.\n"
                "Please check your service config if you want to use entries.",
                func.name,
                handler,
            )
        return None

    ext = resolve_entry_extension(handler_file, service.service_path, exclude_files)
    return EntrySpec(key=handler_file, source_path=f"./{handler_file}{ext}")


def _merge_entry(entries: dict[str, str], spec: EntrySpec) -> None:
    existing = entries.get(spec.key)
    if existing is not None and existing != spec.source_path:
        xmsg = (
            f"Entry {spec.key!r} resolves to both {existing!r} and "
            f"{spec.source_path!r}"
        )
        raise EntryPlanningError(xmsg)
    entries[spec.key] = spec.source_path


def build_entry_map(
    service: ServiceDescriptor,
    *,
    function_name: str | None = None,
    exclude_files: list[str] | None = None,
) -> dict[str, str]:
    """Resolve every bundled function to `{handler_file: './handler_file.ext'}`.

    With `function_name` only that function is resolved, whatever its
    runtime. Functions sharing a handler file collapse into one entry.
    """
    logger = getAppLogger()
    if function_name is not None:
        functions = [service.get_function(function_name)]
    else:
        functions = service.bundled_functions()

    entries: dict[str, str] = {}
    for func in functions:
        spec = get_entry_for_function(func, service, exclude_files)
        if spec is not None:
            _merge_entry(entries, spec)

    logger.debug(
        "Resolved %d entr%s from %d function(s)",
        len(entries),
        "y" if len(entries) == 1 else "ies",
        len(functions),
    )
    return entries
