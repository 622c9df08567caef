# src/slspack/utils/utils_paths.py


import posixpath
import re
from pathlib import Path, PurePosixPath


def to_posix(path: str | Path) -> str:
    """Normalize a relative path to slash separated form without './'."""
    text = str(path).replace("\\", "/")
    normalized = posixpath.normpath(text) if text else text
    return "" if normalized == "." else normalized


def strip_extension(path: str) -> str:
    """'./handlers/a.js' → 'handlers/a' (only the last suffix is removed)."""
    posix = PurePosixPath(to_posix(path))
    return str(posix.with_suffix("")) if posix.suffix else str(posix)


def camel_case(text: str) -> str:
    """camelCase a key like 'handlers/func-3/module2' → 'handlersFunc3Module2'."""
    words: list[str] = []
    for chunk in re.split(r"[^A-Za-z0-9]+", text):
        # split 'fooBar' / 'HTTPServer' style boundaries
        words.extend(re.findall(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+", chunk))
    if not words:
        return ""
    first, *rest = words
    return first.lower() + "".join(w[:1].upper() + w[1:].lower() for w in rest)
