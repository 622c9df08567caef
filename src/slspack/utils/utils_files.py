# src/slspack/utils/utils_files.py


import json
import re
from pathlib import Path
from typing import Any, cast

from slspack.logs import getAppLogger


def _strip_jsonc_comments(text: str) -> str:
    """Strip // and /* */ comments from JSONC while preserving string contents."""
    result: list[str] = []
    in_string = False
    in_escape = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if in_string:
            result.append(ch)
            if in_escape:
                in_escape = False
            elif ch == "\\":
                in_escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
            continue

        if text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def load_jsonc(path: Path) -> dict[str, Any] | list[Any] | None:
    """Load JSONC (JSON with comments and trailing commas)."""
    logger = getAppLogger()
    logger.trace(f"[load_jsonc] Loading from {path}")

    if not path.exists():
        xmsg = f"JSONC file not found: {path}"
        raise FileNotFoundError(xmsg)

    text = _strip_jsonc_comments(path.read_text(encoding="utf-8"))
    # trailing commas before } or ]
    text = re.sub(r",(?=\s*[}\]])", "", text).strip()

    if not text:
        # Empty or only comments
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        xmsg = (
            f"Invalid JSONC syntax in {path}:"
            f" {e.msg} (line {e.lineno}, column {e.colno})"
        )
        raise ValueError(xmsg) from e

    if not isinstance(data, (dict, list)):
        xmsg = f"Invalid JSONC root type: {type(data).__name__}"
        raise ValueError(xmsg)  # noqa: TRY004

    return cast("dict[str, Any] | list[Any]", data)


def remove_path_in_error_message(inner_msg: str, path: Path) -> str:
    """Remove redundant mentions of `path` from a wrapped error message.

    Example:
        "Invalid JSONC syntax in /abs/path/config.jsonc: Expecting value"
        → "Invalid JSONC syntax: Expecting value"
    """
    full_path = str(path)
    filename = path.name
    candidates = [
        f" in {full_path}",
        f" in '{full_path}'",
        f' in "{full_path}"',
        f" in {filename}",
        f" in '{filename}'",
        f' in "{filename}"',
        full_path,
        filename,
    ]
    clean = inner_msg
    for candidate in candidates:
        clean = clean.replace(candidate, "")
    return re.sub(r"\s{2,}", " ", clean).strip()
