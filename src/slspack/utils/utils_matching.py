# src/slspack/utils/utils_matching.py


import re
from functools import lru_cache
from pathlib import Path

from slspack.logs import getAppLogger


@lru_cache(maxsize=512)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a slash-separated glob to a regex.

    Handles literals, ?, *, [] classes and '**'. A '**/' segment also
    matches zero directories, so '**/*.ts' matches 'handler.ts'.
    Always case-sensitive.
    """

    def _escape_lit(ch: str) -> str:
        if ch in ".^$+{}[]|()\\":
            return "\\" + ch
        return ch

    i = 0
    n = len(pattern)
    pieces: list[str] = []
    while i < n:
        ch = pattern[i]

        # Character class: copy through closing ']'
        if ch == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j < n:
                body = pattern[i + 1 : j]
                if body.startswith("!"):
                    body = "^" + body[1:]
                pieces.append(f"[{body}]")
                i = j + 1
            else:
                pieces.append("\\[")
                i += 1
            continue

        if ch == "*" and i + 1 < n and pattern[i + 1] == "*":
            k = i + 2
            while k < n and pattern[k] == "*":
                k += 1
            if k < n and pattern[k] == "/":
                pieces.append("(?:.*/)?")
                k += 1
            else:
                pieces.append(".*")
            i = k
            continue

        if ch == "*":
            pieces.append("[^/]*")
        elif ch == "?":
            pieces.append("[^/]")
        else:
            pieces.append(_escape_lit(ch))
        i += 1

    return re.compile(f"(?s:{''.join(pieces)})\\Z")


def glob_match(path: str, pattern: str) -> bool:
    """Case-sensitive glob match of a slash-separated relative path."""
    return bool(_compile_glob(pattern.replace("\\", "/")).match(path.replace("\\", "/")))


def is_excluded_raw(
    path: Path | str,
    exclude_patterns: list[str],
    root: Path | str,
) -> bool:
    """Check `path` (relative to `root` unless absolute) against glob patterns.

    Absolute patterns under `root` are matched in their relative form; a
    trailing slash matches everything below that directory.
    """
    logger = getAppLogger()
    if not exclude_patterns:
        return False

    root = Path(root).resolve()
    full_path = Path(path) if Path(path).is_absolute() else root / path
    try:
        rel = full_path.resolve().relative_to(root).as_posix()
    except ValueError:
        # outside the root; nothing to match against
        return False

    for pattern in exclude_patterns:
        pat = pattern.replace("\\", "/")
        if pat.startswith(root.as_posix() + "/"):
            pat = pat[len(root.as_posix()) + 1 :]
        if glob_match(rel, pat) or (
            pat.endswith("/") and rel.startswith(pat.rstrip("/") + "/")
        ):
            logger.trace(f"[is_excluded_raw] {rel} MATCHED pattern {pattern!r}")
            return True

    return False
