# tests/3_independent/test_utils_paths.py

import pytest

import slspack.utils as mod_utils


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("./handler", "handler"),
        ("src\\handlers\\a", "src/handlers/a"),
        ("src/./handlers//a", "src/handlers/a"),
        (".", ""),
    ],
)
def test_to_posix_normalizes_relative_paths(path: str, expected: str) -> None:
    assert mod_utils.to_posix(path) == expected


def test_strip_extension_removes_only_last_suffix() -> None:
    assert mod_utils.strip_extension("./handlers/a.js") == "handlers/a"
    assert mod_utils.strip_extension("lib/a.test.ts") == "lib/a.test"
    assert mod_utils.strip_extension("noext") == "noext"


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("handler", "handler"),
        ("function-name/handler", "functionNameHandler"),
        ("handlers/func-3/module2", "handlersFunc3Module2"),
        ("src/my_handler", "srcMyHandler"),
    ],
)
def test_camel_case_entry_keys(key: str, expected: str) -> None:
    """Entry keys become directory-friendly camelCase names."""
    assert mod_utils.camel_case(key) == expected
