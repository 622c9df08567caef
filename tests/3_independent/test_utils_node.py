# tests/3_independent/test_utils_node.py

import pytest

import slspack.utils as mod_utils


@pytest.mark.parametrize(
    "name",
    ["fs", "crypto", "fs/promises", "node:fs", "node:path/posix", "node:test"],
)
def test_builtin_modules_are_recognized(name: str) -> None:
    assert mod_utils.is_builtin_module(name)


@pytest.mark.parametrize("name", ["lodash", "uuid", "@aws-sdk/client-s3", "test"])
def test_packages_are_not_builtin(name: str) -> None:
    """'test' is only a built-in behind the node: scheme."""
    assert not mod_utils.is_builtin_module(name)
