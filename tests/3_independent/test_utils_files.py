# tests/3_independent/test_utils_files.py

from pathlib import Path

import pytest

import slspack.utils as mod_utils


def test_load_jsonc_strips_comments_and_trailing_commas(tmp_path: Path) -> None:
    # --- setup ---
    path = tmp_path / "config.jsonc"
    path.write_text(
        """
        // build config
        {
          "target": "node", /* inline */
          "url": "http://example.com/a",
          "externals": ["aws-sdk",],
        }
        """
    )

    # --- execute ---
    data = mod_utils.load_jsonc(path)

    # --- verify ---
    assert data == {
        "target": "node",
        "url": "http://example.com/a",
        "externals": ["aws-sdk"],
    }


def test_load_jsonc_empty_file_is_none(tmp_path: Path) -> None:
    path = tmp_path / "empty.jsonc"
    path.write_text("// nothing here\n")
    assert mod_utils.load_jsonc(path) is None


def test_load_jsonc_rejects_bad_syntax(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{ nope }")
    with pytest.raises(ValueError, match="Invalid JSONC syntax"):
        mod_utils.load_jsonc(path)


def test_load_jsonc_rejects_scalar_root(tmp_path: Path) -> None:
    path = tmp_path / "scalar.json"
    path.write_text("42")
    with pytest.raises(ValueError, match="root type"):
        mod_utils.load_jsonc(path)


def test_remove_path_in_error_message() -> None:
    path = Path("/abs/path/config.jsonc")
    msg = "Invalid JSONC syntax in /abs/path/config.jsonc: Expecting value"
    assert (
        mod_utils.remove_path_in_error_message(msg, path)
        == "Invalid JSONC syntax: Expecting value"
    )
