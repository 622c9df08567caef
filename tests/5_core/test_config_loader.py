# tests/5_core/test_config_loader.py
"""Tests for loading the bundler build config."""

import asyncio
from pathlib import Path
from typing import Any

import pytest

import slspack.config.config_loader as mod_loader
import slspack.errors as mod_errors


def test_load_config_file_python_exports_config(tmp_path: Path) -> None:
    # --- setup ---
    path = tmp_path / "rspack.config.py"
    path.write_text("config = {'target': 'node', 'mode': 'production'}\n")

    # --- execute ---
    result = mod_loader.load_config_file(path)

    # --- verify ---
    assert result == {"target": "node", "mode": "production"}


def test_load_config_file_python_default_export(tmp_path: Path) -> None:
    path = tmp_path / "rspack.config.py"
    path.write_text("default = {'mode': 'development'}\n")
    assert mod_loader.load_config_file(path) == {"mode": "development"}


def test_load_config_file_python_local_import(tmp_path: Path) -> None:
    """Python configs can import helpers that sit next to them."""
    # --- setup ---
    (tmp_path / "slspack_cfg_helpers.py").write_text("TARGET = 'node18'\n")
    path = tmp_path / "rspack.config.py"
    path.write_text(
        "from slspack_cfg_helpers import TARGET\nconfig = {'target': TARGET}\n"
    )

    # --- execute ---
    result = mod_loader.load_config_file(path)

    # --- verify ---
    assert result == {"target": "node18"}


def test_load_config_file_python_without_export(tmp_path: Path) -> None:
    path = tmp_path / "rspack.config.py"
    path.write_text("something = 1\n")
    with pytest.raises(mod_errors.ConfigurationError, match="did not define"):
        mod_loader.load_config_file(path)


def test_load_config_file_python_failure_is_chained(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    path = tmp_path / "rspack.config.py"
    path.write_text("raise RuntimeError('broken config')\n")

    # --- execute ---
    with pytest.raises(mod_errors.ConfigurationError) as exc_info:
        mod_loader.load_config_file(path)

    # --- verify ---
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "broken config" in str(exc_info.value)
    captured = capsys.readouterr()
    assert "could not load rspack config" in (captured.out + captured.err).lower()


def test_load_config_file_missing(tmp_path: Path) -> None:
    with pytest.raises(mod_errors.ConfigurationError, match="could not find"):
        mod_loader.load_config_file(tmp_path / "rspack.config.py")


def test_load_config_file_jsonc(tmp_path: Path) -> None:
    path = tmp_path / "rspack.config.jsonc"
    path.write_text('{\n  // comment\n  "target": "node",\n}\n')
    assert mod_loader.load_config_file(path) == {"target": "node"}


def test_load_config_file_bad_json_hides_path(tmp_path: Path) -> None:
    path = tmp_path / "rspack.config.json"
    path.write_text("{ oops")
    with pytest.raises(mod_errors.ConfigurationError) as exc_info:
        mod_loader.load_config_file(path)
    assert str(tmp_path) not in str(exc_info.value)


def test_load_config_file_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "rspack.config.js"
    path.write_text("module.exports = {}\n")
    with pytest.raises(mod_errors.ConfigurationError, match="Unsupported"):
        mod_loader.load_config_file(path)


def test_resolve_build_config_inline_is_deep_copied(tmp_path: Path) -> None:
    # --- setup ---
    inline: dict[str, Any] = {"output": {"path": "out"}}

    # --- execute ---
    result = asyncio.run(mod_loader.resolve_build_config(inline, tmp_path))
    result["output"]["path"] = "changed"

    # --- verify ---
    assert inline == {"output": {"path": "out"}}


def test_resolve_build_config_pending(tmp_path: Path) -> None:
    """A Pending is awaited once before the config is used."""

    # --- setup ---
    async def produce() -> dict[str, Any]:
        await asyncio.sleep(0)
        return {"target": "node"}

    async def run() -> dict[str, Any]:
        return await mod_loader.resolve_build_config(
            mod_loader.Pending(produce()), tmp_path
        )

    # --- execute and verify ---
    assert asyncio.run(run()) == {"target": "node"}


def test_resolve_build_config_path_to_pending(tmp_path: Path) -> None:
    """A python config may itself export a Pending."""
    # --- setup ---
    (tmp_path / "rspack.config.py").write_text(
        "import asyncio\n"
        "from slspack.config import Pending\n"
        "async def _make():\n"
        "    await asyncio.sleep(0)\n"
        "    return {'mode': 'async'}\n"
        "config = Pending(_make())\n"
    )

    # --- execute ---
    result = asyncio.run(mod_loader.resolve_build_config("rspack.config.py", tmp_path))

    # --- verify ---
    assert result == {"mode": "async"}


def test_resolve_build_config_rejects_untagged_thenable(tmp_path: Path) -> None:
    """Objects that only look like promises are not awaited."""

    class Thenable:
        def then(self, callback: Any) -> Any:
            return callback({"target": "node"})

    with pytest.raises(mod_errors.ConfigurationError, match="Pending"):
        asyncio.run(mod_loader.resolve_build_config(Thenable(), tmp_path))


def test_resolve_build_config_detects_self_reference(tmp_path: Path) -> None:
    (tmp_path / "loop.py").write_text("config = 'loop.py'\n")
    with pytest.raises(mod_errors.ConfigurationError, match="refers back"):
        asyncio.run(mod_loader.resolve_build_config("loop.py", tmp_path))


def test_resolve_build_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / "list.json").write_text("[1, 2]")
    with pytest.raises(mod_errors.ConfigurationError, match="must be a mapping"):
        asyncio.run(mod_loader.resolve_build_config("list.json", tmp_path))
