# tests/9_integration/test_cli.py
"""Tests for the slspack command line."""

import json
from pathlib import Path

import pytest

import slspack.cli as mod_cli
import slspack.errors as mod_errors
import slspack.meta as mod_meta
from tests.utils import touch


FAKE_COMPILER = "tests.utils.fakes:FakeCompiler"


def _make_project(root: Path, *, individually: bool = False) -> Path:
    touch(root, "src/hello.js", "src/goodbye.js")
    (root / "rspack.config.json").write_text('{\n  // build options\n  "mode": "production",\n}\n')
    descriptor = {
        "provider": {"name": "aws", "runtime": "nodejs20.x"},
        "package": {"individually": individually},
        "custom": {"rspack": {"configPath": "rspack.config.json"}},
        "functions": {
            "hello": {"handler": "src/hello.handler"},
            "goodbye": {"handler": "src/goodbye.handler"},
        },
    }
    path = root / "serverless.json"
    path.write_text(json.dumps(descriptor))
    return path


def _output(capsys: pytest.CaptureFixture[str]) -> str:
    captured = capsys.readouterr()
    return captured.out + captured.err


def test_validate_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    # --- setup ---
    service = _make_project(tmp_path)

    # --- execute ---
    code = mod_cli.main(["--service", str(service), "validate"])

    # --- verify ---
    assert code == 0
    assert "Planned 1 build config(s) (service packaging)" in _output(capsys)


def test_compile_command_individually(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # --- setup ---
    service = _make_project(tmp_path, individually=True)

    # --- execute ---
    code = mod_cli.main(["--service", str(service), "--compiler", FAKE_COMPILER, "compile"])

    # --- verify ---
    assert code == 0
    out = _output(capsys)
    assert '[Rspack] Compiled function "hello"' in out
    assert '[Rspack] Compiled function "goodbye"' in out


def test_compile_requires_compiler(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    service = _make_project(tmp_path)
    code = mod_cli.main(["--service", str(service), "compile"])
    assert code == mod_errors.ConfigurationError.code
    assert "No compiler configured" in _output(capsys)


def test_compile_rejects_bad_compiler_path(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    service = _make_project(tmp_path)
    code = mod_cli.main(
        ["--service", str(service), "--compiler", "tests.utils.fakes:Nope", "compile"]
    )
    assert code == mod_errors.ConfigurationError.code
    assert "not found in module" in _output(capsys)


def test_compile_skip_build_without_output(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    service = _make_project(tmp_path)
    code = mod_cli.main(
        ["--service", str(service), "--compiler", FAKE_COMPILER, "compile", "--skip-build"]
    )
    assert code == mod_errors.ConfigurationError.code
    assert "No compiled output found" in _output(capsys)


def test_compile_watch_disabled_compiles_once(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--rspack-no-watch compiles once with service packaging."""
    # --- setup ---
    service = _make_project(tmp_path, individually=True)

    # --- execute ---
    code = mod_cli.main(
        [
            "--service",
            str(service),
            "--compiler",
            FAKE_COMPILER,
            "compile",
            "--watch",
            "--rspack-no-watch",
        ]
    )

    # --- verify ---
    assert code == 0
    assert '[Rspack] Compiled function "service"' in _output(capsys)


def test_package_command(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    # --- setup ---
    service = _make_project(tmp_path)

    # --- execute ---
    code = mod_cli.main(["--service", str(service), "--compiler", FAKE_COMPILER, "package"])

    # --- verify ---
    assert code == 0
    out = _output(capsys)
    assert "skipping packExternalModules" in out
    assert not (tmp_path / ".rspack").exists()


def test_missing_service_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = mod_cli.main(["--service", str(tmp_path / "nope.json"), "validate"])
    assert code == mod_errors.ConfigurationError.code
    assert "Service descriptor not found" in _output(capsys)


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    code = mod_cli.main([])
    assert code == 1
    assert mod_meta.PROGRAM_SCRIPT in capsys.readouterr().out


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    code = mod_cli.main(["--version"])
    assert code == 0
    assert mod_meta.PROGRAM_DISPLAY in _output(capsys)


def test_quiet_flag_hides_info(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    service = _make_project(tmp_path)
    code = mod_cli.main(["--quiet", "--service", str(service), "validate"])
    assert code == 0
    assert "Planned" not in _output(capsys)


def test_unknown_flag_hints(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        mod_cli.main(["--verbsoe"])
    assert exc_info.value.code == 2  # noqa: PLR2004
    assert "did you mean --verbose" in capsys.readouterr().err


def test_main_handles_controlled_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Simulate a controlled exception (e.g. ValueError) and verify clean handling."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "mocked config failure"
        raise ValueError(xmsg)

    # --- patch and execute ---
    monkeypatch.setattr(mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    assert "mocked config failure" in _output(capsys)


def test_main_handles_unexpected_exception(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Simulate an unexpected internal error and ensure it logs as critical."""

    # --- stubs ---
    def fake_parser() -> object:
        xmsg = "boom!"
        raise OSError(xmsg)  # not one of the controlled types

    # --- patch and execute ---
    monkeypatch.setattr(mod_cli, "_setup_parser", fake_parser)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 1
    assert "Unexpected internal error" in _output(capsys)
