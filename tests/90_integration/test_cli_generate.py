# tests/90_integration/test_cli_generate.py
"""End-to-end tests for generating configs through the CLI."""

import json
from pathlib import Path

import pytest

import webpack_forge.cli as mod_cli
import webpack_forge.meta as mod_meta
from tests.utils import write_options_file


def test_no_options_prints_js_module(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Without an options file the default config goes to stdout."""
    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(["--log-level", "warning"])

    # --- verify ---
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("/* Generated by webpack-forge")
    assert "module.exports = {" in out
    assert "const webpack = require('webpack');" in out
    assert 'mode: "production"' in out


def test_json_format_from_options_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Options-file values flow into the generated descriptor."""
    # --- setup ---
    write_options_file(
        tmp_path / f".{mod_meta.PROGRAM_CONFIG}.json",
        {
            "format": "json",
            "filename": "widget",
            "modulename": "Widget",
            "debug": True,
            "log_level": "warning",
        },
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main([])

    # --- verify ---
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["mode"] == "development"
    assert data["output"]["filename"] == "widget.js"
    assert data["output"]["library"] == "Widget"
    assert data["context"] == str(tmp_path.resolve())
    assert data["plugins"][0]["plugin"] == "DefinePlugin"


def test_multiple_builds_render_an_array(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A list of builds becomes a multi-compiler array."""
    # --- setup ---
    write_options_file(
        tmp_path / f".{mod_meta.PROGRAM_CONFIG}.json",
        [{"filename": "lib", "minify": False}, {"filename": "lib"}],
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(["--format", "json", "-q"])

    # --- verify ---
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert [d["output"]["filename"] for d in data] == ["lib.js", "lib.min.js"]


def test_cli_flags_override_options_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Flags beat file values and --define injects constants."""
    # --- setup ---
    write_options_file(
        tmp_path / f".{mod_meta.PROGRAM_CONFIG}.jsonc",
        {"filename": "a", "env": "stage"},
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(
        [
            "--format",
            "json",
            "--filename",
            "b",
            "--env",
            "local",
            "--no-minify",
            "--node",
            "--define",
            "__API__=\"https://x\"",
            "-q",
        ]
    )

    # --- verify ---
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["output"]["filename"] == "b.js"
    assert data["optimization"] == {}
    definitions = data["plugins"][0]["options"]
    assert definitions["__API__"] == '"https://x"'
    assert definitions["__LOCAL__"] == "true"
    assert definitions["global"] == "global"


def test_out_writes_file_and_logs(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--out writes the module and reports where it went."""
    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(["--out", "build/webpack.config.js", "--log-level", "info"])

    # --- verify ---
    captured = capsys.readouterr()
    target = tmp_path / "build" / "webpack.config.js"
    assert code == 0
    assert target.exists()
    assert "module.exports" in target.read_text()
    assert "module.exports" not in captured.out
    assert "webpack.config.js" in captured.out


def test_python_options_file_with_deferred_constant(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Callables in a .py options file are evaluated at build time."""
    # --- setup ---
    (tmp_path / f".{mod_meta.PROGRAM_CONFIG}.py").write_text(
        "config = {'vars': {'__NOW__': lambda: 'Date.now()'}}\n"
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(["--format", "json", "-q"])

    # --- verify ---
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["plugins"][0]["options"]["__NOW__"] == "Date.now()"


def test_invalid_options_file_fails_once(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Validation failures exit 1 and are only reported by the summary."""
    # --- setup ---
    write_options_file(
        tmp_path / f".{mod_meta.PROGRAM_CONFIG}.json", {"minfy": True}
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main([])

    # --- verify ---
    err = capsys.readouterr().err
    assert code == 1
    assert "minfy" in err
    assert "contains validation errors" not in err


def test_no_strict_allows_unknown_keys(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--no-strict turns unknown keys into warnings."""
    # --- setup ---
    write_options_file(
        tmp_path / f".{mod_meta.PROGRAM_CONFIG}.json", {"minfy": True}
    )

    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(["--no-strict", "--format", "json"])

    # --- verify ---
    captured = capsys.readouterr()
    assert code == 0
    assert "minfy" in captured.err
    assert json.loads(captured.out)["mode"] == "production"


def test_missing_explicit_config_exits_1(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """An explicit --config that does not exist is a controlled failure."""
    # --- patch and execute ---
    monkeypatch.chdir(tmp_path)
    code = mod_cli.main(["--config", "nope.json"])

    # --- verify ---
    assert code == 1
    assert "not found" in capsys.readouterr().err.lower()
