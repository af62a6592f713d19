from __future__ import annotations

import json
import logging

from pathlib import Path

import pytest
import yaml

from extruntime.cli import main
from extruntime.runtimes import RUNTIME_ENV_VAR, unregister_runtime


@pytest.fixture()
def cli_config(
    tmp_path: Path, fake_bin: Path, py_runner_source: str, monkeypatch
):
    monkeypatch.delenv(RUNTIME_ENV_VAR, raising=False)
    (tmp_path / "runner.py").write_text(py_runner_source)
    config_path = tmp_path / "extruntime.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "extruntime": {
                    "default_runtime": "py",
                    "runtimes": [
                        {
                            "key": "py",
                            "name": "Python stand-in",
                            "command": ["pyrunner", "-"],
                            "runner": "runner.py",
                        }
                    ],
                }
            }
        )
    )
    try:
        yield config_path
    finally:
        unregister_runtime("py")


def test_cli_exec_prints_json_result(cli_config: Path, capsys):
    assert main(["--config", str(cli_config), "exec", "result = 6 * 7"]) == 0
    assert json.loads(capsys.readouterr().out) == 42


def test_cli_exec_with_preamble_file(
    cli_config: Path, tmp_path: Path, capsys
):
    preamble = tmp_path / "preamble.py"
    preamble.write_text("greeting = 'hello'\n")
    exit_code = main(
        [
            "--config",
            str(cli_config),
            "--runtime",
            "py",
            "--preamble-file",
            str(preamble),
            "--timeout",
            "10",
            "exec",
            "result = greeting.upper()",
        ]
    )
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == "HELLO"


def test_cli_reports_program_errors(cli_config: Path, capsys):
    exit_code = main(
        ["--config", str(cli_config), "exec", "raise KeyError('nope')"]
    )
    assert exit_code == 1
    assert "ProgramError" in capsys.readouterr().err


def test_cli_lists_runtimes(cli_config: Path, capsys):
    assert main(["--config", str(cli_config), "--list-runtimes"]) == 0
    rows = [
        json.loads(line) for line in capsys.readouterr().out.splitlines()
    ]
    by_key = {row["runtime"]: row for row in rows}
    assert by_key["py"]["available"] is True
    assert by_key["node"]["available"] is False


def test_cli_rejects_non_json_call_arguments(cli_config: Path):
    with pytest.raises(SystemExit):
        main(["--config", str(cli_config), "call", "Math.max", "{oops"])


def test_cli_requires_action(cli_config: Path):
    with pytest.raises(SystemExit):
        main(["--config", str(cli_config)])


def test_cli_writes_log_file(cli_config: Path, tmp_path: Path, capsys):
    log_file = tmp_path / "logs" / "extruntime.log"
    exit_code = main(
        [
            "--config",
            str(cli_config),
            "--log-file",
            str(log_file),
            "exec",
            "result = 1",
        ]
    )
    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == 1
    assert "Spawning" in log_file.read_text()


def test_cli_log_file_keeps_debug_off_the_console(
    cli_config: Path, tmp_path: Path, capsys, monkeypatch
):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_file = tmp_path / "debug.log"

    exit_code = main(
        [
            "--config",
            str(cli_config),
            "--log-file",
            str(log_file),
            "exec",
            "result = 2",
        ]
    )
    captured = capsys.readouterr()
    assert exit_code == 0
    assert json.loads(captured.out) == 2
    assert "DEBUG" not in captured.err
    assert "DEBUG" in log_file.read_text()


def test_cli_reports_missing_preamble_file(
    cli_config: Path, tmp_path: Path, capsys
):
    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "--config",
                str(cli_config),
                "--preamble-file",
                str(tmp_path / "missing.py"),
                "exec",
                "result = 1",
            ]
        )
    assert excinfo.value.code == 2
    assert "cannot read preamble file" in capsys.readouterr().err
