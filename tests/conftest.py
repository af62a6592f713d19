"""Expose the project root on sys.path and provide stand-in runtimes."""

from __future__ import annotations

import os
import sys

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from extruntime.runtime.descriptor import ExternalRuntime  # noqa: E402

# Runs the snippet as module code; ``result`` holds the reported value.
PY_RUNNER_SOURCE = """\
import json
import os
import sys


def _report_error(kind, exc, tb):
    sys.stdout.write(json.dumps(["err", str(exc), kind.__name__]) + "\\n")
    sys.stdout.flush()
    os._exit(0)


sys.excepthook = _report_error
result = None
#{source}
if result is None:
    print('["ok"]')
else:
    print(json.dumps(["ok", result]))
"""


def write_executable(directory: Path, name: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(body)
    path.chmod(0o755)
    return path


@pytest.fixture()
def py_runner_source() -> str:
    return PY_RUNNER_SOURCE


@pytest.fixture()
def fake_bin(tmp_path: Path, monkeypatch) -> Path:
    """Put a ``pyrunner`` wrapper around this interpreter alone on PATH."""

    if os.name != "posix":
        pytest.skip("wrapper scripts need a POSIX shell")
    bin_dir = tmp_path / "bin"
    write_executable(
        bin_dir,
        "pyrunner",
        f'#!/bin/sh\nexec "{sys.executable}" "$@"\n',
    )
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture()
def py_runtime(fake_bin: Path) -> ExternalRuntime:
    return ExternalRuntime(
        "Python stand-in", ["pyrunner", "-"], PY_RUNNER_SOURCE, suffix=".py"
    )
