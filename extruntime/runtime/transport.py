# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Transports that hand a rendered program to an interpreter process."""

from __future__ import annotations

import logging
import os
import shutil
import signal
import subprocess
import tempfile

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

from extruntime.exceptions import ProcessError, RuntimeTimeoutError

LOGGER = logging.getLogger(__name__)


@dataclass
class TransportResult:
    returncode: int
    stdout: str
    stderr: str


class Transport(Protocol):
    def run(self, binary: Sequence[str], program: str) -> TransportResult:
        """Run ``program`` with ``binary`` and return the captured output."""
        ...


def _kill(proc: subprocess.Popen) -> None:
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:  # pragma: no cover - already gone
            pass
        return
    proc.kill()


def _communicate(
    argv: Sequence[str],
    stdin_data: Optional[bytes],
    *,
    encoding: str,
    timeout_s: Optional[float],
) -> TransportResult:
    LOGGER.debug("Spawning %s", list(argv))
    stdin = subprocess.DEVNULL if stdin_data is None else subprocess.PIPE
    try:
        proc = subprocess.Popen(
            list(argv),
            stdin=stdin,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=os.name == "posix",
        )
    except OSError as exc:
        raise ProcessError(f"{argv[0]}: {exc}") from exc
    try:
        out, err = proc.communicate(input=stdin_data, timeout=timeout_s)
    except subprocess.TimeoutExpired as exc:
        _kill(proc)
        proc.communicate()
        raise RuntimeTimeoutError(timeout_s or 0) from exc
    LOGGER.debug("%s exited with rc=%s", argv[0], proc.returncode)
    return TransportResult(
        returncode=proc.returncode,
        stdout=out.decode(encoding, errors="replace"),
        stderr=err.decode(encoding, errors="replace"),
    )


class PipeTransport(Transport):
    """Writes the program to the interpreter's stdin and closes it."""

    def __init__(
        self, *, encoding: str = "utf-8", timeout_s: Optional[float] = None
    ) -> None:
        self.encoding = encoding
        self.timeout_s = timeout_s

    def run(self, binary: Sequence[str], program: str) -> TransportResult:
        return _communicate(
            binary,
            program.encode(self.encoding),
            encoding=self.encoding,
            timeout_s=self.timeout_s,
        )


class TempfileTransport(Transport):
    """Writes the program to a temporary file passed as the last argument."""

    def __init__(
        self,
        *,
        encoding: str = "utf-8",
        timeout_s: Optional[float] = None,
        suffix: str = ".js",
    ) -> None:
        self.encoding = encoding
        self.timeout_s = timeout_s
        self.suffix = suffix

    def run(self, binary: Sequence[str], program: str) -> TransportResult:
        temp_dir = Path(tempfile.mkdtemp(prefix="extruntime-"))
        try:
            program_path = temp_dir / f"program{self.suffix}"
            program_path.write_text(program, encoding=self.encoding)
            return _communicate(
                [*binary, str(program_path)],
                None,
                encoding=self.encoding,
                timeout_s=self.timeout_s,
            )
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)


__all__ = [
    "PipeTransport",
    "TempfileTransport",
    "Transport",
    "TransportResult",
]
