"""Custom exceptions for external runtime execution."""

from __future__ import annotations

from typing import Any, Optional


class ExternalRuntimeError(RuntimeError):
    """Base exception for failures while running code on an external runtime."""


class RuntimeUnavailableError(ExternalRuntimeError):
    """Raised when no executable could be resolved for a runtime."""


class TemplateError(ExternalRuntimeError):
    """Raised when a runner template does not hold exactly one source marker."""


class SerializationError(ExternalRuntimeError):
    """Raised when a call argument cannot be encoded as JSON."""


class ProcessError(ExternalRuntimeError):
    """Raised when the interpreter process exits with a non-zero status."""

    def __init__(self, stderr: str, returncode: Optional[int] = None) -> None:
        self.stderr = stderr
        self.returncode = returncode
        message = stderr.strip() or "interpreter process failed"
        if returncode is not None:
            message = f"rc={returncode}: {message}"
        super().__init__(message)


class ProgramError(ExternalRuntimeError):
    """Raised when the executed program reports a failure envelope."""

    def __init__(
        self, message: Optional[str] = None, detail: Any = None
    ) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message or "program reported an error")


class DecodeError(ExternalRuntimeError):
    """Raised when interpreter output holds no parseable result envelope."""

    def __init__(self, reason: str, output: str) -> None:
        self.reason = reason
        self.output = output
        super().__init__(f"{reason}: {output[-200:]!r}")


class RuntimeTimeoutError(ExternalRuntimeError):
    """Raised when the interpreter process is killed at its deadline."""

    def __init__(self, timeout_s: float) -> None:
        self.timeout_s = timeout_s
        super().__init__(f"runtime timeout after {timeout_s}s")


__all__ = [
    "DecodeError",
    "ExternalRuntimeError",
    "ProcessError",
    "ProgramError",
    "RuntimeTimeoutError",
    "RuntimeUnavailableError",
    "SerializationError",
    "TemplateError",
]
