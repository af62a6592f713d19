"""extruntime package entry point."""

from .exceptions import (
    DecodeError,
    ExternalRuntimeError,
    ProcessError,
    ProgramError,
    RuntimeTimeoutError,
    RuntimeUnavailableError,
    SerializationError,
    TemplateError,
)
from .runtime import Context, ExternalRuntime, build_runtime
from .runtimes import get_runtime, node_runtime

__all__ = [
    "Context",
    "DecodeError",
    "ExternalRuntime",
    "ExternalRuntimeError",
    "ProcessError",
    "ProgramError",
    "RuntimeTimeoutError",
    "RuntimeUnavailableError",
    "SerializationError",
    "TemplateError",
    "build_runtime",
    "get_runtime",
    "node_runtime",
]
