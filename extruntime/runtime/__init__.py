"""Execution protocol: discovery, descriptors, contexts and decoding."""

from . import paths
from .context import Context
from .decoder import ResultEnvelope, decode_result, parse_envelope
from .descriptor import ExternalRuntime, build_runtime
from .paths import find_executable, which
from .template import SOURCE_MARKER, render_program, validate_template
from .transport import (
    PipeTransport,
    TempfileTransport,
    Transport,
    TransportResult,
)

__all__ = [
    "Context",
    "ExternalRuntime",
    "PipeTransport",
    "ResultEnvelope",
    "SOURCE_MARKER",
    "TempfileTransport",
    "Transport",
    "TransportResult",
    "build_runtime",
    "decode_result",
    "find_executable",
    "parse_envelope",
    "paths",
    "render_program",
    "validate_template",
    "which",
]
