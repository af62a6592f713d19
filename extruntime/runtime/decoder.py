"""Decoding of the result envelope printed by runner programs."""

from __future__ import annotations

import json

from dataclasses import dataclass
from typing import Any, Optional

from extruntime.exceptions import DecodeError, ProgramError

STATUS_OK = "ok"


@dataclass(frozen=True)
class ResultEnvelope:
    """Parsed ``["ok"]`` / ``["ok", value]`` / ``["err", ...]`` line."""

    status: Any
    value: Any = None
    has_value: bool = False
    detail: Any = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK


def _envelope_line(output: str) -> Optional[str]:
    # The runner's final newline leaves no extra element with splitlines().
    lines = output.splitlines()
    if not lines:
        return None
    return lines[-1]


def parse_envelope(line: str) -> ResultEnvelope:
    try:
        data = json.loads(line)
    except ValueError as exc:
        raise DecodeError("envelope is not valid JSON", line) from exc
    if not isinstance(data, list) or not data:
        raise DecodeError("envelope is not a non-empty JSON array", line)
    if len(data) == 1:
        return ResultEnvelope(status=data[0])
    return ResultEnvelope(
        status=data[0],
        value=data[1],
        has_value=True,
        detail=data[2] if len(data) > 2 else None,
    )


def decode_result(output: str) -> Any:
    """Return the value reported by ``output`` or raise on failure.

    An ``["ok"]`` envelope decodes to None. Failure envelopes raise
    ProgramError; a bare status carries no message.
    """

    line = _envelope_line(output)
    if line is None or not line.strip():
        raise DecodeError("no result envelope in output", output)
    envelope = parse_envelope(line)
    if not envelope.ok:
        if not envelope.has_value:
            raise ProgramError()
        message = envelope.value
        if message is not None and not isinstance(message, str):
            message = json.dumps(message)
        raise ProgramError(message, envelope.detail)
    return envelope.value if envelope.has_value else None


__all__ = ["ResultEnvelope", "STATUS_OK", "decode_result", "parse_envelope"]
