"""Execution contexts: one-shot program runs against an external runtime."""

from __future__ import annotations

import json

from typing import TYPE_CHECKING, Any

from extruntime.exceptions import (
    ProcessError,
    RuntimeUnavailableError,
    SerializationError,
)
from extruntime.runtime.decoder import decode_result
from extruntime.runtime.template import render_program
from extruntime.runtime.transport import Transport

if TYPE_CHECKING:  # pragma: no cover
    from extruntime.runtime.descriptor import ExternalRuntime


class Context:
    """Binds a runtime to a preamble that runs before every source.

    Each ``exec_``/``eval``/``call`` spawns a fresh interpreter process;
    nothing survives between calls except the preamble text.
    """

    def __init__(
        self,
        runtime: "ExternalRuntime",
        preamble: str = "",
        *,
        transport: Transport,
    ) -> None:
        self.runtime = runtime
        self.preamble = preamble or ""
        self.transport = transport

    def is_available(self) -> bool:
        return self.runtime.is_available()

    def _ensure_available(self) -> None:
        if not self.is_available():
            raise RuntimeUnavailableError(
                f"{self.runtime.name} runtime is not available on this system"
            )

    def exec_(self, source: str) -> Any:
        self._ensure_available()
        if self.preamble:
            source = self.preamble + "\n" + source
        output = self._run(source)
        return decode_result(output)

    def eval(self, source: str) -> Any:
        self._ensure_available()
        if not source.strip():
            data = "\"''\""
        else:
            # Textual wrapping: a source containing '( or )' breaks it.
            data = "'('+'" + source + "'+')'"
        return self.exec_(f"return eval({data})")

    def call(self, identifier: str, *args: Any) -> Any:
        self._ensure_available()
        encoded = []
        for arg in args:
            try:
                encoded.append(json.dumps(arg))
            except (TypeError, ValueError) as exc:
                raise SerializationError(
                    f"cannot encode argument for {identifier}: {exc}"
                ) from exc
        return self.eval(f"{identifier}.apply(this,[{','.join(encoded)}])")

    def compile_program(self, source: str) -> str:
        """Return the full program text for ``source``."""

        return render_program(self.runtime.runner_source, source)

    def _run(self, source: str) -> str:
        binary = self.runtime.binary()
        if binary is None:
            raise RuntimeUnavailableError(
                f"{self.runtime.name} runtime has no resolved binary"
            )
        result = self.transport.run(binary, self.compile_program(source))
        if result.returncode != 0:
            raise ProcessError(result.stderr, result.returncode)
        return result.stdout


__all__ = ["Context"]
