"""Runtime descriptors naming an external interpreter and its runner."""

from __future__ import annotations

import logging

from typing import Any, Dict, Optional, Sequence, Tuple

from extruntime.exceptions import RuntimeUnavailableError
from extruntime.runtime.context import Context
from extruntime.runtime.paths import which
from extruntime.runtime.template import validate_template
from extruntime.runtime.transport import (
    PipeTransport,
    TempfileTransport,
    Transport,
)

LOGGER = logging.getLogger(__name__)


class ExternalRuntime:
    """An interpreter reachable as a command-line binary.

    Availability is resolved once, at construction, and cached for the
    lifetime of the instance.
    """

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        runner_source: str,
        *,
        tempfile: bool = False,
        encoding: str = "utf-8",
        timeout_s: Optional[float] = None,
        suffix: str = ".js",
    ) -> None:
        self.name = name
        self.command: Tuple[str, ...] = tuple(command)
        self.runner_source = validate_template(runner_source)
        self.tempfile = tempfile
        self.encoding = encoding
        self.timeout_s = timeout_s
        self.suffix = suffix
        self._binary_resolved = False
        self._binary_cache: Optional[Tuple[str, ...]] = None
        self._available = self.binary() is not None
        LOGGER.debug(
            "Runtime %s (%s) available=%s",
            self.name,
            " ".join(self.command),
            self._available,
        )

    def __repr__(self) -> str:
        return (
            f"ExternalRuntime(name={self.name!r}, command={self.command!r}, "
            f"available={self._available})"
        )

    def replace(self, **changes: Any) -> "ExternalRuntime":
        """Return a new runtime with ``changes`` applied (re-resolved)."""

        options: Dict[str, Any] = {
            "tempfile": self.tempfile,
            "encoding": self.encoding,
            "timeout_s": self.timeout_s,
            "suffix": self.suffix,
        }
        options.update(changes)
        return ExternalRuntime(
            options.pop("name", self.name),
            options.pop("command", self.command),
            options.pop("runner_source", self.runner_source),
            **options,
        )

    def is_available(self) -> bool:
        return self._available

    def binary(self) -> Optional[Tuple[str, ...]]:
        if not self._binary_resolved:
            self._binary_cache = which(self.command)
            self._binary_resolved = True
        return self._binary_cache

    def transport(self) -> Transport:
        if self.tempfile:
            return TempfileTransport(
                encoding=self.encoding,
                timeout_s=self.timeout_s,
                suffix=self.suffix,
            )
        return PipeTransport(encoding=self.encoding, timeout_s=self.timeout_s)

    def compile(self, preamble: str = "") -> Optional[Context]:
        """Return a context bound to ``preamble``, or None if unavailable."""

        if not self.is_available():
            return None
        return Context(self, preamble, transport=self.transport())

    def _require_context(self) -> Context:
        context = self.compile("")
        if context is None:
            raise RuntimeUnavailableError(
                f"{self.name} runtime is not available on this system"
            )
        return context

    def exec_(self, source: str) -> Any:
        return self._require_context().exec_(source)

    def eval(self, source: str) -> Any:
        return self._require_context().eval(source)

    def call(self, identifier: str, *args: Any) -> Any:
        return self._require_context().call(identifier, *args)


def build_runtime(
    name: str,
    command: Sequence[str],
    runner_source: str,
    **options: Any,
) -> ExternalRuntime:
    return ExternalRuntime(name, command, runner_source, **options)


__all__ = ["ExternalRuntime", "build_runtime"]
