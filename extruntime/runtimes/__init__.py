"""Named runtime registry."""

from __future__ import annotations

import logging
import os

from typing import Callable, Dict, List, Optional

from extruntime.exceptions import RuntimeUnavailableError
from extruntime.runtime.descriptor import ExternalRuntime

from .node import NODE_NAME, NODE_RUNNER_SOURCE, node_runtime

RUNTIME_ENV_VAR = "EXTRUNTIME_RUNTIME"
LOGGER = logging.getLogger(__name__)

RuntimeFactory = Callable[[], ExternalRuntime]

RUNTIME_FACTORIES: Dict[str, RuntimeFactory] = {
    "node": node_runtime,
}


def register_runtime(name: str, factory: RuntimeFactory) -> None:
    """Register or override a named runtime at runtime."""

    RUNTIME_FACTORIES[name.lower()] = factory


def unregister_runtime(name: str) -> None:
    """Remove a runtime that was previously registered."""

    RUNTIME_FACTORIES.pop(name.lower(), None)


def _build(name: str) -> ExternalRuntime:
    try:
        factory = RUNTIME_FACTORIES[name.lower()]
    except KeyError as exc:
        raise RuntimeUnavailableError(
            f"Unknown runtime '{name}'. Registered: "
            f"{', '.join(sorted(RUNTIME_FACTORIES)) or '(none)'}"
        ) from exc
    return factory()


def get_runtime(name: Optional[str] = None) -> ExternalRuntime:
    """Return the named runtime, the env-selected one, or the first available.

    An explicitly requested runtime must be available; otherwise
    RuntimeUnavailableError is raised.
    """

    requested = name or os.environ.get(RUNTIME_ENV_VAR) or None
    if requested:
        runtime = _build(requested)
        if not runtime.is_available():
            raise RuntimeUnavailableError(
                f"{runtime.name} runtime is not available on this system"
            )
        return runtime
    for key in list(RUNTIME_FACTORIES):
        runtime = RUNTIME_FACTORIES[key]()
        if runtime.is_available():
            LOGGER.debug("Selected runtime %s", key)
            return runtime
    raise RuntimeUnavailableError("Could not find an available runtime.")


def available_runtimes() -> List[str]:
    return [
        key
        for key, factory in list(RUNTIME_FACTORIES.items())
        if factory().is_available()
    ]


__all__ = [
    "NODE_NAME",
    "NODE_RUNNER_SOURCE",
    "RUNTIME_ENV_VAR",
    "RUNTIME_FACTORIES",
    "available_runtimes",
    "get_runtime",
    "node_runtime",
    "register_runtime",
    "unregister_runtime",
]
