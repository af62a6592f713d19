"""Typed helpers for parsing extruntime configuration dictionaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from extruntime.runtime.descriptor import ExternalRuntime
from extruntime.runtimes import register_runtime

CONFIG_SECTION = "extruntime"


def _ensure_path(value: str | Path, *, config_root: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class RuntimeSpec:
    """A runtime declared in configuration."""

    key: str
    name: str
    command: Tuple[str, ...]
    runner_source: str
    tempfile: bool = False
    encoding: str = "utf-8"
    suffix: str = ".js"
    timeout_s: Optional[float] = None

    def build(self) -> ExternalRuntime:
        return ExternalRuntime(
            self.name,
            self.command,
            self.runner_source,
            tempfile=self.tempfile,
            encoding=self.encoding,
            timeout_s=self.timeout_s,
            suffix=self.suffix,
        )


@dataclass(frozen=True)
class ExtRuntimeSettings:
    default_runtime: Optional[str] = None
    timeout_s: Optional[float] = None
    runtimes: Tuple[RuntimeSpec, ...] = field(default_factory=tuple)

    def runtime_spec(self, key: str) -> Optional[RuntimeSpec]:
        for spec in self.runtimes:
            if spec.key == key.lower():
                return spec
        return None


def _build_runtime_spec(
    entry: Dict[str, Any],
    *,
    config_root: Path,
    default_timeout: Optional[float],
) -> RuntimeSpec:
    key = entry.get("key") or entry.get("name")
    if not key:
        raise ValueError("runtime entries require a 'key'")
    command = entry.get("command")
    if isinstance(command, str):
        command = command.split()
    if not command:
        raise ValueError(f"runtime '{key}' requires a 'command'")
    if entry.get("runner_source"):
        runner_source = str(entry["runner_source"])
    elif entry.get("runner"):
        runner_path = _ensure_path(entry["runner"], config_root=config_root)
        runner_source = runner_path.read_text(
            encoding=str(entry.get("encoding", "utf-8"))
        )
    else:
        raise ValueError(
            f"runtime '{key}' requires 'runner' or 'runner_source'"
        )
    timeout_s = _optional_float(entry.get("timeout_s"))
    return RuntimeSpec(
        key=str(key).lower(),
        name=str(entry.get("name") or key),
        command=tuple(str(part) for part in command),
        runner_source=runner_source,
        tempfile=bool(entry.get("tempfile", False)),
        encoding=str(entry.get("encoding", "utf-8")),
        suffix=str(entry.get("suffix", ".js")),
        timeout_s=timeout_s if timeout_s is not None else default_timeout,
    )


def build_settings(
    config: Optional[Dict[str, Any]], *, config_root: Path
) -> ExtRuntimeSettings:
    cfg = dict((config or {}).get(CONFIG_SECTION) or {})
    timeout_s = _optional_float(cfg.get("timeout_s"))
    runtimes = tuple(
        _build_runtime_spec(
            dict(entry),
            config_root=config_root,
            default_timeout=timeout_s,
        )
        for entry in cfg.get("runtimes") or []
    )
    default_runtime = cfg.get("default_runtime")
    return ExtRuntimeSettings(
        default_runtime=str(default_runtime) if default_runtime else None,
        timeout_s=timeout_s,
        runtimes=runtimes,
    )


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_path}' not found.")
    return yaml.safe_load(config_path.read_text()) or {}


def load_settings(config_path: Path) -> ExtRuntimeSettings:
    return build_settings(
        load_config(config_path),
        config_root=config_path.resolve().parent,
    )


def register_configured_runtimes(settings: ExtRuntimeSettings) -> None:
    """Add every configured runtime to the named runtime registry."""

    for spec in settings.runtimes:
        register_runtime(spec.key, spec.build)


__all__ = [
    "CONFIG_SECTION",
    "ExtRuntimeSettings",
    "RuntimeSpec",
    "build_settings",
    "load_config",
    "load_settings",
    "register_configured_runtimes",
]
