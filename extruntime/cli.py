"""CLI entrypoint for running snippets on an external runtime."""

from __future__ import annotations

import argparse
import json
import sys

from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv

from extruntime.configuration import (
    ExtRuntimeSettings,
    load_settings,
    register_configured_runtimes,
)
from extruntime.exceptions import ExternalRuntimeError
from extruntime.logging import configure_console_logging, setup_file_logger
from extruntime.runtime.descriptor import ExternalRuntime
from extruntime.runtimes import RUNTIME_FACTORIES, get_runtime


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run script snippets on an installed external runtime."
    )
    parser.add_argument(
        "action",
        nargs="?",
        choices=["eval", "exec", "call"],
        help="Operation to perform.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Expression (eval), program body (exec) or function name (call).",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="JSON-encoded arguments for 'call'.",
    )
    parser.add_argument(
        "--runtime",
        type=str,
        help="Runtime name (defaults to config, then EXTRUNTIME_RUNTIME).",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to a YAML config declaring extra runtimes.",
    )
    parser.add_argument(
        "--preamble-file",
        type=str,
        help="File whose contents run before the snippet.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Kill the interpreter after this many seconds.",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write debug logs to a rotating log file.",
    )
    parser.add_argument(
        "--list-runtimes",
        action="store_true",
        help="List registered runtimes with their availability and exit.",
    )
    return parser


def _list_runtimes() -> int:
    for key in sorted(RUNTIME_FACTORIES):
        runtime = RUNTIME_FACTORIES[key]()
        binary = runtime.binary()
        print(
            json.dumps(
                {
                    "runtime": key,
                    "name": runtime.name,
                    "available": runtime.is_available(),
                    "binary": list(binary) if binary else None,
                }
            )
        )
    return 0


def _select_runtime(
    args: argparse.Namespace, settings: ExtRuntimeSettings
) -> ExternalRuntime:
    runtime = get_runtime(args.runtime or settings.default_runtime)
    timeout_s = args.timeout
    if timeout_s is None and runtime.timeout_s is None:
        timeout_s = settings.timeout_s
    if timeout_s is not None:
        runtime = runtime.replace(timeout_s=timeout_s)
    return runtime


def _parse_call_args(raw_args: List[str]) -> List[Any]:
    return [json.loads(raw) for raw in raw_args]


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()
    configure_console_logging()
    if args.log_file:
        setup_file_logger(Path(args.log_file))

    settings = ExtRuntimeSettings()
    if args.config:
        settings = load_settings(Path(args.config))
        register_configured_runtimes(settings)

    if args.list_runtimes:
        return _list_runtimes()
    if not args.action or args.source is None:
        parser.error("an action and a source are required")
    if args.args and args.action != "call":
        parser.error("extra arguments are only accepted by 'call'")

    preamble = ""
    if args.preamble_file:
        try:
            preamble = Path(args.preamble_file).read_text(encoding="utf-8")
        except OSError as exc:
            parser.error(f"cannot read preamble file: {exc}")

    try:
        call_args = _parse_call_args(args.args)
    except ValueError as exc:
        parser.error(f"call arguments must be JSON: {exc}")

    try:
        runtime = _select_runtime(args, settings)
        context = runtime.compile(preamble)
        if context is None:
            print(f"{runtime.name} is not available", file=sys.stderr)
            return 2
        if args.action == "eval":
            result = context.eval(args.source)
        elif args.action == "exec":
            result = context.exec_(args.source)
        else:
            result = context.call(args.source, *call_args)
    except ExternalRuntimeError as exc:
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
