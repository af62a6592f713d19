# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Logging helpers (console setup, rotating logs)."""

from __future__ import annotations

import logging

from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_console_logging(level: int = logging.INFO) -> None:
    """Install a basic console handler unless logging is already set up."""

    root = logging.getLogger()
    if root.handlers:
        return
    # The handler level keeps file-only DEBUG records off the console.
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)


def setup_file_logger(
    log_file: Path, name: str = "extruntime", level: int = logging.DEBUG
) -> logging.Logger:
    """Configure a rotating file logger (idempotent per file)."""

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    marker = str(log_file)
    if not any(
        isinstance(handler, RotatingFileHandler)
        and getattr(handler, "_tap_tag", None) == marker
        for handler in logger.handlers
    ):
        handler = RotatingFileHandler(
            log_file, maxBytes=2_000_000, backupCount=3
        )
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        )
        handler._tap_tag = marker  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
