# propextract/core/logs.py
"""
Logging setup for the extraction pipeline.

Modules log through `logging.getLogger(__name__)`; nothing is configured at
import time. `configure_logging()` is called once by entry points (CLI) to
attach a stderr handler and, when debugging, a rotating file handler.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

PACKAGE_LOGGER = "propextract"
DEFAULT_LOG_PATH = Path("logs") / "propextract.log"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "(%Y-%m-%d %H:%M:%S)"


def debug_enabled() -> bool:
    return os.getenv("PROPX_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(*, debug: bool | None = None, log_path: Path | None = None) -> logging.Logger:
    """
    Configure the package logger (idempotent).

    - stderr handler at WARNING (DEBUG when debugging)
    - rotating file handler (1 MB x 3) only when debugging
    """
    if debug is None:
        debug = debug_enabled()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Avoid duplicate handlers if reconfigured in REPL/tests
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if debug:
        path = log_path or DEFAULT_LOG_PATH
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        except OSError as exc:
            # Keep console logging when the file cannot be opened.
            logger.warning("Could not open log file %s: %s", path, exc)

    return logger


__all__ = ["PACKAGE_LOGGER", "DEFAULT_LOG_PATH", "configure_logging", "debug_enabled"]
