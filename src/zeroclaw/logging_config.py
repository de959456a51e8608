"""Logging setup for the zeroclaw CLI.

Output goes to a rotating file under the home root so that log records
never interleave with the full-screen wizard or the rich console.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

LOG_LEVEL_ENV = "ZEROCLAW_LOG_LEVEL"
LOG_FILENAME = "zeroclaw.log"


def _file_handler(log_dir: Path, level: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_dir / LOG_FILENAME,
        maxBytes=2 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_logging(home_dir: Path, level_name: str | None = None) -> Path:
    """Configure the root logger with a file handler and return the log path."""
    level_name = (level_name or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger()
    root.setLevel(level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    log_dir = home_dir / "logs"
    try:
        handler = _file_handler(log_dir, level)
    except OSError:
        root.addHandler(logging.NullHandler())
        return log_dir / LOG_FILENAME
    handler.setFormatter(formatter)
    root.addHandler(handler)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
    return log_dir / LOG_FILENAME
