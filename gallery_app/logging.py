"""Logging initialization utilities using loguru."""

from __future__ import annotations

import sys
import threading
from pathlib import Path

from loguru import logger

_init_lock = threading.Lock()
_configured = False


def init_logging(level: str = "INFO", log_dir: str | Path | None = None) -> None:
    """Send logs to stderr and, if `log_dir` is given, to a rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), backtrace=False, diagnose=False)

    if log_dir is None:
        return
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    logger.add(
        str(log_path / "gallery_{time:YYYYMMDD}.log"),
        rotation="10 MB",
        retention="10 days",
        enqueue=True,
        backtrace=False,
        diagnose=False,
        level=level.upper(),
    )


def init_logging_once(level: str = "INFO", log_dir: str | Path | None = None) -> bool:
    """Run init_logging() for the first caller only.

    Sinks belong to the whole process, and every browser session starts in
    its own thread. Returns True if this call did the setup.
    """
    global _configured
    with _init_lock:
        if _configured:
            return False
        init_logging(level, log_dir)
        _configured = True
        return True
