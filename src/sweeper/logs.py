from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TextIO

from sweeper.errors import LogSetupError

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LOGGER_NAME = "sweeper"
LOG_FORMAT = (
    "%(asctime)s.%(msecs)03d %(levelname).4s (%(name)s-%(process)d) "
    "[%(funcName)s %(filename)s:%(lineno)d] %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SI_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB"]


def log_file_name(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"files-deleted.{now.strftime('%Y-%m-%d-%H')}.log"


def configure_logging(
    log_dir: Path | None,
    *,
    level: int = logging.INFO,
    now: datetime | None = None,
    stream: TextIO | None = None,
) -> Path | None:
    """Attach per-run handlers to the ``sweeper`` logger.

    The log file is opened in append mode, so several runs within the same
    hour share one file. The stream handler only receives errors. Returns the
    log file path, or None when ``log_dir`` is None.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)

    log_path = None
    if log_dir is not None:
        log_path = Path(log_dir) / log_file_name(now)
        try:
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        except OSError as exc:
            raise LogSetupError(f"Cannot open log file {log_path}: {exc}") from exc
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(file_handler)

    if stream is not None:
        stream_handler = logging.StreamHandler(stream)
        stream_handler.setLevel(logging.ERROR)
        stream_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(stream_handler)
    return log_path


def format_bytes(value: int) -> str:
    """Human-readable size using SI units (1 kB = 1000 B)."""
    num = float(max(0, value))
    for unit in _SI_UNITS:
        if num < 1000.0 or unit == _SI_UNITS[-1]:
            if unit == "B":
                return f"{int(num)} B"
            return f"{num:.0f} {unit}" if num >= 10 else f"{num:.1f} {unit}"
        num /= 1000.0
    return f"{value} B"
