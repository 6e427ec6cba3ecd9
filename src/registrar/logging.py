"""Logging setup for the Registrar service.

Modules log through ``logging.getLogger(__name__)``; everything under the
``registrar`` package propagates to the handlers installed here.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "registrar"

LOG_DIR_ENV_VAR = "REGISTRAR_LOG_DIR"
LOG_LEVEL_ENV_VAR = "REGISTRAR_LOG_LEVEL"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "registrar.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
) -> logging.Logger:
    """Send ``registrar`` logs to a rotating file and, optionally, stderr.

    Calling it again replaces the handlers from the previous call, so the
    API server can reconfigure logging without duplicating output.

    Args:
        log_dir: Directory for the log file. Falls back to $REGISTRAR_LOG_DIR,
            then to ``logs`` in the working directory.
        log_file: Log file name inside ``log_dir``.
        max_bytes: Size at which the file is rotated.
        backup_count: Number of rotated files kept.
        level: Level name. Falls back to $REGISTRAR_LOG_LEVEL, then INFO.
        console: Also log to stderr.

    Returns:
        The ``registrar`` package logger.
    """
    log_dir = Path(log_dir or os.environ.get(LOG_DIR_ENV_VAR, DEFAULT_LOG_DIR))
    log_dir.mkdir(parents=True, exist_ok=True)

    level = level or os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_dir / log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info("Logging to %s at level %s", log_dir / log_file, level.upper())
    return logger
