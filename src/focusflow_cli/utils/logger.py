"""Application logger.

Everything is written to a rotating file under the platform log directory;
the terminal is reserved for command output. Set ``FOCUSFLOW_LOG_LEVEL``
(e.g. ``INFO``) to log less than the default ``DEBUG``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "focusflow_cli"
LOG_FILE_NAME = "focusflow.log"
LEVEL_ENV_VAR = "FOCUSFLOW_LOG_LEVEL"

_MAX_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

_logger: logging.Logger | None = None


def get_log_path() -> Path:
    """Where the log file lives."""
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _level_from_env() -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def get_logger() -> logging.Logger:
    """Return the application logger, creating its file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_env())
    logger.propagate = False
    if not logger.handlers:
        handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        logger.addHandler(handler)

    _logger = logger
    return _logger
