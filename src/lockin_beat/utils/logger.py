"""Application logger.

All records go to one rotating file under platformdirs' ``user_log_dir``.
Modules ask for a component logger (``get_logger("session")``), which is a
child of the ``lockin_beat`` logger and shares its handler, so each line names
the part of the app that wrote it.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "lockin_beat"
_LOG_FILE = "lockin.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3
_LEVEL_ENV = "LOCKIN_LOG_LEVEL"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(_APP_NAME)) / _LOG_FILE


def _configure() -> logging.Logger:
    logger = logging.getLogger(_APP_NAME)
    level = os.environ.get(_LEVEL_ENV, "DEBUG").upper()
    logger.setLevel(getattr(logging, level, logging.DEBUG))
    logger.propagate = False

    path = log_file_path()
    for existing in logger.handlers:
        if isinstance(existing, logging.handlers.RotatingFileHandler) and (
            existing.baseFilename == os.path.abspath(path)
        ):
            return logger

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger.addHandler(handler)
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or the child logger for ``component``.

    The file handler is set up on first use.
    """
    global _logger
    if _logger is None:
        _logger = _configure()
    if component:
        return _logger.getChild(component)
    return _logger
