"""Logging setup for minibar.

Textual owns the terminal, so diagnostics go to a rotating file.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / f"{APP_NAME}.log"


def build_rotating_handler(
    log_file: Path,
    *,
    retention: int = 3,
    max_bytes: int = 512 * 1024,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Handler:
    """Construct a rotating file handler for the diagnostic log."""
    retention = max(1, retention)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=retention - 1,
        encoding="utf-8",
    )
    handler.setFormatter(formatter or logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Handler:
    """Route the ``minibar`` logger to a rotating file.

    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(APP_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, "_minibar_handler", False):
            logger.removeHandler(existing)
            existing.close()

    handler = build_rotating_handler(log_file or default_log_path())
    handler._minibar_handler = True
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return handler
