"""Logging setup.

The terminal belongs to the screen compositor while the editor runs, so log
records only ever go to a file (or nowhere).
"""

from __future__ import annotations

import logging
import logging.handlers

from .config import Settings

LOGGER_NAME = "termedit"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(settings: Settings) -> logging.Logger:
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = False

    if not settings.log_file:
        root.addHandler(logging.NullHandler())
        return root

    level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    handler = logging.handlers.RotatingFileHandler(
        settings.log_file, maxBytes=1024 * 1024, backupCount=2, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    return root
