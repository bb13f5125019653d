from __future__ import annotations

import logging

from .constants import DEFAULT_LOG_FORMAT

PACKAGE_LOGGER = __name__.rsplit(".", 2)[0]


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger (idempotent)."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    package_logger.setLevel(level)

    if not any(getattr(h, "_worktime_handler", False) for h in package_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        handler._worktime_handler = True
        package_logger.addHandler(handler)
    return package_logger
