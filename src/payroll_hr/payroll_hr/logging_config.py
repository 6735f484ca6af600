"""Logging setup shared by the Flask app and scripts."""
from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_MARK = "_payroll_hr_handler"

# Package root logger, whichever import path the package was loaded under.
PACKAGE_LOGGER = __name__.rpartition(".")[0] or "payroll_hr"


def configure_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Attach stream (and optional file) handlers to the package logger.

    Safe to call more than once: handlers installed by a previous call are replaced.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, _HANDLER_MARK, False):
            logger.removeHandler(h)
            h.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for h in handlers:
        h.setFormatter(formatter)
        setattr(h, _HANDLER_MARK, True)
        logger.addHandler(h)

    return logger
