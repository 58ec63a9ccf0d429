"""Minimal logging setup.

Every module obtains its logger through `get_logger(__name__)` so output goes
to stderr with one shared format.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional


def get_logger(name: str = "construct-static", level: Optional[str] = None) -> logging.Logger:
    """Create (or return) a configured logger.

    Args:
        name: Logger name.
        level: Optional log level string (e.g. "INFO"). If omitted, keeps existing.

    Returns:
        Configured logger writing to stderr.
    """

    logger = logging.getLogger(name)
    logger.propagate = False

    if level is not None:
        logger.setLevel(level.upper())
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(
            logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)

    return logger


def set_package_level(level: str) -> None:
    """Apply `level` to every logger already created under `construct_static`."""

    manager = logging.Logger.manager
    for logger_name, logger in list(manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if logger_name == "construct_static" or logger_name.startswith("construct_static."):
            logger.setLevel(level.upper())
