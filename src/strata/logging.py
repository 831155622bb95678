"""
Logging setup for Strata.

Modules log through ``logging.getLogger(__name__)``; this module only wires the
``strata`` logger to a handler for the CLI and other entry points.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

LOGGER_NAME = "strata"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a Strata module."""
    return logging.getLogger(name)


def configure_logging(level: Optional[str] = None, stream: Optional[IO[str]] = None) -> None:
    """
    Attach a stream handler to the ``strata`` logger.

    Args:
        level: Log level name (DEBUG, INFO, ...). Defaults to the configured
            ``STRATA_LOG_LEVEL``.
        stream: Output stream, stderr by default.
    """
    if level is None:
        from strata.config import get_settings

        level = get_settings().log_level

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_strata_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._strata_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
