"""
Logging configuration for the assocarray package.

The package logs through standard-library loggers named after each module.
By default nothing is emitted (a NullHandler is attached); set
``ASSOCARRAY_USE_DEV_LOGGER=true`` to stream records to stderr, and
``ASSOCARRAY_LOGGING_LEVEL`` to pick the level.
"""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = (
    "%(asctime)s %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] - %(message)s"
)


def get_level() -> str:
    """Get the default logging level for assocarray."""
    return os.getenv("ASSOCARRAY_LOGGING_LEVEL", "WARNING")


def get_handler(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Handler:
    """Get the default logging handler for assocarray."""
    handler = (
        logging.StreamHandler()
        if os.getenv("ASSOCARRAY_USE_DEV_LOGGER", "").lower() == "true"
        else logging.NullHandler()
    )
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level or get_level())
    return handler


def configure_root_logger(
    level: Optional[str] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """Configure the assocarray package logger and return it."""
    level = (level or get_level()).upper()
    logger = logging.getLogger("assocarray")
    logger.setLevel(level)
    # Replace handlers from an earlier call instead of stacking them.
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.addHandler(get_handler(level=level, fmt=fmt))
    return logger
