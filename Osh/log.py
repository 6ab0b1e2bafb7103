"""Process-level logging setup."""

import sys

from loguru import logger

from config import LOG_LEVEL

LOG_FORMAT = "{time:HH:mm:ss.SSS} | {level:<7} | {name}:{function}:{line} | {message}"

_configured_level = None


def configure_logging(level=None):
    """Configure loguru once; calling again with another level reconfigures."""
    global _configured_level
    level = (level or LOG_LEVEL).upper()
    if level == _configured_level:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    _configured_level = level
