"""
Configuration - settings read from the environment.
"""

import logging
import os
import sys
from typing import Optional

# Logging
LOG_LEVEL = os.getenv("QUASH_LOG_LEVEL", "WARNING")
LOG_FORMAT = os.getenv("QUASH_LOG_FORMAT", "%(levelname)s %(name)s: %(message)s")

# Prefix for errors reported by the shell itself rather than a command
ERROR_PREFIX = "quash"

# Permission bits for files created by output redirection
REDIRECT_FILE_MODE = 0o644


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a stderr handler on the package logger.

    Args:
        level: Level name overriding QUASH_LOG_LEVEL (e.g. 'DEBUG')
    """
    logger = logging.getLogger("quash_shell")
    logger.setLevel((level or LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
