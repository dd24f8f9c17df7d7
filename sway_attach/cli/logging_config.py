"""Logging configuration for the sway-attach CLI.

Provides:
- Configurable log levels (WARNING, INFO with --verbose, DEBUG with --debug)
- Colored level names on a terminal
- Level override from LOG_LEVEL when no flag is given
"""

import logging
import sys
from typing import Optional


# Default log format
DEFAULT_FORMAT = "%(levelname)s: %(message)s"
VERBOSE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"

LOGGER_NAME = "sway_attach"


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format log record with colors."""
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    level: Optional[int] = None,
) -> logging.Logger:
    """Configure logging for the sway_attach package.

    Args:
        verbose: Enable verbose logging (INFO level)
        debug: Enable debug logging (DEBUG level)
        level: Level to use when neither flag is set (default: WARNING)

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Remove existing handlers
    logger.handlers.clear()

    if debug:
        logger.setLevel(logging.DEBUG)
        log_format = DEBUG_FORMAT
    elif verbose:
        logger.setLevel(logging.INFO)
        log_format = VERBOSE_FORMAT
    else:
        logger.setLevel(level if level is not None else logging.WARNING)
        log_format = DEBUG_FORMAT if logger.level <= logging.DEBUG else DEFAULT_FORMAT

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logger.level)

    # Use colored formatter if terminal supports it
    if sys.stderr.isatty():
        formatter = ColoredFormatter(log_format)
    else:
        formatter = logging.Formatter(log_format)

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
