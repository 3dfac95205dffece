"""Logging setup for the frameset CLI.

Log records go to stderr so that --json output on stdout stays parseable.
Record names are shown relative to the package ("restore", "virtual_host")
and the level name is colored when stderr is a terminal and NO_COLOR is
unset.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Optional


PACKAGE_LOGGER = "frameset"

# Quiet runs only show problems; restore failures are logged as errors
QUIET_FORMAT = "%(levelname)s: %(message)s"
# Restore steps per module
VERBOSE_FORMAT = "%(levelname)s %(shortname)s: %(message)s"
# Host calls and filter decisions, with source lines
DEBUG_FORMAT = "%(relativeCreated)6.0fms %(levelname)s %(shortname)s:%(lineno)d: %(message)s"


class FramesetFormatter(logging.Formatter):
    """Formatter adding a package-relative `shortname` and optional colors."""

    COLORS = {
        logging.DEBUG: '\033[2m',       # Dim
        logging.INFO: '\033[36m',       # Cyan
        logging.WARNING: '\033[33m',    # Yellow
        logging.ERROR: '\033[31m',      # Red
        logging.CRITICAL: '\033[1;31m', # Bold red
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str, color: bool = False):
        super().__init__(fmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(PACKAGE_LOGGER + "."):
            name = name[len(PACKAGE_LOGGER) + 1:]
        record.shortname = name

        levelname = record.levelname
        if self.color and record.levelno in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelno]}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def use_color(stream) -> bool:
    """Color output only on terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    stream=None,
    color: Optional[bool] = None,
) -> logging.Logger:
    """Configure the frameset package logger.

    Args:
        verbose: Log restore steps (INFO)
        debug: Log host calls and filter decisions (DEBUG); wins over verbose
        stream: Output stream (default: stderr)
        color: Force colors on or off (default: detect from stream)

    Returns:
        The package logger
    """
    stream = stream if stream is not None else sys.stderr

    if debug:
        level, log_format = logging.DEBUG, DEBUG_FORMAT
    elif verbose:
        level, log_format = logging.INFO, VERBOSE_FORMAT
    else:
        level, log_format = logging.WARNING, QUIET_FORMAT

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.setLevel(level)
    # Keep records out of the root logger's handlers
    logger.propagate = False

    handler = logging.StreamHandler(stream)
    handler.setFormatter(FramesetFormatter(log_format, use_color(stream) if color is None else color))
    logger.addHandler(handler)
    return logger


@contextmanager
def log_timing(operation: str, logger: logging.Logger):
    """Log how long OPERATION took, and whether it raised."""
    start = time.perf_counter()
    logger.debug(f"{operation} started")
    try:
        yield
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(f"{operation} failed after {elapsed_ms:.1f}ms")
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{operation} took {elapsed_ms:.1f}ms")
