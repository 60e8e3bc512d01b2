"""Logging configuration for ctb-archive.

Everything goes to stderr so that command output on stdout (JSON in
particular) stays machine-readable. A log file, when given, always gets
the full debug trace.
"""

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = "{level.icon} {message}"
_DEBUG_FORMAT = "<dim>{time:HH:mm:ss}</dim> {level: <7} <cyan>{name}</cyan> {message}"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{line} | {message}"


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Send logs to stderr, and to ``log_file`` at debug level if given."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_DEBUG_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=_CONSOLE_FORMAT)
    if log_file is not None:
        logger.add(log_file, level="DEBUG", format=_FILE_FORMAT, encoding="utf-8")
