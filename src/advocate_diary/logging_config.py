"""Logging setup for the advocate's diary.

Messages go to stderr as short lines. An optional log file keeps a timestamped
record of every load, save, import and purge, which helps when a stored diary
turns out to be corrupt and was reset.
"""

import sys
from pathlib import Path

from loguru import logger

from advocate_diary.config import LOG_RETENTION, LOG_ROTATION

CONSOLE_FORMAT = "{level.icon} {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Replace all sinks: stderr at INFO (DEBUG if verbose), plus log_file if given.

    The file always records DEBUG, so diagnostics survive a run without --verbose.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)
    if log_file is not None:
        log_file = log_file.expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format=FILE_FORMAT,
            rotation=LOG_ROTATION,
            retention=LOG_RETENTION,
            encoding="utf-8",
        )
        logger.debug("Logging to {}", log_file)
