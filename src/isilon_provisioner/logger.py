"""Module to create a logger instance."""

import logging
import sys
from logging import Formatter, Logger, StreamHandler

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class StdoutFilter(logging.Filter):
    """Let through only records up to WARNING."""

    def filter(self, record):
        return record.levelno <= logging.WARNING


class StderrFilter(logging.Filter):
    """Let through only records from ERROR upwards."""

    def filter(self, record):
        return record.levelno >= logging.ERROR


def _has_handler(logger: Logger, filter_type: type[logging.Filter]) -> bool:
    return any(
        isinstance(f, filter_type) for h in logger.handlers for f in h.filters
    )


def create_logger(name: str, level: str | int | None = None) -> Logger:
    """Create or retrieve a logger writing to stdout and stderr.

    Messages with level lower or equal then WARNING go to stdout, the others to
    stderr. Calling this function again with the same name does not duplicate the
    handlers, it only updates the level.

    Args:
        name (str): logger name.
        level (str | int | None): logging level. When None the level is untouched.

    Returns:
        Logger: the configured logger.

    """
    logger = logging.getLogger(name)
    error_msg = None
    if level is not None:
        try:
            logger.setLevel(level.upper() if isinstance(level, str) else level)
        except ValueError:
            error_msg = f"Invalid log level: {level}"

    formatter = Formatter(LOG_FORMAT)
    if not _has_handler(logger, StdoutFilter):
        stdout_handler = StreamHandler(sys.stdout)
        stdout_handler.setFormatter(formatter)
        stdout_handler.addFilter(StdoutFilter())
        logger.addHandler(stdout_handler)
    if not _has_handler(logger, StderrFilter):
        stderr_handler = StreamHandler()
        stderr_handler.setFormatter(formatter)
        stderr_handler.addFilter(StderrFilter())
        logger.addHandler(stderr_handler)

    if error_msg is not None:
        logger.error(error_msg)

    return logger
