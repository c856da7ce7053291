"""
Logging Configuration

Library modules only create module-level loggers. Scripts and demos call
setup_logging() once to route the 'orbweb' namespace to the console, where
records line up under the demos' indented progress output, and optionally
to a timestamped log file.
"""
import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "orbweb"

# Indented like the demos' "   ..." progress lines
CONSOLE_FORMAT = "   [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Route the package's log records to the console and, optionally, a file.

    Calling it again replaces the handlers from the previous call.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: If given, records are also written here (overwritten per run)
        stream: Console stream; defaults to stdout so logs interleave with prints

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
