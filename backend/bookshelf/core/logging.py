"""Logging for the ``bookshelf`` logger tree.

Every module logs through ``get_logger(<area>)``, a child of the
``bookshelf`` logger. Only that logger gets a handler, and it does not
propagate, so uvicorn's own access and error loggers stay separate.
"""
import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = "bookshelf"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Color the level and logger name for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    NAME_COLOR = "\033[34m"      # Blue
    RESET = "\033[0m"

    def format(self, record):
        # Work on a copy so other handlers see the plain record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        record.name = f"{self.NAME_COLOR}{record.name}{self.RESET}"
        return super().format(record)


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> logging.Logger:
    """Install a single console handler on the ``bookshelf`` logger.

    Colors are used only when the stream is a terminal. Calling this again
    replaces the previous handler.
    """
    stream = stream or sys.stdout
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())

    isatty = getattr(stream, "isatty", None)
    formatter_class = ColoredFormatter if isatty and isatty() else logging.Formatter
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))

    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one area of the app, e.g. ``get_logger("api.books")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


setup_logging()
