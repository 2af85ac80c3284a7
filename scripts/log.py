"""
Logging for the ski track analyzer.

Console output goes through Rich. Setting ``SKITRACK_LOG_FILE`` adds a
file handler that writes one JSON object per record.
"""

import json
import logging
import os

from rich.logging import RichHandler

LOG_LEVEL_ENV = "SKITRACK_LOG_LEVEL"
LOG_FILE_ENV = "SKITRACK_LOG_FILE"


class JSONFormatter(logging.Formatter):
    """Formatter that serializes log records to JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        return json.dumps(log_record)


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    """
    Return a configured logger for the given name.

    Parameters
    ----------
    name
        Logger name (typically __name__).
    level
        Log level; defaults to ``$SKITRACK_LOG_LEVEL`` or WARNING.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = RichHandler(rich_tracebacks=True)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

        log_path = os.environ.get(LOG_FILE_ENV)
        if log_path:
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())
            logger.addHandler(file_handler)

    return logger
