"""Centralized logging configuration for the tilemap generator.

Usage:
    from logging_config import setup_logging
    setup_logging(logging.INFO, "generator.log")  # Call once at startup

All loggers of the application propagate to the root logger. The console gets the given level, an optional rotating
log file gets everything down to DEBUG.
"""

from datetime import datetime
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

# 5 MB per file, 3 backup files.
MAX_LOG_SIZE: int = 5 * 1024 * 1024
BACKUP_COUNT: int = 3

CONSOLE_FORMAT: str = "%(levelname)-8s | %(name)-25s | %(message)s"
FILE_FORMAT: str = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-25s | %(funcName)-25s | %(message)s"
FILE_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(console_level: int = logging.WARNING, log_file: Path | str | None = None) -> Path | None:
    """Configures the root logger with a console handler and an optional rotating file handler.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        console_level: The level of messages written to stderr.
        log_file: If given, all messages (DEBUG and up) are additionally written to this file.

    Returns:
        The path of the log file, or None if logging to a file is disabled.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file is None:
        # No handler accepts records below the console level.
        root_logger.setLevel(console_level)
        return None

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(log_path, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    root_logger.addHandler(file_handler)

    root_logger.info("Logging initialized at %s, log file: %s", datetime.now().isoformat(), log_path.absolute())
    return log_path
