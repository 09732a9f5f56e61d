"""
Logger Module

One logger per component ("AttendanceLedger", "CsvIO", ...). Each writes
INFO and above to stderr, so command output on stdout stays clean, and
everything to the attendance log file.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FILE_ENV = "ATTENDANCE_LOG_FILE"
_LOG_FILE_NAME = "attendance.log"

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)

# Console level shared by every component logger
_console_level = logging.INFO


def get_log_path(log_file: Optional[str] = None) -> Path:
    """Resolve the log file: explicit argument, then $ATTENDANCE_LOG_FILE, then project root."""
    if log_file:
        return Path(log_file)
    env_path = os.environ.get(LOG_FILE_ENV)
    if env_path:
        return Path(env_path)
    return Path(__file__).parent.parent.parent / _LOG_FILE_NAME


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_console_level)
    handler.setFormatter(_FORMATTER)
    return handler


def _file_handler(log_path: Path) -> logging.Handler:
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_FORMATTER)
    return handler


def get_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """
    Get or create a component logger.

    Args:
        name: Component name, e.g. "AttendanceLedger"
        log_file: Log file path; defaults to get_log_path()

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.addHandler(_console_handler())

    log_path = get_log_path(log_file)
    try:
        logger.addHandler(_file_handler(log_path))
    except OSError as e:
        logger.warning(f"Cannot open log file {log_path}, logging to console only: {e}")

    return logger


def set_console_level(level: int) -> None:
    """Change the console threshold of every component logger, present and future."""
    global _console_level
    _console_level = level
    for logger in logging.Logger.manager.loggerDict.values():
        if not isinstance(logger, logging.Logger):
            continue
        for handler in logger.handlers:
            if type(handler) is logging.StreamHandler:
                handler.setLevel(level)
