"""Handler creation for the logging system.

Console and rotating file handlers are attached to a QueueListener; the
root ``tap_tools`` logger only carries a QueueHandler, so emitting a
record never blocks the event loop on file I/O.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tap_tools.constants import (
    LOG_BACKUP_COUNT,
    LOG_CONSOLE_DATE_FORMAT,
    LOG_CONSOLE_FORMAT,
    LOG_FILE_DATE_FORMAT,
    LOG_FILE_FORMAT,
    LOG_ROOT_NAME,
    LOG_ROTATION_THRESHOLD_BYTES,
)
from tap_tools.exceptions import ConfigurationError
from tap_tools.logger.formatters import HybridConsoleFormatter
from tap_tools.logger.state import LoggerState


def _create_console_handler(console_level: str) -> logging.StreamHandler:
    """Create console handler with hybrid formatting.

    Args:
        console_level: Log level for console (e.g., "INFO", "WARNING")

    Returns:
        Configured StreamHandler writing to stderr

    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        HybridConsoleFormatter(
            LOG_CONSOLE_FORMAT,
            datefmt=LOG_CONSOLE_DATE_FORMAT,
        )
    )
    console_handler.setLevel(getattr(logging, console_level, logging.WARNING))
    return console_handler


def _create_file_handler(
    log_file: Path, file_level: str
) -> RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        file_level: Log level for file (e.g., "DEBUG", "INFO")

    Returns:
        Configured RotatingFileHandler

    Raises:
        ConfigurationError: If the log directory or file cannot be opened

    """
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_ROTATION_THRESHOLD_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        msg = f"Failed to setup file logging: {e}"
        raise ConfigurationError(msg, target=str(log_file)) from e

    file_handler.setFormatter(
        logging.Formatter(LOG_FILE_FORMAT, datefmt=LOG_FILE_DATE_FORMAT)
    )
    file_handler.setLevel(getattr(logging, file_level, logging.INFO))
    return file_handler


def setup_root_logger(
    state: LoggerState,
    console_level: str,
    file_level: str,
    log_file: Path,
    enable_file_logging: bool,  # noqa: FBT001
) -> None:
    """Initialize root logger with handlers via QueueListener.

    Called exactly once per process (or after clear_logger_state()).

    Args:
        state: Logger state object
        console_level: Console log level
        file_level: File log level
        log_file: Path to log file
        enable_file_logging: Whether to attach the rotating file handler

    Raises:
        ConfigurationError: If handler setup fails

    """
    root_logger = logging.getLogger(LOG_ROOT_NAME)
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.propagate = False

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [_create_console_handler(console_level)]
    if enable_file_logging:
        handlers.append(_create_file_handler(log_file, file_level))

    root_logger.addHandler(
        state.start(handlers, log_file if enable_file_logging else None)
    )
