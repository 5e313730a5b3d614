"""Public API of the tap-tools logging system.

- setup_logging(): Configure the QueueHandler architecture once
- get_logger(): Module-level convenience wrapper
- flush_all_handlers(): Drain the queue and flush handlers
- clear_logger_state(): Reset everything (tests only)
"""

import atexit
import contextlib
import logging
import time
from pathlib import Path

from tap_tools.constants import LOG_ROOT_NAME
from tap_tools.logger.config import load_log_settings
from tap_tools.logger.handlers import setup_root_logger
from tap_tools.logger.state import get_state

_FLUSH_TIMEOUT_SECONDS = 5.0


def flush_all_handlers() -> None:
    """Flush all handlers in the QueueListener.

    Waits for the queue to drain (bounded), then flushes each handler so
    pending records reach the console and the log file.
    """
    state = get_state()
    if not state.root_initialized:
        return

    state.drain(_FLUSH_TIMEOUT_SECONDS)
    # Give the listener thread a moment to hand off the last record
    time.sleep(0.05)

    for handler in state.handlers:
        with contextlib.suppress(OSError, ValueError):
            handler.flush()


def _cleanup_logging() -> None:
    """Stop the QueueListener on interpreter exit."""
    state = get_state()
    if state.root_initialized:
        flush_all_handlers()
        state.stop()


atexit.register(_cleanup_logging)


def setup_logging(
    name: str = LOG_ROOT_NAME,
    console_level: str | None = None,
    file_level: str | None = None,
    log_file: Path | None = None,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Configure logging and return the requested logger.

    The root ``tap_tools`` logger is initialized exactly once; child loggers
    such as ``tap_tools.core.fetcher`` propagate to it.

    Args:
        name: Logger name, typically __name__
        console_level: Console log level ("DEBUG", "INFO", "WARNING")
        file_level: File log level ("DEBUG", "INFO")
        log_file: Path to log file
        enable_file_logging: Whether to enable file logging

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If file logging setup fails

    """
    state = get_state()
    with state.lock:
        if not state.root_initialized:
            cfg_console, cfg_file, cfg_path = load_log_settings()
            setup_root_logger(
                state,
                console_level or cfg_console,
                file_level or cfg_file,
                log_file or cfg_path,
                enable_file_logging,
            )

    return logging.getLogger(name)


def get_logger(
    name: str = LOG_ROOT_NAME,
    enable_file_logging: bool = True,  # noqa: FBT001, FBT002
) -> logging.Logger:
    """Get a logger, initializing the root logger on first use.

    Usage:
        >>> logger = get_logger(__name__)
        >>> logger.info("Selected %s", asset.name)

    """
    return setup_logging(name=name, enable_file_logging=enable_file_logging)


def clear_logger_state() -> None:
    """Clear global logger state for testing purposes.

    Stops the QueueListener, closes handlers and resets flags so the next
    get_logger() call starts from scratch.
    """
    state = get_state()
    with state.lock:
        flush_all_handlers()
        state.stop()

        root_logger = logging.getLogger(LOG_ROOT_NAME)
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)
