"""Logging utilities for tap-tools.

Structured logging with:
- Hybrid console output (bare INFO messages, colored structured warnings)
- File rotation using RotatingFileHandler
- Non-blocking emission via QueueHandler/QueueListener
- Hierarchical logger naming (tap_tools.core.fetcher, ...)

Architecture:
    Application -> QueueHandler -> Queue -> QueueListener thread
                                                 |
                                       Console + File handlers

Rules for contributors:
    1. Always use: logger = get_logger(__name__)
    2. Never call logging.basicConfig()
    3. Never attach handlers to child loggers
    4. Use %-formatting in log calls, never f-strings

Environment Variables:
    TAP_TOOLS_LOG_DIR: Redirects the log file (used by the test suite)
"""

from collections.abc import Mapping
from typing import Any

from tap_tools.logger.config import (
    update_logger_from_config as _update_config,
)
from tap_tools.logger.formatters import (
    ColoredConsoleFormatter,
    HybridConsoleFormatter,
    SimpleConsoleFormatter,
)
from tap_tools.logger.logger import (
    clear_logger_state,
    flush_all_handlers,
    get_logger,
    setup_logging,
)
from tap_tools.logger.state import get_state


def update_logger_from_config(config: Mapping[str, Any]) -> None:
    """Apply log levels from the loaded global configuration."""
    _update_config(get_state(), config)


__all__ = [
    "ColoredConsoleFormatter",
    "HybridConsoleFormatter",
    "SimpleConsoleFormatter",
    "clear_logger_state",
    "flush_all_handlers",
    "get_logger",
    "get_state",
    "setup_logging",
    "update_logger_from_config",
]
