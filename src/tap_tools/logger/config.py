"""Configuration loading and updating for the logging system."""

import logging
import os
from collections.abc import Mapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tap_tools.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    LOG_DIR_ENV_VAR,
    LOG_FILE_NAME,
)

if TYPE_CHECKING:
    from tap_tools.logger.state import LoggerState


def load_log_settings() -> tuple[str, str, Path]:
    """Load bootstrap console level, file level, and file path.

    The log directory can be redirected with ``TAP_TOOLS_LOG_DIR``; the test
    suite sets it so pytest runs never write under the user's home.

    Returns:
        Tuple of (console_level, file_level, log_path)

    """
    env_log_dir = os.getenv(LOG_DIR_ENV_VAR)
    if env_log_dir:
        log_path = Path(env_log_dir).expanduser() / LOG_FILE_NAME
    else:
        log_path = (
            Path.home()
            / CONFIG_DIR_NAME
            / DEFAULT_CONFIG_SUBDIR
            / "logs"
            / LOG_FILE_NAME
        )

    return DEFAULT_CONSOLE_LOG_LEVEL, DEFAULT_LOG_LEVEL, log_path


def update_logger_from_config(
    state: "LoggerState", config: Mapping[str, Any]
) -> None:
    """Update handler levels from loaded global config.

    Only handler levels change; handlers are never added or removed.

    Args:
        state: Logger state object
        config: Global configuration holding ``log_level`` and
            ``console_log_level``

    """
    console_level = getattr(
        logging,
        str(config.get("console_log_level", DEFAULT_CONSOLE_LOG_LEVEL)),
        logging.WARNING,
    )
    file_level = getattr(
        logging,
        str(config.get("log_level", DEFAULT_LOG_LEVEL)),
        logging.INFO,
    )

    for handler in state.handlers:
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(file_level)
        elif isinstance(handler, logging.StreamHandler):
            handler.setLevel(console_level)

    state.config_applied = True
