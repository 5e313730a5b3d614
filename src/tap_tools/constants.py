"""Centralized constants module for tap-tools.

This module serves as the single source of truth for shared constants
across the tap-tools codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from tap_tools.constants import CONFIG_VERSION
"""

from typing import Final

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_VERSION: Final[str] = "1.0.0"
CONFIG_FILE_NAME: Final[str] = "settings.conf"
CONFIG_DIR_NAME: Final[str] = ".config"
DEFAULT_CONFIG_SUBDIR: Final[str] = "tap-tools"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "WARNING"

DEFAULT_TIMEOUT_SECONDS: Final[int] = 10
DEFAULT_API_BASE_URL: Final[str] = "https://api.github.com"
DEFAULT_TARGET_PLATFORM: Final[str] = "linux"
DEFAULT_TARGET_ARCH: Final[str] = "auto"
DEFAULT_MAX_ASSET_MB: Final[int] = 512

ISO_DATETIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"
SECTION_RESOLVER: Final[str] = "resolver"

KEY_CONFIG_VERSION: Final[str] = "config_version"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"
KEY_API_BASE_URL: Final[str] = "api_base_url"
KEY_TARGET_PLATFORM: Final[str] = "target_platform"
KEY_TARGET_ARCH: Final[str] = "target_arch"
KEY_MAX_ASSET_MB: Final[str] = "max_asset_mb"

VALID_LOG_LEVELS: Final[tuple[str, ...]] = (
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
)

# =============================================================================
# Logging Constants
# =============================================================================

LOG_DIR_ENV_VAR: Final[str] = "TAP_TOOLS_LOG_DIR"
LOG_FILE_NAME: Final[str] = "tap-tools.log"
LOG_ROOT_NAME: Final[str] = "tap_tools"

LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024  # 1 MB
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# =============================================================================
# Network Constants
# =============================================================================

CHUNK_SIZE: Final[int] = 65536
GITHUB_API_ACCEPT: Final[str] = "application/vnd.github+json"
GITHUB_API_VERSION: Final[str] = "2022-11-28"
USER_AGENT: Final[str] = "tap-tools"

# =============================================================================
# Asset Resolution Constants
# =============================================================================

# Release-wide checksum files, most preferred first
UPSTREAM_CHECKSUM_NAMES: Final[tuple[str, ...]] = (
    "checksums.txt",
    "sha256sums.txt",
    "SHA256SUMS",
    "SHA256SUMS.txt",
    "checksums.sha256",
)

# Per-asset sidecar suffixes (e.g. tool.tar.gz.sha256)
SIDECAR_CHECKSUM_SUFFIXES: Final[tuple[str, ...]] = (
    ".sha256",
    ".sha256sum",
)

SHA256_HEX_LENGTH: Final[int] = 64
