"""Global INI configuration for tap-tools.

Settings live in ``~/.config/tap-tools/settings.conf``. Missing files are
created with defaults; invalid values fall back to defaults with a warning.
Values reach the resolver only as explicit constructor arguments.
"""

import configparser
from datetime import UTC, datetime
from pathlib import Path
from typing import TypedDict

from tap_tools.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONFIG_VERSION,
    DEFAULT_API_BASE_URL,
    DEFAULT_CONFIG_SUBDIR,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_ASSET_MB,
    DEFAULT_TARGET_ARCH,
    DEFAULT_TARGET_PLATFORM,
    DEFAULT_TIMEOUT_SECONDS,
    ISO_DATETIME_FORMAT,
    KEY_API_BASE_URL,
    KEY_CONFIG_VERSION,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_LOG_LEVEL,
    KEY_MAX_ASSET_MB,
    KEY_TARGET_ARCH,
    KEY_TARGET_PLATFORM,
    KEY_TIMEOUT_SECONDS,
    SECTION_DEFAULT,
    SECTION_NETWORK,
    SECTION_RESOLVER,
    VALID_LOG_LEVELS,
)
from tap_tools.exceptions import ConfigurationError
from tap_tools.logger import get_logger

logger = get_logger(__name__)

RawConfigDict = dict[str, str | dict[str, str]]


class NetworkConfig(TypedDict):
    """Network configuration options."""

    timeout_seconds: int
    api_base_url: str


class ResolverConfig(TypedDict):
    """Asset resolution defaults."""

    target_platform: str
    target_arch: str
    max_asset_mb: int


class GlobalConfig(TypedDict):
    """Global application configuration."""

    config_version: str
    log_level: str
    console_log_level: str
    network: NetworkConfig
    resolver: ResolverConfig


def default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / CONFIG_DIR_NAME / DEFAULT_CONFIG_SUBDIR


class ConfigManager:
    """Loads and saves the global INI configuration."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Configuration directory path
                (defaults to ~/.config/tap-tools)

        """
        self.config_dir = config_dir or default_config_dir()
        self.settings_file = self.config_dir / CONFIG_FILE_NAME

    def get_default_global_config(self) -> RawConfigDict:
        """Get default configuration values as raw strings."""
        return {
            KEY_CONFIG_VERSION: CONFIG_VERSION,
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            SECTION_NETWORK: {
                KEY_TIMEOUT_SECONDS: str(DEFAULT_TIMEOUT_SECONDS),
                KEY_API_BASE_URL: DEFAULT_API_BASE_URL,
            },
            SECTION_RESOLVER: {
                KEY_TARGET_PLATFORM: DEFAULT_TARGET_PLATFORM,
                KEY_TARGET_ARCH: DEFAULT_TARGET_ARCH,
                KEY_MAX_ASSET_MB: str(DEFAULT_MAX_ASSET_MB),
            },
        }

    def _create_parser(self) -> configparser.ConfigParser:
        return configparser.ConfigParser(
            inline_comment_prefixes=("#", ";"),
            interpolation=None,
        )

    def _create_config_from_defaults(
        self, defaults: RawConfigDict
    ) -> configparser.ConfigParser:
        """Create ConfigParser populated with defaults."""
        config = self._create_parser()

        flat_defaults = {
            key: str(value)
            for key, value in defaults.items()
            if not isinstance(value, dict)
        }
        config.read_dict({SECTION_DEFAULT: flat_defaults})

        for key, value in defaults.items():
            if isinstance(value, dict):
                config.add_section(key)
                for subkey, subvalue in value.items():
                    config.set(key, subkey, str(subvalue))

        return config

    def load_global_config(self) -> GlobalConfig:
        """Load global configuration, creating the file on first run.

        Returns:
            Loaded global configuration

        Raises:
            ConfigurationError: If the settings file cannot be parsed

        """
        defaults = self.get_default_global_config()
        config = self._create_config_from_defaults(defaults)

        if self.settings_file.exists():
            try:
                config.read(self.settings_file, encoding="utf-8")
            except configparser.Error as e:
                msg = f"invalid settings file: {e}"
                raise ConfigurationError(
                    msg, target=str(self.settings_file)
                ) from e
        else:
            logger.debug("Creating default settings: %s", self.settings_file)
            self.save_global_config(self._convert_to_global_config(config))

        return self._convert_to_global_config(config)

    def _get_int(
        self,
        config: configparser.ConfigParser,
        section: str,
        key: str,
        default: int,
    ) -> int:
        raw = config.get(section, key, fallback=str(default))
        try:
            value = int(raw)
        except ValueError:
            logger.warning(
                "Invalid %s.%s value %r, using %d", section, key, raw, default
            )
            return default
        if value <= 0:
            logger.warning(
                "%s.%s must be positive, using %d", section, key, default
            )
            return default
        return value

    def _get_level(
        self, config: configparser.ConfigParser, key: str, default: str
    ) -> str:
        raw = config.get(SECTION_DEFAULT, key, fallback=default).upper()
        if raw not in VALID_LOG_LEVELS:
            logger.warning("Invalid %s %r, using %s", key, raw, default)
            return default
        return raw

    def _convert_to_global_config(
        self, config: configparser.ConfigParser
    ) -> GlobalConfig:
        """Convert parsed INI values into typed configuration."""
        network = NetworkConfig(
            timeout_seconds=self._get_int(
                config,
                SECTION_NETWORK,
                KEY_TIMEOUT_SECONDS,
                DEFAULT_TIMEOUT_SECONDS,
            ),
            api_base_url=config.get(
                SECTION_NETWORK,
                KEY_API_BASE_URL,
                fallback=DEFAULT_API_BASE_URL,
            ).rstrip("/"),
        )
        resolver = ResolverConfig(
            target_platform=config.get(
                SECTION_RESOLVER,
                KEY_TARGET_PLATFORM,
                fallback=DEFAULT_TARGET_PLATFORM,
            ).lower(),
            target_arch=config.get(
                SECTION_RESOLVER,
                KEY_TARGET_ARCH,
                fallback=DEFAULT_TARGET_ARCH,
            ).lower(),
            max_asset_mb=self._get_int(
                config,
                SECTION_RESOLVER,
                KEY_MAX_ASSET_MB,
                DEFAULT_MAX_ASSET_MB,
            ),
        )
        return GlobalConfig(
            config_version=config.get(
                SECTION_DEFAULT, KEY_CONFIG_VERSION, fallback=CONFIG_VERSION
            ),
            log_level=self._get_level(
                config, KEY_LOG_LEVEL, DEFAULT_LOG_LEVEL
            ),
            console_log_level=self._get_level(
                config, KEY_CONSOLE_LOG_LEVEL, DEFAULT_CONSOLE_LOG_LEVEL
            ),
            network=network,
            resolver=resolver,
        )

    def save_global_config(self, config: GlobalConfig) -> None:
        """Save global configuration with a commented header.

        Raises:
            ConfigurationError: If the file cannot be written

        """
        timestamp = datetime.now(tz=UTC).strftime(ISO_DATETIME_FORMAT)
        network = config["network"]
        resolver = config["resolver"]
        content = f"""# tap-tools configuration
# Last updated: {timestamp}
# Configuration version: {config["config_version"]}

[{SECTION_DEFAULT}]
{KEY_CONFIG_VERSION} = {config["config_version"]}
# File log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
{KEY_LOG_LEVEL} = {config["log_level"]}
{KEY_CONSOLE_LOG_LEVEL} = {config["console_log_level"]}

[{SECTION_NETWORK}]
# Per-request socket timeout; whole downloads may take 60x longer
{KEY_TIMEOUT_SECONDS} = {network["timeout_seconds"]}
{KEY_API_BASE_URL} = {network["api_base_url"]}

[{SECTION_RESOLVER}]
# linux, macos or windows
{KEY_TARGET_PLATFORM} = {resolver["target_platform"]}
# x86_64, arm64 or auto (host machine)
{KEY_TARGET_ARCH} = {resolver["target_arch"]}
# Refuse to download assets larger than this
{KEY_MAX_ASSET_MB} = {resolver["max_asset_mb"]}
"""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.settings_file.write_text(content, encoding="utf-8")
        except OSError as e:
            msg = f"cannot write settings: {e}"
            raise ConfigurationError(
                msg, target=str(self.settings_file)
            ) from e
