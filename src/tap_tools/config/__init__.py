"""Configuration management for tap-tools."""

from tap_tools.config.settings import (
    ConfigManager,
    GlobalConfig,
    NetworkConfig,
    ResolverConfig,
    default_config_dir,
)

__all__ = [
    "ConfigManager",
    "GlobalConfig",
    "NetworkConfig",
    "ResolverConfig",
    "default_config_dir",
]
