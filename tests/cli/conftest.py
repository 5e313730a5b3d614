"""Pytest configuration and fixtures for CLI tests."""

from pathlib import Path

import pytest

from tap_tools.cli import CLIRunner
from tap_tools.config import ConfigManager


@pytest.fixture
def runner(tmp_path: Path) -> CLIRunner:
    """Provide a CLI runner with settings in a temp directory."""
    return CLIRunner(ConfigManager(tmp_path / "config"))
