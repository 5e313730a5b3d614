"""Command-line interface for tap-tools."""

from tap_tools.cli.parser import CLIParser
from tap_tools.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
