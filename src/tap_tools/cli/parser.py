"""CLI argument parser for tap-tools.

Defines the ``resolve`` and ``inspect`` subcommands and the global flags.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from typing import Any

from tap_tools.constants import VALID_LOG_LEVELS


class CLIParser:
    """Command-line argument parser for tap-tools."""

    def __init__(self, global_config: dict[str, Any]) -> None:
        """Initialize the CLI parser with global configuration.

        Args:
            global_config: Loaded global configuration; resolver settings
                become the option defaults.

        """
        self.global_config = global_config

    def parse_args(self, argv: Sequence[str] | None = None) -> Namespace:
        """Parse command-line arguments.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Parsed arguments namespace.

        """
        parser = self.build_parser()
        return parser.parse_args(argv)

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the fully configured argument parser."""
        parser = self._create_main_parser()
        self._add_global_options(parser)
        self._add_subcommands(parser)
        return parser

    def _create_main_parser(self) -> argparse.ArgumentParser:
        return argparse.ArgumentParser(
            prog="tap-tools",
            description="Resolve GitHub release assets for Homebrew taps",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Resolve the latest release for Linux x86_64
  %(prog)s resolve https://github.com/junegunn/fzf

  # Resolve a tagged release for arm64 and save the descriptor
  %(prog)s resolve junegunn/fzf --tag v0.55.0 --arch arm64 -o fzf.json

  # Inspect a downloaded tarball
  %(prog)s inspect ./fzf-0.55.0-linux_amd64.tar.gz --name fzf

Set GITHUB_TOKEN to raise the API rate limit.
            """,
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--version",
            action="store_true",
            help="Show tap-tools version and exit",
        )
        parser.add_argument(
            "--log-level",
            choices=VALID_LOG_LEVELS,
            type=str.upper,
            help="Console log level for this run",
        )

    def _add_subcommands(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands"
        )
        self._add_resolve_command(subparsers)
        self._add_inspect_command(subparsers)

    def _add_resolve_command(
        self, subparsers: "argparse._SubParsersAction[Any]"
    ) -> None:
        resolver_cfg = self.global_config.get("resolver", {})
        resolve_parser = subparsers.add_parser(
            "resolve",
            help="Select, download and inspect a release asset",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s owner/repo
  %(prog)s https://github.com/owner/repo --tag v1.2.3
  %(prog)s owner/repo --platform macos --arch arm64
            """,
        )
        resolve_parser.add_argument(
            "repo", help="GitHub repository (owner/repo or URL)"
        )
        resolve_parser.add_argument(
            "--tag", help="Release tag (default: latest release)"
        )
        resolve_parser.add_argument(
            "--name",
            help="Binary name to look for (default: repository name)",
        )
        resolve_parser.add_argument(
            "--platform",
            default=resolver_cfg.get("target_platform", "linux"),
            help="Target platform: linux, macos or windows",
        )
        resolve_parser.add_argument(
            "--arch",
            default=resolver_cfg.get("target_arch", "auto"),
            help="Target architecture: x86_64, arm64 or auto",
        )
        resolve_parser.add_argument(
            "-o",
            "--output",
            help="Write the descriptor JSON to this file",
        )
        resolve_parser.add_argument(
            "--no-verify",
            action="store_true",
            help="Skip upstream checksum verification",
        )

    def _add_inspect_command(
        self, subparsers: "argparse._SubParsersAction[Any]"
    ) -> None:
        inspect_parser = subparsers.add_parser(
            "inspect",
            help="List a local archive and detect its binary and icons",
        )
        inspect_parser.add_argument("archive", help="Path to archive file")
        inspect_parser.add_argument(
            "--name",
            help="Binary name to look for (default: archive name prefix)",
        )
