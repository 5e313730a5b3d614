"""CLI runner for tap-tools.

Loads configuration, routes the parsed command to its handler and turns
tap-tools errors into a logged message and exit status 1.
"""

import os
import re
import sys
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import orjson

from tap_tools import __version__
from tap_tools.config import ConfigManager
from tap_tools.core.archive import list_entries, read_entry
from tap_tools.core.checksum import compute_sha256
from tap_tools.core.fetcher import ContentFetcher
from tap_tools.core.github import ReleaseClient
from tap_tools.core.http_session import create_http_session
from tap_tools.core.pipeline import PackageResolver
from tap_tools.domain.binary import detect_binaries, select_best_binary
from tap_tools.domain.classifier import detect_format
from tap_tools.domain.desktop import detect_desktop_file, detect_icon
from tap_tools.domain.naming import (
    ensure_linux_suffix,
    normalize_package_name,
    parse_repo_url,
)
from tap_tools.domain.types import Arch, PackageDescriptor, Platform
from tap_tools.exceptions import TapToolsError, ValidationError
from tap_tools.logger import get_logger, update_logger_from_config

from .parser import CLIParser

logger = get_logger(__name__)

TOKEN_ENV_VAR = "GITHUB_TOKEN"
_NAME_SEPARATORS = re.compile(r"[-_.]")


class CLIRunner:
    """CLI command runner and orchestrator."""

    def __init__(self, config_manager: ConfigManager | None = None) -> None:
        """Initialize CLI runner with configuration.

        Args:
            config_manager: Optional config manager (defaults to the one
                reading ~/.config/tap-tools)

        Raises:
            ConfigurationError: If the settings file cannot be loaded

        """
        self.config_manager = config_manager or ConfigManager()
        self.global_config = self.config_manager.load_global_config()
        update_logger_from_config(self.global_config)

    async def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the CLI application.

        Args:
            argv: Arguments to parse (defaults to sys.argv[1:])

        Returns:
            Process exit status

        """
        args = CLIParser(dict(self.global_config)).parse_args(argv)

        if args.version:
            print(__version__)
            return 0

        if args.log_level:
            update_logger_from_config(
                {**self.global_config, "console_log_level": args.log_level}
            )

        if not args.command:
            print("No command specified. Use --help.", file=sys.stderr)
            return 1

        try:
            if args.command == "resolve":
                data = await self._run_resolve(args)
            else:
                data = self._run_inspect(args)
            self._emit(data, getattr(args, "output", None))
        except TapToolsError as e:
            logger.error("%s", e)
            return 1

        return 0

    @staticmethod
    def _parse_platform(value: str) -> Platform:
        try:
            platform = Platform.parse(value)
        except ValueError as e:
            msg = "expected linux, macos or windows"
            raise ValidationError(msg, target=value) from e
        if platform is Platform.UNKNOWN:
            msg = "target platform must be concrete"
            raise ValidationError(msg, target=value)
        return platform

    @staticmethod
    def _parse_arch(value: str) -> Arch:
        if value.strip().lower() == "auto":
            arch = Arch.current()
            if arch is Arch.UNKNOWN:
                logger.warning(
                    "Unrecognized host architecture, defaulting to x86_64"
                )
                return Arch.X86_64
            return arch
        try:
            return Arch.parse(value)
        except ValueError as e:
            msg = "expected x86_64, arm64 or auto"
            raise ValidationError(msg, target=value) from e

    async def _run_resolve(self, args: Namespace) -> dict[str, Any]:
        owner, repo = parse_repo_url(args.repo)
        platform = self._parse_platform(args.platform)
        arch = self._parse_arch(args.arch)
        package_name = args.name or repo

        network_cfg = self.global_config["network"]
        resolver_cfg = self.global_config["resolver"]
        token = os.getenv(TOKEN_ENV_VAR) or None

        async with create_http_session(self.global_config) as session:
            client = ReleaseClient(
                session, network_cfg["api_base_url"], token=token
            )
            release = await client.get_release(owner, repo, args.tag)
            logger.info(
                "Resolving %s/%s %s for %s/%s",
                owner,
                repo,
                release.tag_name,
                platform.value,
                arch.value,
            )

            fetcher = ContentFetcher.with_limit_mb(
                session, resolver_cfg["max_asset_mb"]
            )
            resolver = PackageResolver(fetcher, platform, arch)
            if args.no_verify:
                descriptor = await resolver.resolve(
                    release.assets, package_name, version=release.version
                )
            else:
                descriptor = await resolver.resolve_release(
                    release, package_name
                )

        return self._describe_package(owner, repo, platform, descriptor)

    @staticmethod
    def _describe_package(
        owner: str,
        repo: str,
        platform: Platform,
        descriptor: PackageDescriptor,
    ) -> dict[str, Any]:
        # A desktop entry marks a GUI app, packaged as a cask
        kind = "cask" if descriptor.desktop_file_path else "formula"
        token = normalize_package_name(repo)
        if kind == "cask" and platform is Platform.LINUX:
            token = ensure_linux_suffix(token)

        data = descriptor.to_dict()
        data["repository"] = f"{owner}/{repo}"
        data["token"] = token
        data["kind"] = kind
        return data

    def _run_inspect(self, args: Namespace) -> dict[str, Any]:
        path = Path(args.archive).expanduser()
        try:
            content = path.read_bytes()
        except OSError as e:
            msg = f"cannot read archive: {e.strerror or e}"
            raise ValidationError(msg, target=str(path)) from e

        fmt = detect_format(path.name)
        package_name = args.name or _NAME_SEPARATORS.split(path.name)[0]
        inspection = list_entries(content, fmt)

        data: dict[str, Any] = {
            "archive": path.name,
            "format": fmt.value,
            "sha256": compute_sha256(content),
            "supported": inspection.supported,
            "root_dir": inspection.root_dir,
            "entry_count": len(inspection.entries),
            "binary_path": None,
            "desktop_file_path": None,
            "desktop_entry": None,
            "icon_path": None,
        }
        if not inspection.supported:
            logger.warning("Cannot inspect %s archives", fmt.value)
            return data

        binary = select_best_binary(
            detect_binaries(inspection.entries), package_name
        )
        desktop = detect_desktop_file(inspection.entries)
        icon = detect_icon(inspection.entries)

        data["binary_path"] = binary.path if binary else None
        data["icon_path"] = icon.path if icon else None
        if desktop is not None:
            data["desktop_file_path"] = desktop.path
            data["desktop_entry"] = read_entry(
                content, fmt, desktop.path
            ).decode("utf-8", errors="replace")
        return data

    @staticmethod
    def _emit(data: dict[str, Any], output: str | None) -> None:
        payload = orjson.dumps(data, option=orjson.OPT_INDENT_2)
        if output:
            target = Path(output).expanduser()
            try:
                target.write_bytes(payload + b"\n")
            except OSError as e:
                msg = f"cannot write output: {e.strerror or e}"
                raise ValidationError(msg, target=str(target)) from e
            logger.info("Descriptor written to %s", target)
            return

        sys.stdout.write(payload.decode() + "\n")
        sys.stdout.flush()
