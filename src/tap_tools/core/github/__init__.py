"""GitHub release-metadata client."""

from tap_tools.core.github.client import ReleaseClient

__all__ = ["ReleaseClient"]
