"""Top-level package for tap-tools.

Resolves GitHub release assets into the data a Homebrew cask or formula
needs: the chosen download, its SHA-256, and what lives inside it.

License: GPL-3.0
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tap-tools")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
