"""Package and repository naming helpers."""

import re

from tap_tools.exceptions import ValidationError

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")
_REPEATED_HYPHENS = re.compile(r"-+")
_NAME_PART = re.compile(r"^[A-Za-z0-9_.-]+$")

LINUX_SUFFIX = "-linux"


def normalize_package_name(name: str) -> str:
    """Normalize a repository name into a package token.

    Example: ``"My_Cool App"`` -> ``"my-cool-app"``
    """
    normalized = name.lower().replace("_", "-").replace(" ", "-")
    normalized = _INVALID_CHARS.sub("", normalized)
    normalized = _REPEATED_HYPHENS.sub("-", normalized)
    return normalized.strip("-")


def ensure_linux_suffix(token: str) -> str:
    """Append ``-linux`` unless the token already ends with it."""
    if token.endswith(LINUX_SUFFIX):
        return token
    return token + LINUX_SUFFIX


def parse_repo_url(ref: str) -> tuple[str, str]:
    """Extract ``(owner, repo)`` from a GitHub reference.

    Accepts ``https://github.com/owner/repo``, ``github.com/owner/repo`` and
    ``owner/repo``, with optional trailing slash or ``.git``.

    Raises:
        ValidationError: If the reference has no owner/repo pair

    """
    cleaned = ref.strip().rstrip("/")
    for prefix in ("https://", "http://"):
        cleaned = cleaned.removeprefix(prefix)
    cleaned = cleaned.removeprefix("www.").removeprefix("github.com/")
    cleaned = cleaned.removesuffix(".git")

    parts = cleaned.split("/")
    if len(parts) < 2 or not all(  # noqa: PLR2004
        _NAME_PART.match(part) for part in parts[:2]
    ):
        msg = "expected format owner/repo"
        raise ValidationError(msg, target=ref)

    return parts[0], parts[1]
