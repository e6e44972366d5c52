"""
Helper utilities for gh-trs.

Provides general-purpose helper functions for:
- URL inspection
- Checksums
- Path handling
"""

from __future__ import annotations

import hashlib
import re
from pathlib import PurePosixPath
from urllib.parse import urlparse

COMMIT_HASH_PATTERN = re.compile(r"^[0-9a-f]{40}$")
REPO_PATTERN = re.compile(r"^[\w-]+/[\w-]+$")


def is_remote_url(value: str) -> bool:
    """
    Check whether a string is an absolute http(s) or ftp URL.

    Args:
        value: Candidate string

    Returns:
        True if the string has a supported scheme and a host
    """
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https", "ftp") and bool(parsed.netloc)


def is_http_url(value: str) -> bool:
    """Check whether a string is an absolute http(s) URL."""
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def url_last_segment(url: str) -> str:
    """
    Get the last path segment of a URL.

    Args:
        url: URL string

    Returns:
        Last non-empty path segment

    Raises:
        ValueError: If the URL has no path
    """
    segments = [s for s in urlparse(url).path.split("/") if s]
    if not segments:
        raise ValueError(f"Invalid URL: {url}")
    return segments[-1]


def is_commit_hash(value: str) -> bool:
    """Check if a string is a full 40 character git commit hash."""
    return COMMIT_HASH_PATTERN.match(value) is not None


def parse_repo(repo: str) -> tuple[str, str]:
    """
    Split an ``owner/name`` repository string.

    Args:
        repo: Repository in ``owner/name`` form

    Returns:
        Tuple of (owner, name)

    Raises:
        ValueError: If the string is not in ``owner/name`` form
    """
    if not REPO_PATTERN.match(repo):
        raise ValueError(
            f"Invalid repository name: {repo}. It should be in the format of `owner/name`."
        )
    owner, name = repo.split("/")
    return owner, name


def sha256_hex(content: str | bytes) -> str:
    """Hex digest of the SHA-256 hash of the content."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def is_safe_relative_path(path: str) -> bool:
    """
    Check that a path stays inside the directory it is relative to.

    Args:
        path: POSIX path string

    Returns:
        False for empty, absolute or ``..``-containing paths
    """
    if not path:
        return False
    pure = PurePosixPath(path)
    return not pure.is_absolute() and ".." not in pure.parts


def with_trailing_slash(url: str) -> str:
    """Return the URL stripped of surrounding whitespace, ending in exactly one slash."""
    return url.strip().rstrip("/") + "/"


def find_duplicates(values: list[str]) -> list[str]:
    """
    Find values that occur more than once.

    Args:
        values: Input values

    Returns:
        Duplicated values in order of first repetition
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates
