"""
Utility modules for gh-trs.

This package provides common utilities:
- logger: Logging setup
- helpers: URL, checksum and path helpers
"""

from gh_trs.utils.logger import (
    LogLevel,
    setup_logging,
)
from gh_trs.utils.helpers import (
    find_duplicates,
    is_commit_hash,
    is_http_url,
    is_remote_url,
    is_safe_relative_path,
    parse_repo,
    sha256_hex,
    url_last_segment,
    with_trailing_slash,
)

__all__ = [
    # Logger
    "LogLevel",
    "setup_logging",
    # Helpers
    "find_duplicates",
    "is_commit_hash",
    "is_http_url",
    "is_remote_url",
    "is_safe_relative_path",
    "parse_repo",
    "sha256_hex",
    "url_last_segment",
    "with_trailing_slash",
]
