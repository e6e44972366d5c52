"""
Exception hierarchy for gh-trs.

Library code raises these; the CLI commands catch ``GhTrsError`` and turn it
into a logged failure and a non-zero exit status.
"""

from __future__ import annotations


class GhTrsError(Exception):
    """Base class for all gh-trs errors."""


class ConfigError(GhTrsError):
    """Raised when a registration file or a setting cannot be loaded."""


class ValidationError(GhTrsError):
    """Raised when one or more registration files break a field constraint."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = errors
        super().__init__("; ".join(errors))


class GitHubError(GhTrsError):
    """Raised when a GitHub REST API call fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class BranchAlreadyExistsError(GitHubError):
    """Raised when the publish branch is created but already exists."""


class TrsError(GhTrsError):
    """Raised when a TRS endpoint is unreachable or not a gh-trs endpoint."""


class WesError(GhTrsError):
    """Raised when the WES (or the sapporo-service container) misbehaves."""


class TestFailedError(GhTrsError):
    """Raised when one or more workflow tests finished in a failed state."""

    __test__ = False

    def __init__(self, failed_ids: list[str], results: dict | None = None):
        self.failed_ids = failed_ids
        # results up to the failing registration, keyed by <id>@<version>
        self.results = results or {}
        super().__init__(f"Failed {len(failed_ids)} tests: {', '.join(failed_ids)}")
