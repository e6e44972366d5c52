"""
GitHub file URLs.

Normalises ``github.com/<owner>/<name>/blob/<ref>/<path>`` and
``raw.githubusercontent.com/<owner>/<name>/<ref>/<path>`` URLs into a
structured form that can be rendered as a branch or commit pinned raw URL.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote, urlparse

from pydantic import BaseModel, Field

from gh_trs.exceptions import ValidationError
from gh_trs.utils.helpers import is_commit_hash

if TYPE_CHECKING:
    from gh_trs.clients.github import GitHubClient

GITHUB_HOSTS = ("github.com", "raw.githubusercontent.com")
RAW_BASE_URL = "https://raw.githubusercontent.com"


class RawUrl(BaseModel):
    """A file in a GitHub repository at a given ref."""

    owner: str
    name: str
    branch: str | None = Field(default=None, description="Branch, if the URL named one")
    commit: str = Field(description="Commit hash the file is pinned to")
    file_path: str = Field(description="Path of the file in the repository, percent-decoded")

    @staticmethod
    def is_github_url(url: str) -> bool:
        parsed = urlparse(url.strip())
        return parsed.scheme in ("http", "https") and parsed.netloc in GITHUB_HOSTS

    @classmethod
    def parse(cls, url: str, github: "GitHubClient") -> "RawUrl":
        """
        Parse a GitHub file URL, resolving a branch to its latest commit.

        Args:
            url: ``github.com`` blob URL or ``raw.githubusercontent.com`` URL
            github: Client used to resolve branches

        Returns:
            The parsed URL

        Raises:
            ValidationError: If the URL is not a GitHub file URL
        """
        parsed = urlparse(url.strip())
        if parsed.scheme not in ("http", "https", "ftp"):
            raise ValidationError(f"The scheme of the URL {url} is not http, https or ftp")
        if parsed.netloc not in GITHUB_HOSTS:
            raise ValidationError(
                f"The host of the URL {url} is not github.com or raw.githubusercontent.com"
            )

        segments = [s for s in parsed.path.split("/") if s]
        if parsed.netloc == "github.com":
            # <owner>/<name>/blob/<ref>/<path>
            if len(segments) < 5 or segments[2] not in ("blob", "raw"):
                raise ValidationError(
                    f"The path of the URL {url} is too short. Is it really a GitHub file URL?"
                )
            owner, name, ref, path_parts = segments[0], segments[1], segments[3], segments[4:]
        else:
            # <owner>/<name>/<ref>/<path>
            if len(segments) < 4:
                raise ValidationError(
                    f"The path of the URL {url} is too short. Is it really a GitHub file URL?"
                )
            owner, name, ref, path_parts = segments[0], segments[1], segments[2], segments[3:]

        if is_commit_hash(ref):
            branch, commit = None, ref
        else:
            branch, commit = ref, github.get_latest_commit_hash(owner, name, ref)

        return cls(
            owner=owner,
            name=name,
            branch=branch,
            commit=commit,
            file_path=unquote("/".join(path_parts)),
        )

    def _ref(self, use_commit: bool) -> str:
        if use_commit or self.branch is None:
            return self.commit
        return self.branch

    def to_url(self, use_commit: bool = True) -> str:
        """Raw URL of the file, pinned to the commit or following the branch."""
        ref = self._ref(use_commit)
        return f"{RAW_BASE_URL}/{self.owner}/{self.name}/{ref}/{quote(self.file_path)}"

    @property
    def base_dir(self) -> str:
        """Directory holding the file, relative to the repository root ("" at root)."""
        parent = str(PurePosixPath(self.file_path).parent)
        return "" if parent == "." else parent

    def to_base_url(self, use_commit: bool = True) -> str:
        """Raw URL of :attr:`base_dir`, with a trailing slash."""
        base = f"{RAW_BASE_URL}/{self.owner}/{self.name}/{self._ref(use_commit)}/"
        return f"{base}{quote(self.base_dir)}/" if self.base_dir else base

    @property
    def file_stem(self) -> str:
        return PurePosixPath(self.file_path).stem
