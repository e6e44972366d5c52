"""
GitHub REST API client.

Covers the calls gh-trs needs: repository metadata for templates, branch
resolution for commit-pinned URLs, and the Git Data API for publishing a
set of files in a single commit.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gh_trs.clients.remote import network_retry
from gh_trs.exceptions import BranchAlreadyExistsError, GitHubError
from gh_trs.models.config import Author

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class GitHubClient:
    """
    Thin wrapper around ``httpx.Client`` for the GitHub REST API.

    Default branches and branch heads are memoised for the lifetime of the
    client, so a validation run resolves each branch only once.

    Example:
        >>> with GitHubClient(token) as github:
        ...     github.get_default_branch("octocat", "hello-world")
        'main'
    """

    def __init__(
        self,
        token: str | None,
        api_url: str = GITHUB_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "gh-trs",
        }
        if token:
            headers["Authorization"] = f"token {token}"
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self._default_branches: dict[tuple[str, str], str] = {}
        self._latest_commits: dict[tuple[str, str, str], str] = {}

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    @staticmethod
    def _check(response: httpx.Response, action: str) -> Any:
        if response.status_code == 401:
            raise GitHubError(
                "Failed to authenticate with GitHub. Please check your GitHub token.",
                status_code=401,
            )
        try:
            body = response.json()
        except ValueError:
            body = None
        if not response.is_success:
            message = body.get("message") if isinstance(body, dict) else None
            raise GitHubError(
                f"Failed to {action} request to {response.request.url}. "
                f"Response: {message or response.status_code}",
                status_code=response.status_code,
            )
        return body

    @network_retry
    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        logger.debug(f"GET {path}")
        return self._check(self._client.get(path, params=params), "get")

    def _post(self, path: str, body: dict[str, Any]) -> Any:
        logger.debug(f"POST {path}")
        return self._check(self._client.post(path, json=body), "post")

    def _patch(self, path: str, body: dict[str, Any]) -> Any:
        logger.debug(f"PATCH {path}")
        return self._check(self._client.patch(path, json=body), "patch")

    # ------------------------------------------------------------------
    # Repository metadata
    # ------------------------------------------------------------------

    def get_repo(self, owner: str, name: str) -> dict[str, Any]:
        return self._get(f"/repos/{owner}/{name}")

    def get_default_branch(self, owner: str, name: str) -> str:
        key = (owner, name)
        if key not in self._default_branches:
            repo = self.get_repo(owner, name)
            try:
                self._default_branches[key] = repo["default_branch"]
            except (KeyError, TypeError) as e:
                raise GitHubError(
                    "Failed to parse the response when getting default branch"
                ) from e
        return self._default_branches[key]

    def get_latest_commit_hash(self, owner: str, name: str, branch: str) -> str:
        """
        Resolve a branch to the hash of its head commit.

        Args:
            owner: Repository owner
            name: Repository name
            branch: Branch name

        Returns:
            40 character commit hash
        """
        key = (owner, name, branch)
        if key not in self._latest_commits:
            res = self._get(f"/repos/{owner}/{name}/branches/{branch}")
            try:
                self._latest_commits[key] = res["commit"]["sha"]
            except (KeyError, TypeError) as e:
                raise GitHubError(
                    "Failed to parse the response when getting latest commit hash"
                ) from e
        return self._latest_commits[key]

    def get_license(self, owner: str, name: str) -> str:
        """SPDX id of the repository license."""
        repo = self.get_repo(owner, name)
        license_info = repo.get("license") or {}
        spdx_id = license_info.get("spdx_id")
        if not spdx_id:
            raise GitHubError(f"No license found in the repository {owner}/{name}")
        return spdx_id

    def get_author_info(self) -> Author:
        """The authenticated user as a workflow author."""
        user = self._get("/user")
        if not isinstance(user, dict) or "login" not in user:
            raise GitHubError("Failed to parse the response when getting author")
        return Author(
            github_account=user["login"],
            name=user.get("name"),
            affiliation=user.get("company"),
        )

    def get_readme_url(self, owner: str, name: str) -> str:
        """``html_url`` of the repository README."""
        res = self._get(f"/repos/{owner}/{name}/readme")
        try:
            return res["html_url"]
        except (KeyError, TypeError) as e:
            raise GitHubError("Failed to parse the response when getting readme url") from e

    def get_file_list_recursive(
        self, owner: str, name: str, path: str, ref: str
    ) -> list[str]:
        """
        List every file under a directory of the repository.

        Args:
            owner: Repository owner
            name: Repository name
            path: Directory path relative to the repository root ("" for root)
            ref: Branch name or commit hash

        Returns:
            Repository-relative file paths
        """
        contents_path = f"/repos/{owner}/{name}/contents/{path}".rstrip("/")
        res = self._get(contents_path, params={"ref": ref})
        if not isinstance(res, list):
            raise GitHubError("Failed to parse the response when getting file list")

        files: list[str] = []
        for entry in res:
            if entry.get("type") == "file":
                files.append(entry["path"])
            elif entry.get("type") == "dir":
                files.extend(self.get_file_list_recursive(owner, name, entry["path"], ref))
        return files

    # ------------------------------------------------------------------
    # Branches and commits
    # ------------------------------------------------------------------

    def branch_exists(self, owner: str, name: str, branch: str) -> bool:
        try:
            self._get(f"/repos/{owner}/{name}/branches/{branch}")
        except GitHubError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    def get_branch_sha(self, owner: str, name: str, branch: str) -> str:
        res = self._get(f"/repos/{owner}/{name}/git/ref/heads/{branch}")
        try:
            return res["object"]["sha"]
        except (KeyError, TypeError) as e:
            raise GitHubError("Failed to parse the response when getting branch sha") from e

    def create_branch(self, owner: str, name: str, branch: str) -> None:
        """
        Create a branch pointing at the head of the default branch.

        Raises:
            BranchAlreadyExistsError: If the branch appeared in the meantime
        """
        default_branch = self.get_default_branch(owner, name)
        sha = self.get_branch_sha(owner, name, default_branch)
        try:
            self._post(
                f"/repos/{owner}/{name}/git/refs",
                {"ref": f"refs/heads/{branch}", "sha": sha},
            )
        except GitHubError as e:
            if e.status_code == 422 and "Reference already exists" in str(e):
                raise BranchAlreadyExistsError(
                    f"Branch {branch} already exists in {owner}/{name}", status_code=422
                ) from e
            raise
        logger.info(f"Created branch {branch} in {owner}/{name} from {default_branch}")

    def commit_files(
        self,
        owner: str,
        name: str,
        branch: str,
        contents: dict[str, str],
        message: str,
    ) -> str:
        """
        Write files to a branch in one commit.

        Args:
            owner: Repository owner
            name: Repository name
            branch: Existing branch to update
            contents: Mapping of repository-relative path to file content
            message: Commit message

        Returns:
            Hash of the new commit
        """
        parent_sha = self.get_branch_sha(owner, name, branch)
        parent = self._get(f"/repos/{owner}/{name}/git/commits/{parent_sha}")
        tree = self._post(
            f"/repos/{owner}/{name}/git/trees",
            {
                "base_tree": parent["tree"]["sha"],
                "tree": [
                    {"path": path, "mode": "100644", "type": "blob", "content": content}
                    for path, content in sorted(contents.items())
                ],
            },
        )
        commit = self._post(
            f"/repos/{owner}/{name}/git/commits",
            {"message": message, "tree": tree["sha"], "parents": [parent_sha]},
        )
        self._patch(
            f"/repos/{owner}/{name}/git/refs/heads/{branch}",
            {"sha": commit["sha"], "force": False},
        )
        logger.debug(f"Committed {len(contents)} files to {owner}/{name}@{branch}")
        return commit["sha"]
