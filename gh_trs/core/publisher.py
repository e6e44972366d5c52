"""
Publishing registrations as a TRS API on GitHub Pages (``publish``).
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from gh_trs.clients.github import GitHubClient
from gh_trs.core.trs_response import TrsState
from gh_trs.exceptions import ConfigError, GhTrsError
from gh_trs.models.config import Config
from gh_trs.models.wes import TestResult
from gh_trs.utils.helpers import is_safe_relative_path, parse_repo

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "gh-pages"


def config_key(config: Config) -> str:
    return f"{config.id}@{config.version}"


def is_verified(config: Config, test_results: dict[str, list[TestResult]] | None) -> bool:
    """A version is verified when it was tested and every test passed."""
    if test_results is None:
        return False
    results = test_results.get(config_key(config))
    return bool(results) and all(r.passed for r in results)


def build_contents(
    configs: list[Config],
    owner: str,
    name: str,
    test_results: dict[str, list[TestResult]] | None = None,
    verified_source: list[str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, str]:
    """
    Render the TRS documents for ``configs`` on top of the published API.

    Args:
        configs: Validated registrations
        owner: Owner of the publish repository
        name: Name of the publish repository
        test_results: Results of ``run_tests``, None when not tested
        verified_source: Where the verifying test run can be inspected
        transport: Optional httpx transport for reading GitHub Pages (used by tests)

    Returns:
        Mapping of path relative to the branch root to file content
    """
    state = TrsState.load(owner, name, transport=transport)
    for config in configs:
        state.add_config(config, is_verified(config, test_results), verified_source)
    return state.generate_contents()


def write_contents(contents: dict[str, str], output_dir: str | Path) -> Path:
    """Write generated documents below ``output_dir`` instead of pushing them."""
    output_dir = Path(output_dir)
    for rel_path, content in sorted(contents.items()):
        if not is_safe_relative_path(rel_path):
            raise GhTrsError(f"Refusing to write outside the output directory: {rel_path}")
        path = output_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {len(contents)} files to {output_dir}")
    return output_dir


def commit_message(configs: list[Config]) -> str:
    lines = [f"Publish {len(configs)} workflow version(s) by gh-trs", ""]
    lines += [f"- {config.title}" for config in configs]
    return "\n".join(lines)


def ensure_branch(github: GitHubClient, owner: str, name: str, branch: str) -> None:
    if github.branch_exists(owner, name, branch):
        return
    logger.info(f"Branch {branch} does not exist in {owner}/{name}, creating it")
    github.create_branch(owner, name, branch)


def publish(
    configs: list[Config],
    repo: str,
    github: GitHubClient | None = None,
    branch: str = DEFAULT_BRANCH,
    test_results: dict[str, list[TestResult]] | None = None,
    verified_source: list[str] | None = None,
    output_dir: str | Path | None = None,
    trs_transport: httpx.BaseTransport | None = None,
) -> dict[str, str]:
    """
    Publish registrations to ``repo``'s GitHub Pages branch.

    Args:
        configs: Validated registrations
        repo: Publish repository as ``owner/name``
        github: Authenticated GitHub client, not needed with ``output_dir``
        branch: Publish branch
        test_results: Results of ``run_tests`` when tested first
        verified_source: Where the verifying test run can be inspected
        output_dir: Write the documents here instead of committing them
        trs_transport: Optional httpx transport for reading GitHub Pages

    Returns:
        The published documents

    Raises:
        ConfigError: If ``repo`` is not in ``owner/name`` form
        GitHubError: If the branch or the commit cannot be written
    """
    try:
        owner, name = parse_repo(repo)
    except ValueError as e:
        raise ConfigError(str(e)) from e
    contents = build_contents(
        configs, owner, name, test_results, verified_source, transport=trs_transport
    )

    if output_dir is not None:
        write_contents(contents, output_dir)
        return contents

    if github is None:
        raise GhTrsError("A GitHub client is required to publish to a repository")
    ensure_branch(github, owner, name, branch)
    sha = github.commit_files(owner, name, branch, contents, commit_message(configs))
    logger.info(f"Published {len(configs)} workflow version(s) to {owner}/{name}@{branch} ({sha[:7]})")
    return contents
