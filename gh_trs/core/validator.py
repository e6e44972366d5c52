"""
Registration file validation (``validate``).

Checks field constraints that the schema alone cannot express, pins GitHub
file URLs to commits and fills in the workflow language. All problems are
collected and reported together.
"""

from __future__ import annotations

import logging
import re

import httpx

from gh_trs.clients import remote
from gh_trs.clients.github import GitHubClient
from gh_trs.core import inspect
from gh_trs.core.raw_url import RawUrl
from gh_trs.exceptions import GhTrsError, ValidationError
from gh_trs.models.config import Config, FileType, Language, TestFileType
from gh_trs.utils.helpers import find_duplicates, is_http_url, is_safe_relative_path

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


def _pin_url(url: str, github: GitHubClient | None) -> str:
    if github is None or not RawUrl.is_github_url(url):
        return url
    return RawUrl.parse(url, github).to_url(use_commit=True)


def check_fields(config: Config) -> list[str]:
    """
    Check the field constraints of one registration.

    Returns:
        Error messages, empty when the registration is fine
    """
    errors: list[str] = []
    workflow = config.workflow

    if not VERSION_PATTERN.match(config.version):
        errors.append(f"version {config.version} is not in the form X.Y.Z")
    if not config.license.strip():
        errors.append("license is empty")

    if not config.authors:
        errors.append("authors must contain at least one author")
    for account in find_duplicates([a.github_account for a in config.authors]):
        errors.append(f"author {account} is listed more than once")

    if not workflow.name.strip():
        errors.append("workflow.name is empty")
    if not is_http_url(workflow.readme):
        errors.append(f"workflow.readme {workflow.readme} is not an http(s) URL")

    primaries = [f for f in workflow.files if f.type == FileType.PRIMARY]
    if len(primaries) != 1:
        errors.append(f"workflow.files must have exactly one primary file, found {len(primaries)}")
    for target in find_duplicates([f.target for f in workflow.files]):
        errors.append(f"workflow.files target {target} is used more than once")
    for file in workflow.files:
        if not is_safe_relative_path(file.target):
            errors.append(f"workflow.files target {file.target} must be a relative path without '..'")

    for test_id in find_duplicates([t.id for t in workflow.testing]):
        errors.append(f"test id {test_id} is used more than once")
    for test in workflow.testing:
        for file_type in (TestFileType.WF_PARAMS, TestFileType.WF_ENGINE_PARAMS):
            if len(test.files_of_type(file_type)) > 1:
                errors.append(f"test {test.id} has more than one {file_type.value} file")
        for target in find_duplicates([f.target for f in test.files]):
            errors.append(f"test {test.id} target {target} is used more than once")
        for file in test.files:
            if not is_safe_relative_path(file.target):
                errors.append(
                    f"test {test.id} target {file.target} must be a relative path without '..'"
                )
    return errors


def normalize(config: Config, github: GitHubClient | None) -> tuple[Config, list[str]]:
    """
    Pin GitHub URLs to commits and fill in a missing language.

    Args:
        config: A registration that passed :func:`check_fields`
        github: Client for resolving branches; GitHub URLs are kept as-is without it

    Returns:
        Tuple of (normalised copy, error messages)
    """
    errors: list[str] = []
    config = config.model_copy(deep=True)
    workflow = config.workflow

    try:
        workflow.readme = _pin_url(workflow.readme, github)
        for file in workflow.files:
            file.url = _pin_url(file.url, github)
        for test in workflow.testing:
            for test_file in test.files:
                test_file.url = _pin_url(test_file.url, github)
    except GhTrsError as e:
        errors.append(str(e))
        return config, errors

    language = workflow.language
    if language.type is None or language.version is None:
        primary = workflow.primary_wf()
        try:
            content = remote.fetch_raw_content(primary.url)
        except (GhTrsError, httpx.HTTPError) as e:
            errors.append(f"Failed to inspect the language of {primary.url}: {e}")
            return config, errors
        wf_type = language.type or inspect.inspect_wf_type(content)
        if wf_type is None:
            errors.append(f"Unable to detect the workflow language of {primary.url}")
            return config, errors
        workflow.language = Language(
            type=wf_type,
            version=language.version or inspect.inspect_wf_version(content, wf_type),
        )
    return config, errors


def validate(configs: list[Config], github: GitHubClient | None = None) -> list[Config]:
    """
    Validate registrations and return their normalised copies.

    Args:
        configs: Registrations, in input order
        github: Client for pinning GitHub URLs (optional)

    Returns:
        Normalised registrations, in input order

    Raises:
        ValidationError: With every problem found
    """
    errors: list[str] = []
    validated: list[Config] = []
    for config in configs:
        logger.info(f"Validating {config.title}")
        config_errors = check_fields(config)
        if not config_errors:
            config, config_errors = normalize(config, github)
        errors.extend(f"{config.title}: {e}" for e in config_errors)
        validated.append(config)

    for key in find_duplicates([f"{c.id}@{c.version}" for c in configs]):
        wf_id, version = key.split("@", 1)
        errors.append(f"workflow_id: {wf_id}, version: {version} is registered more than once")

    if errors:
        raise ValidationError(errors)
    return validated
