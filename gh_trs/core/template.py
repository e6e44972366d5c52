"""
Registration template generation (``make-template``).
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path, PurePosixPath
from urllib.parse import quote

from gh_trs.clients.github import GitHubClient
from gh_trs.core import config_io, inspect
from gh_trs.core.raw_url import RawUrl
from gh_trs.models.config import Config, File, FileType, Testing, Workflow

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "1.0.0"


def obtain_wf_files(
    github: GitHubClient,
    primary_wf: RawUrl,
    use_commit_url: bool = False,
) -> list[File]:
    """
    List every file next to (and below) the primary workflow file.

    Targets are relative to the primary file's directory.
    """
    base_dir = primary_wf.base_dir
    base_url = primary_wf.to_base_url(use_commit_url)
    paths = github.get_file_list_recursive(
        primary_wf.owner, primary_wf.name, base_dir, primary_wf.commit
    )
    files = []
    for path in paths:
        target = str(PurePosixPath(path).relative_to(base_dir)) if base_dir else path
        url = f"{base_url}{quote(target)}"
        file_type = FileType.PRIMARY if path == primary_wf.file_path else FileType.SECONDARY
        files.append(File(url=url, target=target, type=file_type))
    return files


def build_template(
    wf_location: str,
    github: GitHubClient,
    use_commit_url: bool = False,
) -> Config:
    """
    Build a registration template from a workflow hosted on GitHub.

    Args:
        wf_location: GitHub URL of the primary workflow file
        github: Authenticated GitHub client
        use_commit_url: Pin raw URLs to the commit instead of the branch

    Returns:
        The template registration
    """
    primary_wf = RawUrl.parse(wf_location, github)
    readme = RawUrl.parse(github.get_readme_url(primary_wf.owner, primary_wf.name), github)

    config = Config(
        id=uuid.uuid4(),
        version=DEFAULT_VERSION,
        license=github.get_license(primary_wf.owner, primary_wf.name),
        authors=[github.get_author_info()],
        workflow=Workflow(
            name=primary_wf.file_stem,
            readme=readme.to_url(use_commit_url),
            language=inspect.inspect_wf_type_version(primary_wf.to_url()),
            files=obtain_wf_files(github, primary_wf, use_commit_url),
            testing=[Testing.default()],
        ),
    )
    logger.debug(f"Template:\n{config_io.dump_config(config)}")
    return config


def make_template(
    wf_location: str,
    github: GitHubClient,
    output: str | Path,
    use_commit_url: bool = False,
) -> Path:
    """Build a template and write it to ``output`` (YAML or JSON by extension)."""
    logger.info(f"Making a template from workflow location: {wf_location}")
    config_io.parse_file_ext(output)
    config = build_template(wf_location, github, use_commit_url)
    return config_io.write_config(config, output)
