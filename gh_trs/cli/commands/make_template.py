"""
``gh-trs make-template``: generate a registration file from a workflow on GitHub.
"""

from __future__ import annotations

from pathlib import Path

from gh_trs.cli.commands.common import github_client, init_command, step
from gh_trs.cli.ui.console import print_success


def run_make_template(
    workflow_location: str,
    gh_token: str | None,
    output: Path,
    use_commit_url: bool,
    verbose: bool,
) -> None:
    from gh_trs.core.template import make_template

    settings = init_command(verbose)
    with step("make-template"):
        with github_client(settings, gh_token) as github:
            path = make_template(workflow_location, github, output, use_commit_url)
    print_success(f"Template written to {path}")
