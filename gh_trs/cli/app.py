"""
The `gh-trs` Typer application.

Command functions only declare arguments; the work happens in
`gh_trs.cli.commands`, imported lazily to keep `--help` fast.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gh_trs import __version__
from gh_trs.cli.commands.common import cli_state
from gh_trs.cli.ui.console import console, set_no_color
from gh_trs.models.settings import DEFAULT_DOCKER_HOST

app = typer.Typer(
    name="gh-trs",
    help="Publish and test your own GA4GH TRS API using GitHub",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]gh-trs[/] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
):
    """
    gh-trs - publish and test your own GA4GH TRS API using GitHub

    Turns registration files describing CWL, WDL, Nextflow and Snakemake
    workflows into a TRS API served from GitHub Pages.
    """
    cli_state.no_color = no_color
    set_no_color(no_color)


GH_TOKEN_OPTION = typer.Option(
    None,
    "--gh-token",
    help="GitHub Personal Access Token (defaults to the GITHUB_TOKEN environment variable)",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug output")
WES_LOCATION_OPTION = typer.Option(
    None,
    "--wes-location",
    "-w",
    help="WES to test on; a local sapporo-service is started when omitted",
)
DOCKER_HOST_OPTION = typer.Option(
    DEFAULT_DOCKER_HOST,
    "--docker-host",
    "-d",
    help="Docker daemon used to start the sapporo-service",
)


@app.command("make-template")
def make_template(
    workflow_location: str = typer.Argument(
        ..., help="GitHub location of the primary workflow file"
    ),
    gh_token: Optional[str] = GH_TOKEN_OPTION,
    output: Path = typer.Option(
        Path("gh-trs-config.yml"),
        "--output",
        "-o",
        help="Output file path (.yml, .yaml or .json)",
    ),
    use_commit_url: bool = typer.Option(
        False,
        "--use-commit-url",
        help="Pin file URLs to the current commit instead of the branch",
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """
    Generate a registration file template from a workflow on GitHub.

    Example:
        gh-trs make-template https://github.com/octocat/wf/blob/main/workflow.cwl
    """
    from gh_trs.cli.commands.make_template import run_make_template

    run_make_template(workflow_location, gh_token, output, use_commit_url, verbose)


@app.command()
def validate(
    config_locations: Optional[list[str]] = typer.Argument(
        None, help="Registration files (local paths or URLs) [default: gh-trs-config.yml]"
    ),
    gh_token: Optional[str] = GH_TOKEN_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Validate registration files and pin their GitHub URLs to commits."""
    from gh_trs.cli.commands.validate import run_validate

    run_validate(config_locations, gh_token, verbose)


@app.command()
def test(
    config_locations: Optional[list[str]] = typer.Argument(
        None, help="Registration files (local paths or URLs) [default: gh-trs-config.yml]"
    ),
    gh_token: Optional[str] = GH_TOKEN_OPTION,
    wes_location: Optional[str] = WES_LOCATION_OPTION,
    docker_host: str = DOCKER_HOST_OPTION,
    ignore_fail: bool = typer.Option(
        False,
        "--ignore-fail",
        help="Exit successfully even when tests fail",
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Run the tests of registration files on a WES."""
    from gh_trs.cli.commands.test import run_test

    run_test(config_locations, gh_token, wes_location, docker_host, ignore_fail, verbose)


@app.command()
def publish(
    config_locations: Optional[list[str]] = typer.Argument(
        None,
        help="Registration files, or TRS API roots with --from-trs [default: gh-trs-config.yml]",
    ),
    gh_token: Optional[str] = GH_TOKEN_OPTION,
    repo: str = typer.Option(
        ..., "--repo", "-r", help="Repository to publish to, as owner/name"
    ),
    branch: str = typer.Option("gh-pages", "--branch", "-b", help="Branch to publish to"),
    with_test: bool = typer.Option(
        False,
        "--with-test",
        help="Test before publishing; versions whose tests pass are marked verified",
    ),
    wes_location: Optional[str] = WES_LOCATION_OPTION,
    docker_host: str = DOCKER_HOST_OPTION,
    from_trs: bool = typer.Option(
        False,
        "--from-trs",
        help="Republish every registration found in the given TRS APIs",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        help="Write the TRS API to this directory instead of pushing it",
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """
    Publish registration files as a TRS API on GitHub Pages.

    Example:
        gh-trs publish --repo octocat/my-trs gh-trs-config.yml
        gh-trs publish --repo octocat/my-trs --with-test gh-trs-config.yml
    """
    from gh_trs.cli.commands.publish import run_publish

    run_publish(
        config_locations,
        gh_token,
        repo,
        branch,
        with_test,
        wes_location,
        docker_host,
        from_trs,
        output_dir,
        verbose,
    )


def main():
    app()


if __name__ == "__main__":
    main()
