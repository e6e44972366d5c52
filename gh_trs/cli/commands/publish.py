"""
``gh-trs publish``: publish registration files as a TRS API on GitHub Pages.
"""

from __future__ import annotations

from pathlib import Path

from gh_trs.cli.commands.common import (
    config_locations_or_default,
    github_client,
    init_command,
    step,
)
from gh_trs.cli.ui.console import (
    console,
    create_test_results_table,
    print_success,
    print_warning,
)


def run_publish(
    config_locations: list[str] | None,
    gh_token: str | None,
    repo: str,
    branch: str,
    with_test: bool,
    wes_location: str | None,
    docker_host: str,
    from_trs: bool,
    output_dir: Path | None,
    verbose: bool,
) -> None:
    from gh_trs.core.config_io import find_config_locations_from_trs, read_configs
    from gh_trs.core.publisher import publish
    from gh_trs.core.test_runner import run_tests
    from gh_trs.core.validator import validate

    settings = init_command(verbose)
    locations = config_locations_or_default(config_locations)

    github = None
    try:
        with step("validate"):
            if from_trs:
                locations = [
                    location
                    for trs_location in locations
                    for location in find_config_locations_from_trs(trs_location)
                ]
            # a token is only needed when pushing
            github = github_client(settings, gh_token, required=output_dir is None)
            configs = validate(read_configs(locations), github)

        test_results = None
        verified_source = None
        if with_test:
            with step("test"):
                # failed tests leave their version unverified
                test_results = run_tests(
                    configs,
                    wes_location=wes_location,
                    docker_host=docker_host,
                    ignore_fail=True,
                    settings=settings,
                )
            console.print(create_test_results_table(test_results))
            unverified = [
                key for key, results in test_results.items()
                if not results or not all(r.passed for r in results)
            ]
            if unverified:
                print_warning(f"Publishing without verification: {', '.join(unverified)}")
            run_url = settings.ci_run_url()
            verified_source = [run_url] if run_url else None

        with step("publish"):
            publish(
                configs,
                repo,
                github=github,
                branch=branch,
                test_results=test_results,
                verified_source=verified_source,
                output_dir=output_dir,
            )
    finally:
        if github is not None:
            github.close()

    if output_dir is not None:
        print_success(f"TRS API written to {output_dir}")
    else:
        print_success(f"Published to https://github.com/{repo}/tree/{branch}")
