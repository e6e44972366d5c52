"""
``gh-trs test``: run the tests of registration files on a WES.
"""

from __future__ import annotations

from gh_trs.cli.commands.common import (
    config_locations_or_default,
    github_client,
    init_command,
    step,
)
from gh_trs.cli.ui.console import console, create_test_results_table
from gh_trs.exceptions import TestFailedError


def run_test(
    config_locations: list[str] | None,
    gh_token: str | None,
    wes_location: str | None,
    docker_host: str,
    ignore_fail: bool,
    verbose: bool,
) -> None:
    from gh_trs.core.config_io import read_configs
    from gh_trs.core.test_runner import run_tests
    from gh_trs.core.validator import validate

    settings = init_command(verbose)
    locations = config_locations_or_default(config_locations)
    with step("validate"):
        configs = read_configs(locations)
        with github_client(settings, gh_token, required=False) as github:
            configs = validate(configs, github)

    results = {}
    try:
        with step("test"):
            try:
                results = run_tests(
                    configs,
                    wes_location=wes_location,
                    docker_host=docker_host,
                    ignore_fail=ignore_fail,
                    settings=settings,
                )
            except TestFailedError as e:
                results = e.results
                raise
    finally:
        if results:
            console.print(create_test_results_table(results))
