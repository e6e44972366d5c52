"""
``gh-trs validate``: check registration files.
"""

from __future__ import annotations

from gh_trs.cli.commands.common import (
    config_locations_or_default,
    github_client,
    init_command,
    step,
)
from gh_trs.cli.ui.console import console, create_configs_table, print_success


def run_validate(
    config_locations: list[str] | None,
    gh_token: str | None,
    verbose: bool,
) -> None:
    from gh_trs.core.config_io import read_configs
    from gh_trs.core.validator import validate

    settings = init_command(verbose)
    locations = config_locations_or_default(config_locations)
    with step("validate"):
        configs = read_configs(locations)
        with github_client(settings, gh_token, required=False) as github:
            configs = validate(configs, github)

    console.print(create_configs_table(configs))
    print_success(f"{len(configs)} registration(s) are valid")
