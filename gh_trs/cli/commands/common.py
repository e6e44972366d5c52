"""
Helpers shared by the CLI commands.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import typer

from gh_trs.clients.github import GitHubClient
from gh_trs.exceptions import GhTrsError, ValidationError
from gh_trs.models.settings import GhTrsSettings
from gh_trs.utils.logger import LogLevel, setup_logging

logger = logging.getLogger("gh_trs.cli")

DEFAULT_CONFIG_LOCATION = "gh-trs-config.yml"


class CLIState:
    """Global CLI state for options given before the command."""

    no_color: bool = False


cli_state = CLIState()


def init_command(verbose: bool) -> GhTrsSettings:
    """Load settings and configure logging for one command."""
    settings = GhTrsSettings()
    level = LogLevel.DEBUG if verbose else LogLevel(settings.log_level.lower())
    setup_logging(
        level=level,
        log_file=settings.log_file,
        json_format=settings.json_logs,
        no_color=cli_state.no_color,
    )
    logger.info("Start gh-trs")
    return settings


@contextmanager
def step(name: str) -> Iterator[None]:
    """
    Log ``Running``/``Success``/``Failed`` around one stage of a command.

    gh-trs and network errors end the command with exit status 1.
    """
    logger.info(f"Running {name}")
    try:
        yield
    except ValidationError as e:
        details = "\n".join(f"  - {error}" for error in e.errors)
        logger.error(f"Failed {name} with error:\n{details}")
        raise typer.Exit(1) from e
    except (GhTrsError, httpx.HTTPError) as e:
        logger.error(f"Failed {name} with error: {e}")
        raise typer.Exit(1) from e
    logger.info(f"Success {name}")


def github_client(
    settings: GhTrsSettings,
    gh_token: str | None,
    required: bool = True,
) -> GitHubClient:
    """
    Build a GitHub client from the ``--gh-token`` flag or the environment.

    Raises:
        ConfigError: If ``required`` and no token is available
    """
    token = settings.resolve_github_token(gh_token) if required else (gh_token or settings.github_token)
    return GitHubClient(
        token,
        api_url=settings.github_api_url,
        timeout=settings.request_timeout,
    )


def config_locations_or_default(locations: list[str] | None) -> list[str]:
    return locations or [DEFAULT_CONFIG_LOCATION]
