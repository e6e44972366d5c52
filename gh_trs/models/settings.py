"""
Runtime settings for gh-trs.

Settings come from environment variables (``GH_TRS_*`` plus the conventional
``GITHUB_TOKEN``, ``SAPPORO_RUN_DIR`` and ``CI``) and an optional ``.env`` file
in the working directory. Command-line flags override them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_trs.exceptions import ConfigError

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class GhTrsSettings(BaseSettings):
    """
    Main gh-trs settings.

    Priority (highest to lowest):
    1. Values passed explicitly (CLI flags)
    2. Environment variables
    3. ``.env`` file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="GH_TRS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_TRS_GITHUB_TOKEN", "GITHUB_TOKEN", "github_token"),
        description="GitHub Personal Access Token",
    )
    github_api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API",
    )
    sapporo_run_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_TRS_SAPPORO_RUN_DIR", "SAPPORO_RUN_DIR", "sapporo_run_dir"),
        description="Run directory mounted into the sapporo-service container",
    )
    ci: bool = Field(
        default=False,
        validation_alias=AliasChoices("CI", "ci"),
        description="Running inside a CI environment",
    )
    github_server_url: str = Field(
        default="https://github.com",
        validation_alias=AliasChoices("GITHUB_SERVER_URL", "github_server_url"),
    )
    github_repository: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_REPOSITORY", "github_repository"),
    )
    github_run_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_RUN_ID", "github_run_id"),
        description="Set by GitHub Actions; links verified versions to their test run",
    )
    poll_interval: float = Field(
        default=5.0,
        ge=0.0,
        description="Seconds between WES run status polls",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0.0,
        description="HTTP request timeout in seconds",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None = console only)",
    )
    json_logs: bool = Field(
        default=False,
        description="Use JSON format for file logs",
    )

    def resolve_github_token(self, arg_token: str | None = None) -> str:
        """
        Pick the GitHub token, preferring the command-line value.

        Raises:
            ConfigError: If no token is available
        """
        token = arg_token or self.github_token
        if not token:
            raise ConfigError(
                "No GitHub token provided. Please set the GITHUB_TOKEN environment "
                "variable or pass the --gh-token flag."
            )
        return token

    def ci_run_url(self) -> str | None:
        """URL of the current GitHub Actions run, if there is one."""
        if self.github_repository and self.github_run_id:
            return (
                f"{self.github_server_url.rstrip('/')}/{self.github_repository}"
                f"/actions/runs/{self.github_run_id}"
            )
        return None

    def get_sapporo_run_dir(self) -> Path:
        """Run directory for sapporo, defaulting to ``./sapporo_run``."""
        if self.sapporo_run_dir:
            return Path(self.sapporo_run_dir)
        return Path.cwd() / "sapporo_run"
