"""
Console output for the gh-trs CLI.

Logging goes to stderr through the logger; this module prints the
results a user asked for (written files, test summaries) to stdout.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from gh_trs.models.config import Config
from gh_trs.models.wes import RunStatus, TestResult

GH_TRS_THEME = Theme({
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "running": "yellow",
    "complete": "green",
    "failed": "red",
})

console = Console(theme=GH_TRS_THEME)


def set_no_color(no_color: bool) -> None:
    console.no_color = no_color


def print_warning(message: str, prefix: str = "Warning") -> None:
    """Print a warning message."""
    console.print(f"[warning]{prefix}:[/] {escape(message)}")


def print_success(message: str, prefix: str = "Success") -> None:
    """Print a success message."""
    console.print(f"[success]{prefix}:[/] {escape(message)}")


def format_status(status: RunStatus) -> str:
    return f"[{status.value}]{status.value}[/]"


def create_configs_table(configs: list[Config]) -> Table:
    table = Table(title="Registrations", show_lines=False)
    table.add_column("Workflow ID", style="cyan", no_wrap=True)
    table.add_column("Version")
    table.add_column("Name")
    table.add_column("Language")
    table.add_column("Tests", justify="right")

    for config in configs:
        language = config.workflow.language
        table.add_row(
            str(config.id),
            escape(config.version),
            escape(config.workflow.name),
            f"{language.type.value} {language.version}" if language.type else "-",
            str(len(config.workflow.testing)),
        )
    return table


def create_test_results_table(results: dict[str, list[TestResult]]) -> Table:
    """
    Summarise test results.

    Args:
        results: Results keyed by ``<id>@<version>``

    Returns:
        Table with one row per test case
    """
    table = Table(title="Test Results")
    table.add_column("Workflow", style="cyan", no_wrap=True)
    table.add_column("Test ID")
    table.add_column("Run ID", style="dim")
    table.add_column("Status")

    for key, config_results in results.items():
        for result in config_results:
            table.add_row(
                escape(key),
                escape(result.id),
                result.run_id or "-",
                format_status(result.status),
            )
    return table
