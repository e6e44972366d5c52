"""
CLI UI components for gh-trs.
"""

from gh_trs.cli.ui.console import (
    console,
    create_configs_table,
    create_test_results_table,
    print_success,
    print_warning,
    set_no_color,
)

__all__ = [
    "console",
    "create_configs_table",
    "create_test_results_table",
    "print_success",
    "print_warning",
    "set_no_color",
]
