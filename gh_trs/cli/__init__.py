"""
CLI package for gh-trs.

Provides the command-line interface using Typer.
"""

from gh_trs.cli.app import app, main

__all__ = ["app", "main"]
