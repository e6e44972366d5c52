"""
CLI commands package.

Each module holds the ``run_*`` function behind one command; ``gh_trs.cli.app``
imports them when the command runs.
"""
