"""Allow ``python -m gh_trs``."""

from gh_trs.cli.app import main

main()
