"""
gh-trs - publish and test your own GA4GH TRS API using GitHub

Turns registration files describing CWL, WDL, Nextflow and Snakemake
workflows into a GA4GH Tool Registry Service API served from GitHub Pages,
optionally testing every workflow on a Workflow Execution Service first.
"""

__version__ = "0.1.0"
__author__ = "gh-trs Team"
__license__ = "Apache-2.0"

from gh_trs.models.config import Config

__all__ = [
    "__version__",
    "Config",
]
