"""
Clients for the services gh-trs talks to.

- remote: plain file downloads
- github: GitHub REST API
- trs_api: published GA4GH TRS APIs
- wes: GA4GH WES
- sapporo: local sapporo-service container
"""

from gh_trs.clients.github import GitHubClient
from gh_trs.clients.remote import fetch_raw_content
from gh_trs.clients.sapporo import SapporoService, default_wes_location
from gh_trs.clients.trs_api import TrsEndpoint
from gh_trs.clients.wes import WesClient

__all__ = [
    "GitHubClient",
    "SapporoService",
    "TrsEndpoint",
    "WesClient",
    "default_wes_location",
    "fetch_raw_content",
]
