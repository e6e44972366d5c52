"""
Plain HTTP fetches of remote file contents.
"""

from __future__ import annotations

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from gh_trs.exceptions import GhTrsError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# Retry policy shared by every idempotent request gh-trs sends
network_retry = retry(
    retry=retry_if_exception_type(httpx.TransportError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
)


@network_retry
def fetch_raw_content(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Download a file and return its text.

    Args:
        url: http(s) location of the file
        timeout: Request timeout in seconds

    Returns:
        The response body as text

    Raises:
        GhTrsError: If the server answers with a non-success status
    """
    logger.debug(f"Fetching {url}")
    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        response = client.get(url, headers={"Accept": "text/plain"})
    if not response.is_success:
        raise GhTrsError(
            f"Failed to fetch raw content from {url} with status code {response.status_code}"
        )
    return response.text
