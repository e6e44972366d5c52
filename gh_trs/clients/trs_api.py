"""
Read-only client for a published GA4GH TRS API.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from gh_trs.clients.remote import network_retry
from gh_trs.exceptions import TrsError
from gh_trs.models.trs import ServiceInfo, Tool, ToolClass, gh_pages_url
from gh_trs.utils.helpers import with_trailing_slash

logger = logging.getLogger(__name__)


class TrsEndpoint:
    """
    A TRS API root, e.g. ``https://<owner>.github.io/<name>/``.

    The URL always ends with a single slash.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = with_trailing_slash(url)
        self._timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"TrsEndpoint({self.url!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TrsEndpoint) and self.url == other.url

    @classmethod
    def new_from_url(cls, url: str, **kwargs: Any) -> "TrsEndpoint":
        return cls(url, **kwargs)

    @classmethod
    def new_gh_pages(cls, owner: str, name: str, **kwargs: Any) -> "TrsEndpoint":
        return cls(gh_pages_url(owner, name), **kwargs)

    @classmethod
    def new_from_tool_version_url(cls, url: str, **kwargs: Any) -> "TrsEndpoint":
        """
        Derive the API root from a tool version URL.

        ``<root>/tools/<id>/versions/<version>`` loses its last four path
        segments.

        Raises:
            TrsError: If the URL has no host
        """
        parsed = urlparse(url.strip())
        if not parsed.scheme or not parsed.netloc:
            raise TrsError(f"Invalid url: {url}")
        segments = [s for s in parsed.path.split("/") if s][:-4]
        path = "/".join(segments)
        root = f"{parsed.scheme}://{parsed.netloc}/{path}"
        return cls(root, **kwargs)

    @network_retry
    def _get_json(self, path: str) -> Any:
        url = f"{self.url}{path}"
        logger.debug(f"GET {url}")
        with httpx.Client(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = client.get(url, headers={"Accept": "application/json"})
        if not response.is_success:
            raise TrsError(
                f"Failed to get request to {url} with status: {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise TrsError(f"Failed to parse the response from {url}: {e}") from e

    def _parse(self, adapter: TypeAdapter, data: Any, what: str) -> Any:
        try:
            return adapter.validate_python(data)
        except PydanticValidationError as e:
            raise TrsError(f"Invalid {what} document at {self.url}: {e}") from e

    def get_service_info(self) -> ServiceInfo:
        return self._parse(
            TypeAdapter(ServiceInfo), self._get_json("service-info"), "service-info"
        )

    def get_tool_classes(self) -> list[ToolClass]:
        return self._parse(
            TypeAdapter(list[ToolClass]), self._get_json("toolClasses"), "toolClasses"
        )

    def get_tools(self) -> list[Tool]:
        return self._parse(TypeAdapter(list[Tool]), self._get_json("tools"), "tools")

    def get_tool(self, wf_id: str) -> Tool:
        return self._parse(TypeAdapter(Tool), self._get_json(f"tools/{wf_id}"), "tool")

    def is_valid(self) -> None:
        """
        Check that the endpoint is a gh-trs generated TRS API.

        Raises:
            TrsError: If it is unreachable or of another kind
        """
        if not self.get_service_info().is_gh_trs():
            raise TrsError("gh-trs only supports gh-trs 2.0.1 as a TRS endpoint")

    def to_config_url(self, wf_id: str, wf_version: str) -> str:
        return f"{self.url}tools/{wf_id}/versions/{wf_version}/gh-trs-config.json"

