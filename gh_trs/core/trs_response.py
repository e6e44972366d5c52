"""
Rendering of TRS API documents.

``TrsState`` holds the service-info, tool classes and tools of one TRS API.
It starts from what is already published on GitHub Pages, takes in
registrations one by one and renders every document as a path to JSON
mapping that can be committed to the publish branch.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from gh_trs.clients import remote
from gh_trs.clients.trs_api import TrsEndpoint
from gh_trs.exceptions import GhTrsError
from gh_trs.models.config import Config
from gh_trs.models.trs import (
    Checksum,
    FileType,
    FileWrapper,
    ServiceInfo,
    Tool,
    ToolClass,
    ToolFile,
    ToolVersion,
)

logger = logging.getLogger(__name__)


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _fetch_or_none(url: str) -> str | None:
    try:
        return remote.fetch_raw_content(url)
    except (GhTrsError, httpx.HTTPError) as e:
        logger.warning(f"Failed to fetch {url}, publishing it without content: {e}")
        return None


def generate_descriptor(config: Config) -> FileWrapper:
    """Primary workflow file with its checksum; content is omitted if it cannot be fetched."""
    primary = config.workflow.primary_wf()
    content = _fetch_or_none(primary.url)
    if content is None:
        return FileWrapper(url=primary.url)
    return FileWrapper(
        content=content,
        checksum=[Checksum.from_string(content)],
        url=primary.url,
    )


def generate_files(config: Config) -> list[ToolFile]:
    files = []
    for file in config.workflow.files:
        content = _fetch_or_none(file.url)
        files.append(
            ToolFile(
                path=file.target,
                file_type=FileType.from_file_type(file.type),
                checksum=Checksum.from_string(content) if content is not None else None,
            )
        )
    return files


def generate_tests(config: Config) -> list[FileWrapper]:
    tests = []
    for test in config.workflow.testing:
        content = json.dumps(test.model_dump(mode="json"), separators=(",", ":"))
        tests.append(FileWrapper(content=content, checksum=[Checksum.from_string(content)]))
    return tests


class TrsState:
    """
    In-memory copy of a TRS API that registrations are merged into.

    Example:
        >>> state = TrsState.load("octocat", "my-trs")
        >>> state.add_config(config, verified=True)
        >>> contents = state.generate_contents()
    """

    def __init__(
        self,
        owner: str,
        name: str,
        service_info: ServiceInfo | None = None,
        tool_classes: list[ToolClass] | None = None,
        tools: list[Tool] | None = None,
    ):
        self.owner = owner
        self.name = name
        self.service_info = ServiceInfo.new_or_update(service_info, owner, name)
        self.tool_classes = list(tool_classes or [])
        if not any(tc.id == "workflow" for tc in self.tool_classes):
            self.tool_classes.append(ToolClass.default())
        self.tools = list(tools or [])
        self._version_contents: dict[str, str] = {}
        self._touched: list[str] = []

    @classmethod
    def load(
        cls,
        owner: str,
        name: str,
        transport: httpx.BaseTransport | None = None,
    ) -> "TrsState":
        """
        Read the TRS API currently served from ``owner/name``'s GitHub Pages.

        Documents that cannot be read are treated as absent.
        """
        endpoint = TrsEndpoint.new_gh_pages(owner, name, transport=transport)

        def _get(getter):
            try:
                return getter()
            except (GhTrsError, httpx.HTTPError) as e:
                logger.debug(f"No existing document at {endpoint.url}: {e}")
                return None

        service_info = _get(endpoint.get_service_info)
        if service_info is not None and not service_info.is_gh_trs():
            logger.warning(f"{endpoint.url} is not a gh-trs TRS API; its service-info is replaced")
        return cls(
            owner,
            name,
            service_info=service_info,
            tool_classes=_get(endpoint.get_tool_classes),
            tools=_get(endpoint.get_tools),
        )

    def get_tool(self, wf_id: str) -> Tool | None:
        for tool in self.tools:
            if tool.id == wf_id:
                return tool
        return None

    def add_config(
        self,
        config: Config,
        verified: bool = False,
        verified_source: list[str] | None = None,
    ) -> ToolVersion:
        """
        Merge a registration and render its version level documents.

        Returns:
            The new tool version
        """
        language = config.workflow.language.type
        if language is None:
            raise GhTrsError(f"The language of {config.title} is not set. Run validate first.")

        tool = self.get_tool(str(config.id))
        if tool is None:
            tool = Tool.new(config, self.owner, self.name)
            self.tools.append(tool)
        tool_version = tool.add_new_tool_version(config, verified, verified_source)
        if tool.id not in self._touched:
            self._touched.append(tool.id)
        logger.debug(f"Added {config.title} (verified: {tool_version.verified})")

        version_dir = f"tools/{tool.id}/versions/{tool_version.version}"
        type_dir = f"{version_dir}/{language.value}"
        self._version_contents.update({
            f"{version_dir}/gh-trs-config.json": to_json(config.to_dict()),
            f"{version_dir}/index.json": to_json(tool_version.to_json_dict()),
            f"{type_dir}/descriptor/index.json": to_json(generate_descriptor(config).to_json_dict()),
            f"{type_dir}/files/index.json": to_json([f.to_json_dict() for f in generate_files(config)]),
            f"{type_dir}/tests/index.json": to_json([t.to_json_dict() for t in generate_tests(config)]),
            f"{version_dir}/containerfile/index.json": to_json([]),
        })
        return tool_version

    def generate_contents(self) -> dict[str, str]:
        """Every document to write, keyed by path relative to the branch root."""
        contents = {
            "service-info/index.json": to_json(self.service_info.to_json_dict()),
            "toolClasses/index.json": to_json([tc.to_json_dict() for tc in self.tool_classes]),
            "tools/index.json": to_json([t.to_json_dict() for t in self.tools]),
        }
        for tool in self.tools:
            if tool.id not in self._touched:
                continue
            contents[f"tools/{tool.id}/index.json"] = to_json(tool.to_json_dict())
            contents[f"tools/{tool.id}/versions/index.json"] = to_json(
                [v.to_json_dict() for v in tool.versions]
            )
        contents.update(self._version_contents)
        return contents
