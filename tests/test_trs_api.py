"""
Tests for the TRS API client.
"""

import pytest

from gh_trs.clients.trs_api import TrsEndpoint
from gh_trs.exceptions import TrsError

ROOT = "https://octocat.github.io/my-trs/"
TOOL_ID = "3d5c6b2e-8f1a-4c7d-9e2b-1a2b3c4d5e6f"

SERVICE_INFO = {
    "id": "io.github.octocat.my-trs",
    "name": "octocat/my-trs",
    "type": {"group": "org.ga4gh", "artifact": "gh-trs", "version": "2.0.1"},
    "organization": {"name": "octocat", "url": "https://github.com/octocat"},
    "version": "2.0.1",
}

TOOL = {
    "url": f"{ROOT}tools/{TOOL_ID}",
    "id": TOOL_ID,
    "organization": "octocat",
    "toolclass": {"id": "workflow", "name": "Workflow"},
    "versions": [
        {"url": f"{ROOT}tools/{TOOL_ID}/versions/1.0.0", "id": "1.0.0", "verified": True},
        {"url": f"{ROOT}tools/{TOOL_ID}/versions/1.1.0", "id": "1.1.0"},
    ],
}


@pytest.fixture
def endpoint(mock_transport):
    return TrsEndpoint(
        ROOT,
        transport=mock_transport({
            "GET /my-trs/service-info": (200, SERVICE_INFO),
            "GET /my-trs/toolClasses": (200, [{"id": "workflow", "name": "Workflow"}]),
            "GET /my-trs/tools": (200, [TOOL]),
            f"GET /my-trs/tools/{TOOL_ID}": (200, TOOL),
        }),
    )


class TestConstructors:
    """Tests for building endpoints."""

    def test_trailing_slash(self):
        assert TrsEndpoint("https://octocat.github.io/my-trs").url == ROOT
        assert TrsEndpoint(" https://octocat.github.io/my-trs// ").url == ROOT

    def test_gh_pages(self):
        assert TrsEndpoint.new_gh_pages("octocat", "my-trs") == TrsEndpoint(ROOT)

    def test_from_tool_version_url(self):
        endpoint = TrsEndpoint.new_from_tool_version_url(
            f"{ROOT}tools/{TOOL_ID}/versions/1.0.0"
        )
        assert endpoint.url == ROOT

    def test_from_tool_version_url_at_host_root(self):
        endpoint = TrsEndpoint.new_from_tool_version_url(
            "https://trs.example.com/tools/abc/versions/1.0.0"
        )
        assert endpoint.url == "https://trs.example.com/"

    def test_from_invalid_url(self):
        with pytest.raises(TrsError, match="Invalid url"):
            TrsEndpoint.new_from_tool_version_url("tools/abc/versions/1.0.0")

    def test_to_config_url(self):
        assert TrsEndpoint(ROOT).to_config_url(TOOL_ID, "1.0.0") == (
            f"{ROOT}tools/{TOOL_ID}/versions/1.0.0/gh-trs-config.json"
        )


class TestQueries:
    """Tests for reading TRS documents."""

    def test_service_info(self, endpoint):
        info = endpoint.get_service_info()
        assert info.name == "octocat/my-trs"
        assert info.is_gh_trs()

    def test_is_valid(self, endpoint):
        endpoint.is_valid()

    def test_tool_classes(self, endpoint):
        assert [c.id for c in endpoint.get_tool_classes()] == ["workflow"]

    def test_tools(self, endpoint):
        [tool] = endpoint.get_tools()
        assert tool.id == TOOL_ID
        assert tool.versions[0].verified is True

    def test_tool(self, endpoint):
        tool = endpoint.get_tool(TOOL_ID)
        assert [v.version for v in tool.versions] == ["1.0.0", "1.1.0"]

    def test_missing_document(self, endpoint):
        with pytest.raises(TrsError, match="status: 404"):
            endpoint.get_tool("unknown")

    def test_invalid_document(self, mock_transport):
        endpoint = TrsEndpoint(
            ROOT,
            transport=mock_transport({"GET /my-trs/tools": (200, [{"id": "no-url"}])}),
        )
        with pytest.raises(TrsError, match="Invalid tools document"):
            endpoint.get_tools()

    def test_not_gh_trs(self, mock_transport):
        info = {**SERVICE_INFO, "type": {"group": "org.ga4gh", "artifact": "trs", "version": "2.0.1"}}
        endpoint = TrsEndpoint(
            ROOT,
            transport=mock_transport({"GET /my-trs/service-info": (200, info)}),
        )
        with pytest.raises(TrsError, match="only supports gh-trs 2.0.1"):
            endpoint.is_valid()
