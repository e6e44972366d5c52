"""
Tests for rendering TRS API documents.
"""

import json

import pytest

from gh_trs.core.trs_response import (
    TrsState,
    generate_descriptor,
    generate_files,
    generate_tests,
)
from gh_trs.exceptions import GhTrsError
from gh_trs.models.config import Language
from gh_trs.models.trs import ServiceInfo, Tool
from gh_trs.utils.helpers import sha256_hex

from conftest import CWL_CONTENT, PRIMARY_URL, SECONDARY_URL, WF_ID

VERSION_DIR = f"tools/{WF_ID}/versions/1.0.0"


class TestGenerators:
    """Tests for version level documents."""

    def test_descriptor(self, config, remote_files):
        descriptor = generate_descriptor(config)
        assert descriptor.content == CWL_CONTENT
        assert descriptor.url == PRIMARY_URL
        assert descriptor.checksum[0].checksum == sha256_hex(CWL_CONTENT)

    def test_descriptor_without_content(self, config, remote_files):
        del remote_files[PRIMARY_URL]
        descriptor = generate_descriptor(config)
        assert descriptor.content is None
        assert descriptor.checksum is None
        assert descriptor.url == PRIMARY_URL

    def test_files(self, config, remote_files):
        files = [f.to_json_dict() for f in generate_files(config)]
        assert files[0]["path"] == "trimming_and_qc.cwl"
        assert files[0]["file_type"] == "PRIMARY_DESCRIPTOR"
        assert files[1]["file_type"] == "SECONDARY_DESCRIPTOR"
        assert files[1]["checksum"]["checksum"] == sha256_hex(remote_files[SECONDARY_URL])

    def test_files_without_content(self, config, remote_files):
        del remote_files[SECONDARY_URL]
        files = generate_files(config)
        assert files[1].checksum is None

    def test_tests(self, config):
        [test] = generate_tests(config)
        assert json.loads(test.content)["id"] == "test_1"
        assert " " not in test.content
        assert test.checksum[0].checksum == sha256_hex(test.content)


class TestTrsState:
    """Tests for merging registrations into a TRS API."""

    def test_fresh_state(self):
        state = TrsState("octocat", "my-trs")
        assert state.service_info.name == "octocat/my-trs"
        assert [tc.id for tc in state.tool_classes] == ["workflow"]
        assert state.tools == []

    def test_add_config(self, config, remote_files):
        state = TrsState("octocat", "my-trs")
        version = state.add_config(config, verified=True, verified_source=["https://ci/1"])
        assert version.verified
        assert state.get_tool(WF_ID).versions == [version]

        contents = state.generate_contents()
        assert set(contents) == {
            "service-info/index.json",
            "toolClasses/index.json",
            "tools/index.json",
            f"tools/{WF_ID}/index.json",
            f"tools/{WF_ID}/versions/index.json",
            f"{VERSION_DIR}/index.json",
            f"{VERSION_DIR}/gh-trs-config.json",
            f"{VERSION_DIR}/containerfile/index.json",
            f"{VERSION_DIR}/CWL/descriptor/index.json",
            f"{VERSION_DIR}/CWL/files/index.json",
            f"{VERSION_DIR}/CWL/tests/index.json",
        }
        assert all(content.endswith("\n") for content in contents.values())
        assert json.loads(contents[f"{VERSION_DIR}/gh-trs-config.json"]) == config.to_dict()
        assert json.loads(contents[f"{VERSION_DIR}/containerfile/index.json"]) == []
        version_doc = json.loads(contents[f"{VERSION_DIR}/index.json"])
        assert version_doc["verified_source"] == ["https://ci/1"]
        assert version_doc["descriptor_type"] == ["CWL"]

    def test_language_required(self, config):
        config.workflow.language = Language()
        with pytest.raises(GhTrsError, match="Run validate first"):
            TrsState("octocat", "my-trs").add_config(config)

    def test_existing_tools_are_kept(self, config, remote_files):
        other = Tool(url="https://octocat.github.io/my-trs/tools/other", id="other", organization="octocat")
        state = TrsState("octocat", "my-trs", tools=[other])
        state.add_config(config)
        contents = state.generate_contents()
        assert [t["id"] for t in json.loads(contents["tools/index.json"])] == ["other", WF_ID]
        # untouched tools keep their published per-tool documents
        assert "tools/other/index.json" not in contents

    def test_republishing_a_version_replaces_it(self, config, remote_files):
        state = TrsState("octocat", "my-trs")
        state.add_config(config, verified=True)
        state.add_config(config, verified=False)
        versions = json.loads(state.generate_contents()[f"tools/{WF_ID}/versions/index.json"])
        assert len(versions) == 1
        assert versions[0]["verified"] is False

    def test_service_info_keeps_created_at(self):
        published = ServiceInfo.new_or_update(None, "octocat", "my-trs")
        published.created_at = "2021-01-01T00:00:00Z"
        state = TrsState("octocat", "my-trs", service_info=published)
        assert state.service_info.created_at == "2021-01-01T00:00:00Z"


class TestLoad:
    """Tests for reading the published TRS API."""

    def test_nothing_published(self, mock_transport):
        state = TrsState.load("octocat", "my-trs", transport=mock_transport({}))
        assert state.tools == []
        assert [tc.id for tc in state.tool_classes] == ["workflow"]

    def test_published(self, mock_transport):
        created = "2021-01-01T00:00:00Z"
        routes = {
            "GET /my-trs/service-info": (200, {
                "id": "io.github.octocat.my-trs",
                "name": "octocat/my-trs",
                "type": {"group": "org.ga4gh", "artifact": "gh-trs", "version": "2.0.1"},
                "organization": {"name": "octocat", "url": "https://github.com/octocat"},
                "createdAt": created,
                "version": "2.0.1",
            }),
            "GET /my-trs/toolClasses": (200, [{"id": "workflow", "name": "Workflow"}]),
            "GET /my-trs/tools": (200, [{
                "url": "https://octocat.github.io/my-trs/tools/other",
                "id": "other",
                "organization": "octocat",
                "versions": [],
            }]),
        }
        state = TrsState.load("octocat", "my-trs", transport=mock_transport(routes))
        assert state.service_info.created_at == created
        assert len(state.tool_classes) == 1
        assert state.get_tool("other") is not None
