"""
Tests for registration template generation.
"""

import pytest
import yaml

from gh_trs.clients.github import GitHubClient
from gh_trs.core.raw_url import RawUrl
from gh_trs.core.template import build_template, make_template, obtain_wf_files
from gh_trs.exceptions import ConfigError
from gh_trs.models.config import FileType, LanguageType

from conftest import COMMIT

REPO = "/repos/octocat/workflows"
WF_LOCATION = "https://github.com/octocat/workflows/blob/main/cwl/trimming_and_qc.cwl"
MAIN_BASE = "https://raw.githubusercontent.com/octocat/workflows/main"


@pytest.fixture
def github(mock_transport):
    client = GitHubClient(
        "ghp_test",
        transport=mock_transport({
            f"GET {REPO}": (200, {"default_branch": "main", "license": {"spdx_id": "Apache-2.0"}}),
            f"GET {REPO}/branches/main": (200, {"commit": {"sha": COMMIT}}),
            f"GET {REPO}/readme": (200, {
                "html_url": "https://github.com/octocat/workflows/blob/main/README.md",
            }),
            "GET /user": (200, {"login": "octocat", "name": "Mona Lisa Octocat", "company": None}),
            f"GET {REPO}/contents/cwl": (200, [
                {"type": "file", "path": "cwl/trimming_and_qc.cwl"},
                {"type": "dir", "path": "cwl/tools"},
            ]),
            f"GET {REPO}/contents/cwl/tools": (200, [
                {"type": "file", "path": "cwl/tools/fastqc.cwl"},
            ]),
        }),
    )
    yield client
    client.close()


class TestBuildTemplate:
    """Tests for building a template from a GitHub workflow URL."""

    def test_metadata(self, github, remote_files):
        config = build_template(WF_LOCATION, github)
        assert config.version == "1.0.0"
        assert config.license == "Apache-2.0"
        assert config.authors[0].github_account == "octocat"
        assert config.workflow.name == "trimming_and_qc"
        assert config.workflow.readme == f"{MAIN_BASE}/README.md"
        assert config.workflow.language.type == LanguageType.CWL
        assert config.workflow.language.version == "v1.2"
        assert config.workflow.testing[0].id == "test_1"

    def test_files(self, github, remote_files):
        files = build_template(WF_LOCATION, github).workflow.files
        assert [(f.target, f.type) for f in files] == [
            ("trimming_and_qc.cwl", FileType.PRIMARY),
            ("tools/fastqc.cwl", FileType.SECONDARY),
        ]
        assert files[1].url == f"{MAIN_BASE}/cwl/tools/fastqc.cwl"

    def test_use_commit_url(self, github, remote_files):
        config = build_template(WF_LOCATION, github, use_commit_url=True)
        assert all(COMMIT in f.url for f in config.workflow.files)
        assert COMMIT in config.workflow.readme

    def test_fresh_id_each_time(self, github, remote_files):
        assert build_template(WF_LOCATION, github).id != build_template(WF_LOCATION, github).id

    def test_percent_encoded_primary_file(self, mock_transport):
        client = GitHubClient(
            "ghp_test",
            transport=mock_transport({
                f"GET {REPO}/contents/cwl": (200, [
                    {"type": "file", "path": "cwl/my wf.cwl"},
                    {"type": "file", "path": "cwl/tool.cwl"},
                ]),
            }),
        )
        primary = RawUrl.parse(
            f"https://raw.githubusercontent.com/octocat/workflows/{COMMIT}/cwl/my%20wf.cwl", client
        )
        files = obtain_wf_files(client, primary)
        client.close()

        assert [(f.target, f.type) for f in files] == [
            ("my wf.cwl", FileType.PRIMARY),
            ("tool.cwl", FileType.SECONDARY),
        ]
        assert files[0].url == (
            f"https://raw.githubusercontent.com/octocat/workflows/{COMMIT}/cwl/my%20wf.cwl"
        )


class TestMakeTemplate:
    """Tests for writing templates."""

    def test_writes_yaml(self, github, remote_files, tmp_path):
        path = make_template(WF_LOCATION, github, tmp_path / "gh-trs-config.yml")
        data = yaml.safe_load(path.read_text())
        assert data["workflow"]["language"] == {"type": "CWL", "version": "v1.2"}

    def test_rejects_extension_before_any_request(self, github, tmp_path):
        with pytest.raises(ConfigError, match="Unsupported output file extension"):
            make_template(WF_LOCATION, github, tmp_path / "gh-trs-config.toml")
        assert not (tmp_path / "gh-trs-config.toml").exists()
