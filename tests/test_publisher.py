"""
Tests for publishing registrations.
"""

import json

import pytest

from gh_trs.clients.github import GitHubClient
from gh_trs.core.publisher import commit_message, is_verified, publish, write_contents
from gh_trs.exceptions import ConfigError, GhTrsError
from gh_trs.models.wes import RunStatus, TestResult

from conftest import WF_ID

REPO = "/repos/octocat/my-trs"
HEAD = "a" * 40
KEY = f"{WF_ID}@1.0.0"


@pytest.fixture
def empty_pages(mock_transport):
    return mock_transport({})


class TestIsVerified:
    def test_not_tested(self, config):
        assert not is_verified(config, None)
        assert not is_verified(config, {})

    def test_all_passed(self, config):
        results = {KEY: [TestResult(id="test_1", status=RunStatus.COMPLETE)]}
        assert is_verified(config, results)

    def test_some_failed(self, config):
        results = {KEY: [
            TestResult(id="test_1", status=RunStatus.COMPLETE),
            TestResult(id="test_2", status=RunStatus.FAILED),
        ]}
        assert not is_verified(config, results)


class TestWriteContents:
    def test_writes_tree(self, tmp_path):
        write_contents({"tools/index.json": "[]\n", "service-info/index.json": "{}\n"}, tmp_path / "out")
        assert (tmp_path / "out" / "tools" / "index.json").read_text() == "[]\n"

    @pytest.mark.parametrize("path", ["../escape.json", "/etc/passwd"])
    def test_refuses_unsafe_paths(self, tmp_path, path):
        with pytest.raises(GhTrsError, match="Refusing to write"):
            write_contents({path: "x"}, tmp_path)


def test_commit_message(config):
    assert commit_message([config]) == (
        f"Publish 1 workflow version(s) by gh-trs\n\n- workflow_id: {WF_ID}, version: 1.0.0"
    )


class TestPublish:
    """Tests for publishing to a directory or a branch."""

    def test_invalid_repo(self, config, empty_pages):
        with pytest.raises(ConfigError, match="owner/name"):
            publish([config], "not-a-repo", trs_transport=empty_pages)

    def test_to_output_dir(self, config, remote_files, empty_pages, tmp_path):
        results = {KEY: [TestResult(id="test_1", status=RunStatus.COMPLETE)]}
        contents = publish(
            [config],
            "octocat/my-trs",
            test_results=results,
            verified_source=["https://github.com/octocat/my-trs/actions/runs/1"],
            output_dir=tmp_path / "site",
            trs_transport=empty_pages,
        )
        version = json.loads(
            (tmp_path / "site" / "tools" / WF_ID / "versions" / "1.0.0" / "index.json").read_text()
        )
        assert version["verified"] is True
        assert version["verified_source"] == ["https://github.com/octocat/my-trs/actions/runs/1"]
        assert len(list((tmp_path / "site").rglob("*.json"))) == len(contents)

    def test_without_github_client(self, config, remote_files, empty_pages):
        with pytest.raises(GhTrsError, match="GitHub client is required"):
            publish([config], "octocat/my-trs", trs_transport=empty_pages)

    def test_commits_to_new_branch(self, config, remote_files, empty_pages, mock_transport):
        requests = []
        github = GitHubClient(
            "ghp_test",
            transport=mock_transport({
                f"GET {REPO}": (200, {"default_branch": "main"}),
                f"GET {REPO}/git/ref/heads/main": (200, {"object": {"sha": "m" * 40}}),
                f"POST {REPO}/git/refs": (201, {"ref": "refs/heads/gh-pages"}),
                f"GET {REPO}/git/ref/heads/gh-pages": (200, {"object": {"sha": HEAD}}),
                f"GET {REPO}/git/commits/{HEAD}": (200, {"tree": {"sha": "t" * 40}}),
                f"POST {REPO}/git/trees": (201, {"sha": "n" * 40}),
                f"POST {REPO}/git/commits": (201, {"sha": "c" * 40}),
                f"PATCH {REPO}/git/refs/heads/gh-pages": (200, {}),
            }, requests),
        )
        with github:
            contents = publish([config], "octocat/my-trs", github=github, trs_transport=empty_pages)

        paths = [f"{r.method} {r.url.path}" for r in requests]
        # the branch lookup 404s, so it is created before committing
        assert paths[0] == f"GET {REPO}/branches/gh-pages"
        assert f"POST {REPO}/git/refs" in paths
        assert paths[-1] == f"PATCH {REPO}/git/refs/heads/gh-pages"

        tree = json.loads(next(r for r in requests if r.url.path.endswith("/git/trees")).content)
        assert {entry["path"] for entry in tree["tree"]} == set(contents)

        version = json.loads(contents[f"tools/{WF_ID}/versions/1.0.0/index.json"])
        assert version["verified"] is False
