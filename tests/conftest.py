"""
Test configuration and fixtures.
"""

import copy
import json

import httpx
import pytest

from gh_trs.clients import remote
from gh_trs.exceptions import GhTrsError
from gh_trs.models.config import Config

WF_ID = "3d5c6b2e-8f1a-4c7d-9e2b-1a2b3c4d5e6f"
COMMIT = "0fb996810f153be9ad152565227a10e402950953"
RAW_BASE = f"https://raw.githubusercontent.com/octocat/workflows/{COMMIT}"

PRIMARY_URL = f"{RAW_BASE}/cwl/trimming_and_qc.cwl"
SECONDARY_URL = f"{RAW_BASE}/cwl/tools/fastqc.cwl"
README_URL = f"{RAW_BASE}/README.md"
WF_PARAMS_URL = f"{RAW_BASE}/tests/wf_params.json"
DATA_URL = f"{RAW_BASE}/tests/ERR034597_1.small.fq.gz"

CWL_CONTENT = """\
#!/usr/bin/env cwl-runner
cwlVersion: v1.2
class: Workflow
inputs: []
outputs: []
steps: []
"""

SAMPLE_CONFIG = {
    "id": WF_ID,
    "version": "1.0.0",
    "license": "Apache-2.0",
    "authors": [
        {
            "github_account": "octocat",
            "name": "Mona Lisa Octocat",
            "affiliation": "GitHub",
            "orcid": None,
        }
    ],
    "workflow": {
        "name": "trimming_and_qc",
        "readme": README_URL,
        "language": {"type": "CWL", "version": "v1.2"},
        "files": [
            {"url": PRIMARY_URL, "target": "trimming_and_qc.cwl", "type": "primary"},
            {"url": SECONDARY_URL, "target": "tools/fastqc.cwl", "type": "secondary"},
        ],
        "testing": [
            {
                "id": "test_1",
                "files": [
                    {"url": WF_PARAMS_URL, "target": "wf_params.json", "type": "wf_params"},
                    {"url": DATA_URL, "target": "ERR034597_1.small.fq.gz", "type": "other"},
                ],
            }
        ],
    },
}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep host environment variables and .env files out of the tests."""
    for var in (
        "GITHUB_TOKEN",
        "GH_TRS_GITHUB_TOKEN",
        "SAPPORO_RUN_DIR",
        "GH_TRS_SAPPORO_RUN_DIR",
        "CI",
        "GITHUB_REPOSITORY",
        "GITHUB_RUN_ID",
        "GITHUB_SERVER_URL",
        "GH_TRS_LOG_FILE",
        "GH_TRS_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_dict():
    """A registration as loaded from YAML."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def config(config_dict):
    """A validated-looking registration."""
    return Config.model_validate(config_dict)


@pytest.fixture
def remote_files(monkeypatch):
    """
    Serve remote file contents from a dict instead of the network.

    Unknown URLs fail the way a 404 does.
    """
    files = {
        PRIMARY_URL: CWL_CONTENT,
        SECONDARY_URL: "cwlVersion: v1.2\nclass: CommandLineTool\n",
        README_URL: "# workflows\n",
        WF_PARAMS_URL: json.dumps({"fastq_1": {"class": "File", "location": "ERR034597_1.small.fq.gz"}}),
    }

    def fake_fetch(url, timeout=30.0):
        if url not in files:
            raise GhTrsError(f"Failed to fetch raw content from {url} with status code 404")
        return files[url]

    monkeypatch.setattr(remote, "fetch_raw_content", fake_fetch)
    return files


@pytest.fixture
def mock_transport():
    """
    Build an ``httpx.MockTransport`` from ``{"METHOD /path": (status, json)}`` routes.

    Requests are recorded in the ``requests`` list passed in, if any.
    Unknown routes answer 404 with a GitHub-style message.
    """

    def factory(routes, requests=None):
        def handler(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)
            key = f"{request.method} {request.url.path}"
            if key not in routes:
                return httpx.Response(404, json={"message": "Not Found"})
            status, body = routes[key]
            return httpx.Response(status, json=body)

        return httpx.MockTransport(handler)

    return factory
