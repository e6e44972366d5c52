"""
Registration file models for gh-trs.

A registration file (``gh-trs-config.yml``) describes one version of one
workflow: who wrote it, where its files live and how to test it.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field, model_validator

from gh_trs.utils.helpers import is_remote_url, url_last_segment


class LanguageType(str, Enum):
    """Workflow description languages understood by gh-trs."""

    CWL = "CWL"
    WDL = "WDL"
    NFL = "NFL"
    SMK = "SMK"

    @property
    def engine_name(self) -> str:
        """Workflow engine the WES uses for this language."""
        return {
            "CWL": "cwltool",
            "WDL": "cromwell",
            "NFL": "nextflow",
            "SMK": "snakemake",
        }[self.value]


class FileType(str, Enum):
    """Role of a workflow file."""

    PRIMARY = "primary"
    SECONDARY = "secondary"


class TestFileType(str, Enum):
    """Role of a test file."""

    __test__ = False

    WF_PARAMS = "wf_params"
    WF_ENGINE_PARAMS = "wf_engine_params"
    OTHER = "other"


def _default_target(data: Any) -> Any:
    """Fill a missing target with the last path segment of the URL."""
    if isinstance(data, dict) and not data.get("target") and data.get("url"):
        data = dict(data)
        data["target"] = url_last_segment(str(data["url"]))
    return data


def _check_url(value: str) -> str:
    if not is_remote_url(value):
        raise ValueError(f"Invalid URL: {value}")
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]


class Author(BaseModel):
    """A workflow author, identified by their GitHub account."""

    github_account: str = Field(description="GitHub login of the author")
    name: str | None = Field(default=None, description="Full name")
    affiliation: str | None = Field(default=None, description="Affiliation")
    orcid: str | None = Field(default=None, description="ORCID iD")


class Language(BaseModel):
    """Workflow language and its version, both inferable from the primary file."""

    type: LanguageType | None = Field(default=None, description="Language type")
    version: str | None = Field(default=None, description="Language version")


class File(BaseModel):
    """A workflow file and the path it is placed at when the workflow runs."""

    url: UrlStr = Field(description="Location of the file")
    target: str = Field(description="Path relative to the workflow root")
    type: FileType = Field(description="primary or secondary")

    @model_validator(mode="before")
    @classmethod
    def fill_target(cls, data: Any) -> Any:
        return _default_target(data)


class TestFile(BaseModel):
    """A file used by a test case."""

    __test__ = False

    url: UrlStr = Field(description="Location of the file")
    target: str = Field(description="Path relative to the run directory")
    type: TestFileType = Field(description="wf_params, wf_engine_params or other")

    @model_validator(mode="before")
    @classmethod
    def fill_target(cls, data: Any) -> Any:
        return _default_target(data)


class Testing(BaseModel):
    """A named test case of a workflow."""

    __test__ = False

    id: str = Field(description="Test id, unique within the workflow")
    files: list[TestFile] = Field(default_factory=list)

    @classmethod
    def default(cls) -> "Testing":
        """Test case written into freshly generated templates."""
        return cls(
            id="test_1",
            files=[
                TestFile(
                    url="https://example.com/path/to/wf_params.json",
                    type=TestFileType.WF_PARAMS,
                ),
                TestFile(
                    url="https://example.com/path/to/wf_engine_params.json",
                    type=TestFileType.WF_ENGINE_PARAMS,
                ),
                TestFile(
                    url="https://example.com/path/to/data.fq",
                    type=TestFileType.OTHER,
                ),
            ],
        )

    def files_of_type(self, file_type: TestFileType) -> list[TestFile]:
        return [f for f in self.files if f.type == file_type]

    def _content_of(self, file_type: TestFileType) -> str:
        from gh_trs.clients import remote

        files = self.files_of_type(file_type)
        if not files:
            return "{}"
        return remote.fetch_raw_content(files[0].url)

    def wf_params(self) -> str:
        """Content of the workflow parameters file, or ``{}`` if there is none."""
        return self._content_of(TestFileType.WF_PARAMS)

    def wf_engine_params(self) -> str:
        """Content of the engine parameters file, or ``{}`` if there is none."""
        return self._content_of(TestFileType.WF_ENGINE_PARAMS)


class Workflow(BaseModel):
    """The workflow part of a registration."""

    name: str = Field(description="Workflow name")
    readme: UrlStr = Field(description="Location of the README")
    language: Language = Field(default_factory=Language)
    files: list[File] = Field(default_factory=list)
    testing: list[Testing] = Field(default_factory=list)

    def primary_wf(self) -> File:
        """Return the primary workflow file.

        Raises:
            ValueError: If there is not exactly one primary file
        """
        primaries = [f for f in self.files if f.type == FileType.PRIMARY]
        if len(primaries) != 1:
            raise ValueError(
                f"Workflow {self.name} must have exactly one primary file, found {len(primaries)}"
            )
        return primaries[0]


class Config(BaseModel):
    """
    A gh-trs registration entry.

    One entry maps to exactly one published TRS tool version,
    identified by ``(id, version)``.
    """

    id: UUID = Field(description="Workflow id, stable across versions")
    version: str = Field(description="Workflow version (X.Y.Z)")
    license: str = Field(description="SPDX license id")
    authors: list[Author] = Field(default_factory=list)
    workflow: Workflow

    @property
    def title(self) -> str:
        """Short human-readable identifier used in log messages."""
        return f"workflow_id: {self.id}, version: {self.version}"

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible representation, as written to disk."""
        return self.model_dump(mode="json")
