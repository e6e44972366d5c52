"""
GA4GH TRS 2.0.1 response models.

Only the subset of the TRS schema that gh-trs publishes is modelled. Unknown
fields in documents read back from GitHub Pages are ignored.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from gh_trs.models.config import Config, FileType as ConfigFileType
from gh_trs.utils.helpers import sha256_hex, url_last_segment

TRS_ARTIFACT = "gh-trs"
TRS_VERSION = "2.0.1"


def gh_pages_url(owner: str, name: str) -> str:
    """Root URL of the TRS API served from ``owner/name``'s GitHub Pages."""
    return f"https://{owner}.github.io/{name}/"


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class TrsModel(BaseModel):
    """Base for TRS documents: accepts aliases and field names, ignores extras."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ServiceType(TrsModel):
    group: str = "org.ga4gh"
    artifact: str = TRS_ARTIFACT
    version: str = TRS_VERSION


class Organization(TrsModel):
    name: str
    url: str


class ServiceInfo(TrsModel):
    """The ``/service-info`` document."""

    id: str
    name: str
    type: ServiceType = Field(default_factory=ServiceType)
    description: str | None = None
    organization: Organization
    contact_url: str | None = Field(default=None, alias="contactUrl")
    documentation_url: str | None = Field(default=None, alias="documentationUrl")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    environment: str | None = None
    version: str = TRS_VERSION

    @classmethod
    def new_or_update(cls, existing: "ServiceInfo | None", owner: str, name: str) -> "ServiceInfo":
        """Build the service-info for ``owner/name``, keeping the original creation time."""
        now = _now()
        return cls(
            id=f"io.github.{owner}.{name}",
            name=f"{owner}/{name}",
            description="The GA4GH TRS API generated by gh-trs",
            organization=Organization(name=owner, url=f"https://github.com/{owner}"),
            contact_url=f"https://github.com/{owner}/{name}/issues",
            documentation_url=f"https://github.com/{owner}/{name}",
            created_at=existing.created_at if existing and existing.created_at else now,
            updated_at=now,
            environment="prod",
        )

    def is_gh_trs(self) -> bool:
        return self.type.artifact == TRS_ARTIFACT and self.type.version == TRS_VERSION


class ToolClass(TrsModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None

    @classmethod
    def default(cls) -> "ToolClass":
        return cls(id="workflow", name="Workflow", description="A computational workflow")


class ChecksumType(str, Enum):
    SHA256 = "sha256"


class Checksum(TrsModel):
    checksum: str
    type: ChecksumType = ChecksumType.SHA256

    @classmethod
    def from_string(cls, content: str | bytes) -> "Checksum":
        return cls(checksum=sha256_hex(content))


class FileType(str, Enum):
    """TRS file types."""

    TEST_FILE = "TEST_FILE"
    PRIMARY_DESCRIPTOR = "PRIMARY_DESCRIPTOR"
    SECONDARY_DESCRIPTOR = "SECONDARY_DESCRIPTOR"
    CONTAINERFILE = "CONTAINERFILE"
    OTHER = "OTHER"

    @classmethod
    def from_file_type(cls, file_type: ConfigFileType) -> "FileType":
        if file_type == ConfigFileType.PRIMARY:
            return cls.PRIMARY_DESCRIPTOR
        return cls.SECONDARY_DESCRIPTOR


class DescriptorType(str, Enum):
    """TRS descriptor types gh-trs can publish."""

    CWL = "CWL"
    WDL = "WDL"
    NFL = "NFL"
    SMK = "SMK"


class FileWrapper(TrsModel):
    content: str | None = None
    checksum: list[Checksum] | None = None
    url: str | None = None


class ToolFile(TrsModel):
    path: str | None = None
    file_type: FileType | None = None
    checksum: Checksum | None = None


class ToolVersion(TrsModel):
    """A published version of a tool."""

    author: list[str] = Field(default_factory=list)
    name: str | None = None
    url: str
    id: str
    is_production: bool = False
    images: list[dict] = Field(default_factory=list)
    descriptor_type: list[str] = Field(default_factory=list)
    containerfile: bool = False
    meta_version: str | None = None
    verified: bool = False
    verified_source: list[str] = Field(default_factory=list)
    signed: bool = False
    included_apps: list[str] = Field(default_factory=list)

    @property
    def version(self) -> str:
        """Version string, taken from the last segment of the version URL."""
        return url_last_segment(self.url)

    @classmethod
    def new(
        cls,
        config: Config,
        tool_url: str,
        verified: bool,
        verified_source: list[str] | None = None,
    ) -> "ToolVersion":
        language = config.workflow.language.type
        return cls(
            author=[a.github_account for a in config.authors],
            name=config.workflow.name,
            url=f"{tool_url}/versions/{config.version}",
            id=config.version,
            descriptor_type=[DescriptorType(language.value).value] if language else [],
            meta_version=None,
            verified=verified,
            verified_source=(verified_source or []) if verified else [],
        )


class Tool(TrsModel):
    """A registered workflow and all its published versions."""

    url: str
    id: str
    aliases: list[str] = Field(default_factory=list)
    organization: str
    name: str | None = None
    toolclass: ToolClass = Field(default_factory=ToolClass.default)
    description: str | None = None
    meta_version: str | None = None
    has_checker: bool = False
    checker_url: str | None = None
    versions: list[ToolVersion] = Field(default_factory=list)

    @classmethod
    def new(cls, config: Config, owner: str, name: str) -> "Tool":
        tool_id = str(config.id)
        return cls(
            url=f"{gh_pages_url(owner, name)}tools/{tool_id}",
            id=tool_id,
            organization=config.authors[0].github_account if config.authors else owner,
            name=config.workflow.name,
            description=config.workflow.readme,
        )

    def add_new_tool_version(
        self,
        config: Config,
        verified: bool,
        verified_source: list[str] | None = None,
    ) -> ToolVersion:
        """Add (or replace) the version described by ``config`` and return it."""
        tool_version = ToolVersion.new(config, self.url, verified, verified_source)
        self.versions = [v for v in self.versions if v.version != config.version]
        self.versions.append(tool_version)
        self.name = config.workflow.name
        self.description = config.workflow.readme
        return tool_version

    def get_version(self, version: str) -> ToolVersion | None:
        for tool_version in self.versions:
            if tool_version.version == version:
                return tool_version
        return None
