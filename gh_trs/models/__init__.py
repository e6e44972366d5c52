"""gh-trs models package."""

from gh_trs.models.config import (
    Author,
    Config,
    File,
    FileType,
    Language,
    LanguageType,
    TestFile,
    TestFileType,
    Testing,
    Workflow,
)
from gh_trs.models.settings import GhTrsSettings
from gh_trs.models.wes import RunStatus, TestResult

__all__ = [
    # Registration
    "Author",
    "Config",
    "File",
    "FileType",
    "Language",
    "LanguageType",
    "TestFile",
    "TestFileType",
    "Testing",
    "Workflow",
    # Settings
    "GhTrsSettings",
    # WES
    "RunStatus",
    "TestResult",
]
