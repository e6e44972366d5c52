"""
Workflow language detection.

Guesses the language of a workflow document from its shebang or from the
first line that looks like a language keyword, then its language version.
"""

from __future__ import annotations

import logging
import re

import yaml

from gh_trs.clients import remote
from gh_trs.models.config import Language, LanguageType

logger = logging.getLogger(__name__)

WDL_PATTERN = re.compile(r"^(workflow|task) \w* \{$")
NFL_PATTERN = re.compile(r"^process \w* \{$")
SMK_PATTERN = re.compile(r"^rule \w*:$")
WDL_VERSION_PATTERN = re.compile(r"^version \d\.\d$")

SHEBANG_KEYWORDS = (
    ("cwl", LanguageType.CWL),
    ("cromwell", LanguageType.WDL),
    ("nextflow", LanguageType.NFL),
    ("snakemake", LanguageType.SMK),
)

DEFAULT_VERSIONS = {
    LanguageType.CWL: "v1.0",
    LanguageType.WDL: "1.0",
    LanguageType.NFL: "1.0",
    LanguageType.SMK: "1.0",
}


def inspect_wf_type_version(wf_url: str) -> Language:
    """
    Fetch a workflow document and detect its language.

    Args:
        wf_url: Location of the primary workflow file

    Returns:
        Detected language; both fields are None when unknown
    """
    content = remote.fetch_raw_content(wf_url)
    wf_type = inspect_wf_type(content)
    if wf_type is None:
        logger.warning(f"Unable to detect the workflow language of {wf_url}")
    return Language(type=wf_type, version=inspect_wf_version(content, wf_type))


def check_by_shebang(content: str) -> LanguageType | None:
    lines = content.splitlines()
    first_line = lines[0] if lines else ""
    if first_line.startswith("#!"):
        for keyword, language in SHEBANG_KEYWORDS:
            if keyword in first_line:
                return language
    return None


def check_by_regexp(content: str) -> LanguageType | None:
    for line in content.splitlines():
        if "cwlVersion" in line:
            return LanguageType.CWL
        if WDL_PATTERN.match(line):
            return LanguageType.WDL
        if NFL_PATTERN.match(line):
            return LanguageType.NFL
        if SMK_PATTERN.match(line):
            return LanguageType.SMK
    return None


def inspect_wf_type(content: str) -> LanguageType | None:
    return check_by_shebang(content) or check_by_regexp(content)


def inspect_wf_version(content: str, wf_type: LanguageType | None) -> str | None:
    """
    Detect the language version of a workflow document.

    Falls back to the language's default version when the document does not
    state one.
    """
    if wf_type is None:
        return None
    if wf_type == LanguageType.CWL:
        return _cwl_version(content)
    if wf_type == LanguageType.WDL:
        for line in content.splitlines():
            if WDL_VERSION_PATTERN.match(line):
                return line.split()[1]
    elif wf_type == LanguageType.NFL:
        if any(line.strip() == "nextflow.enable.dsl=2" for line in content.splitlines()):
            return "DSL2"
    return DEFAULT_VERSIONS[wf_type]


def _cwl_version(content: str) -> str:
    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse the CWL document, assuming v1.0: {e}")
        return DEFAULT_VERSIONS[LanguageType.CWL]
    if isinstance(doc, dict) and isinstance(doc.get("cwlVersion"), str):
        return doc["cwlVersion"]
    return DEFAULT_VERSIONS[LanguageType.CWL]
