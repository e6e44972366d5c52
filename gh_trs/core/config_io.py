"""
Reading and writing registration files.
"""

from __future__ import annotations

import json
import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
import yaml
from pydantic import ValidationError as PydanticValidationError

from gh_trs.clients import remote
from gh_trs.clients.trs_api import TrsEndpoint
from gh_trs.exceptions import ConfigError, GhTrsError
from gh_trs.models.config import Config
from gh_trs.utils.helpers import is_http_url

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "gh-trs-config.yml"
TOOL_VERSION_PATTERN = re.compile(r"/tools/([^/]+)/versions/([^/]+)/?$")


class FileExt(str, Enum):
    """Serialisation format of a registration file."""

    YAML = "yaml"
    JSON = "json"


def parse_file_ext(path: str | Path) -> FileExt:
    """
    Choose the output format from a file extension.

    Args:
        path: Output file path

    Returns:
        YAML for ``.yml``/``.yaml`` or no extension, JSON for ``.json``

    Raises:
        ConfigError: For any other extension
    """
    suffix = Path(path).suffix.lower()
    if suffix in ("", ".yml", ".yaml"):
        return FileExt.YAML
    if suffix == ".json":
        return FileExt.JSON
    raise ConfigError(f"Unsupported output file extension: {suffix.lstrip('.')}")


def parse_config(content: str, location: str = "<string>") -> Config:
    """Parse YAML (or JSON, which is YAML) text into a Config."""
    try:
        data: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {location}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse {location}: expected a mapping at the top level")
    try:
        return Config.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config {location}:\n{e}") from e


def read_config(location: str) -> Config:
    """
    Load a registration file from an http(s) URL or a local path.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    logger.debug(f"Reading config {location}")
    if is_http_url(location):
        try:
            content = remote.fetch_raw_content(location)
        except (GhTrsError, httpx.HTTPError) as e:
            raise ConfigError(f"Failed to read config {location}: {e}") from e
    else:
        path = Path(location)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {location}")
        content = path.read_text(encoding="utf-8")
    return parse_config(content, location)


def read_configs(locations: list[str]) -> list[Config]:
    return [read_config(location) for location in locations]


def dump_config(config: Config, ext: FileExt = FileExt.YAML) -> str:
    data = config.to_dict()
    if ext == FileExt.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def write_config(config: Config, path: str | Path) -> Path:
    """
    Write a registration file, format chosen by the extension.

    Args:
        config: Registration to write
        path: Output path

    Returns:
        The written path
    """
    path = Path(path)
    ext = parse_file_ext(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_config(config, ext), encoding="utf-8")
    return path


def find_config_locations_from_trs(
    trs_location: str,
    transport: httpx.BaseTransport | None = None,
) -> list[str]:
    """
    List the registration files published in a TRS API.

    Args:
        trs_location: Root URL of a gh-trs generated TRS API, or the URL of
            one tool version in it
        transport: Optional httpx transport (used by tests)

    Returns:
        ``gh-trs-config.json`` URLs, one per tool version

    Raises:
        TrsError: If the endpoint is unreachable or not generated by gh-trs
    """
    match = TOOL_VERSION_PATTERN.search(urlparse(trs_location.strip()).path)
    if match:
        endpoint = TrsEndpoint.new_from_tool_version_url(trs_location, transport=transport)
        endpoint.is_valid()
        return [endpoint.to_config_url(match.group(1), match.group(2))]

    endpoint = TrsEndpoint.new_from_url(trs_location, transport=transport)
    endpoint.is_valid()
    locations = [
        endpoint.to_config_url(tool.id, version.version)
        for tool in endpoint.get_tools()
        for version in tool.versions
    ]
    logger.debug(f"Found {len(locations)} configs in {endpoint.url}")
    return locations
