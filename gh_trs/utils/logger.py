"""
Logging for gh-trs.

Console records go to stderr through rich so that command output on stdout
stays clean. ``GH_TRS_LOG_FILE`` adds a plain or JSON lines file handler.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "gh_trs"

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


class LogLevel(str, Enum):
    """Levels accepted by ``GH_TRS_LOG_LEVEL``."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        return getattr(logging, self.name)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with the module path relative to gh_trs."""

    def format(self, record: logging.LogRecord) -> str:
        module = record.name
        if module.startswith(ROOT_LOGGER + "."):
            module = module[len(ROOT_LOGGER) + 1:]
        entry = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": module,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _console_handler(level: int, no_color: bool) -> RichHandler:
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    return handler


def _file_handler(log_file: str | Path, level: int, json_format: bool) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(FILE_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logging(
    level: LogLevel | str = LogLevel.INFO,
    log_file: str | Path | None = None,
    json_format: bool = False,
    no_color: bool = False,
) -> logging.Logger:
    """
    Configure the ``gh_trs`` logger tree.

    Args:
        level: Minimum log level
        log_file: Optional file path for log output
        json_format: Write the log file as JSON lines
        no_color: Disable colored console output

    Returns:
        The ``gh_trs`` logger
    """
    level = LogLevel(level.lower()) if isinstance(level, str) else level

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level.numeric)
    root.propagate = False
    root.handlers.clear()
    root.addHandler(_console_handler(level.numeric, no_color))
    if log_file:
        root.addHandler(_file_handler(log_file, level.numeric, json_format))

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level == LogLevel.DEBUG else logging.WARNING
    )
    return root
