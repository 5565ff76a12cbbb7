"""Logging setup for the CLI.

Library modules only ever call ``logging.getLogger(__name__)``; handlers and
levels are installed here, once, by the command-line entry point.
"""

from __future__ import annotations

import json
import logging

from rich.console import Console
from rich.logging import RichHandler

# Finer than DEBUG: per-entry walk and hashing detail.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def resolve_level(name: str) -> int:
    try:
        return _LEVELS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: {name!r}") from None


def configure_logging(level: str = "warn", log_format: str = "text") -> None:
    """Install a single root handler writing to stderr."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
