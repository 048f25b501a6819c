"""
Logging setup shared by the CLI and the chart pipeline.

Two output modes, both on stderr so the CLI can keep stdout for tables and
JSON outcomes:

- console: `time | LEVEL | logger | message key=value ...`, where the
  trailing pairs are the fields passed through `extra=`
- json: one object per line with the same fields as top-level keys

Usage:
    from trackbubbles.utils.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger(__name__)
    log.info("Working set built", extra={"rows": 2000, "working_set": 300})
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from trackbubbles.config import Settings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _structured_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached via `extra=`, plus a legacy nested `extra` dict."""
    fields = {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_ATTRS and not key.startswith("_")
    }
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        fields.update(nested)
    return fields


def _json_formatter(record: logging.LogRecord) -> str:
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
        **_structured_fields(record),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines with the structured fields appended as key=value."""

    def __init__(self, fmt: str = CONSOLE_FORMAT, datefmt: str = CONSOLE_DATEFMT) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _structured_fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


def _dict_config(level: str, json_logs: bool) -> Dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"()": ConsoleFormatter},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "console",
                "level": level,
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str = "INFO", json_logs: bool = False, force: bool = True) -> None:
    """
    Install the root handler.

    Parameters
    ----------
    level : str
        Level name applied to the root logger and its handler.
    json_logs : bool
        Emit one JSON object per record instead of console lines.
    force : bool
        Replace an existing configuration. With False, a root logger that
        already has handlers is left alone.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(_dict_config(level.upper(), json_logs))


def configure_from_settings(settings: "Settings", force: bool = True) -> None:
    configure_logging(level=settings.log_level, json_logs=settings.json_logs, force=force)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "ConsoleFormatter",
    "JsonFormatter",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
