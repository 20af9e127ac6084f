"""Structured JSON logging for the embedded storefront backend.

Routed requests, dataset loads and overlay writes are logged as single-line
JSON so a mock-mode session can be replayed from its log file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .utils.datetime import isoformat_z

LOG_FILE_NAME = "storefront.jsonl"
_STDERR_HANDLER = "storefront-stderr"
_FILE_HANDLER_PREFIX = "storefront-file:"


class JSONFormatter(logging.Formatter):
    """One JSON object per record; ``extra={"data": ...}`` lands under ``data``."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": isoformat_z(datetime.fromtimestamp(record.created, timezone.utc)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data is not None:
            entry["data"] = data
        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry["error"] = str(error)
            for attribute in ("error_type", "trace_id"):
                if hasattr(error, attribute):
                    entry[attribute] = getattr(error, attribute)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def setup_logging(log_dir: Path | str | None = None, level: int | str = logging.INFO) -> logging.Logger:
    """Attach JSON handlers to the ``storefront`` logger.

    Warnings always go to stderr. With ``log_dir`` every record at ``level``
    or above is also appended to ``<log_dir>/storefront.jsonl``. Calling this
    again adds only the handlers that are not attached yet.
    """
    logger = logging.getLogger("storefront")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    formatter = JSONFormatter()

    if not _has_handler(logger, _STDERR_HANDLER):
        stream = logging.StreamHandler()
        stream.set_name(_STDERR_HANDLER)
        stream.setFormatter(formatter)
        stream.setLevel(logging.WARNING)
        logger.addHandler(stream)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / LOG_FILE_NAME
        name = f"{_FILE_HANDLER_PREFIX}{target}"
        if not _has_handler(logger, name):
            file_handler = logging.FileHandler(target, encoding="utf-8")
            file_handler.set_name(name)
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            logger.addHandler(file_handler)

    return logger


def close_file_handlers() -> None:
    """Detach and close every log file handler added by :func:`setup_logging`."""
    logger = logging.getLogger("storefront")
    for handler in list(logger.handlers):
        if (handler.get_name() or "").startswith(_FILE_HANDLER_PREFIX):
            logger.removeHandler(handler)
            handler.close()


def log_route(method: str, path: str, pattern: str, elapsed_s: float) -> None:
    """Log a request the embedded router answered."""
    logger = logging.getLogger("storefront.router")
    logger.info(
        "route_handled",
        extra={"data": {
            "method": method,
            "path": path,
            "pattern": pattern,
            "elapsed_s": round(elapsed_s, 4),
        }},
    )


def log_overlay_write(family: str, scope_key: str, size: int) -> None:
    logger = logging.getLogger("storefront.overlay")
    logger.debug(
        "overlay_write",
        extra={"data": {"family": family, "scope_key": scope_key, "size": size}},
    )


__all__ = [
    "LOG_FILE_NAME",
    "JSONFormatter",
    "setup_logging",
    "close_file_handlers",
    "log_route",
    "log_overlay_write",
]
