"""Logging configuration shared by the CLI and both web entrypoints."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d - %(message)s"

EXTRA_FIELDS = (
    "request_path",
    "method",
    "status_code",
    "latency_ms",
    "client",
    "airport",
    "proxy",
    "url",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in EXTRA_FIELDS:
            value = getattr(record, attr, None)
            if value is not None:
                payload[attr] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def build_formatter(log_format: str | None = None) -> logging.Formatter:
    fmt = (log_format or os.environ.get("LOG_FORMAT") or "json").strip().lower()
    if fmt == "text":
        return logging.Formatter(TEXT_FORMAT)
    return JsonFormatter()


def setup_logging(default_level: str | int = logging.INFO, log_format: str | None = None) -> None:
    """Configure the root logger once; later calls only swap the formatter."""
    level = os.environ.get("LOG_LEVEL", default_level)
    root = logging.getLogger()
    root.setLevel(level)
    formatter = build_formatter(log_format)

    stream_handlers = [handler for handler in root.handlers if isinstance(handler, logging.StreamHandler)]
    if stream_handlers:
        for handler in stream_handlers:
            handler.setFormatter(formatter)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root.addHandler(handler)
