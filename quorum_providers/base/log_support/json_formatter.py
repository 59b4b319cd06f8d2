"""JSON logging formatter used by the providers logging setup.

This module defines :class:`JsonFormatter`, which serializes standard logging
fields, hoists keys from JSON-encoded messages to the top level and merges
non-internal extra attributes from the ``LogRecord``. Keys that could carry a
credential are masked before output.
"""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Field names whose values are never written verbatim.
REDACTED_KEYS = frozenset({"api_key", "credential", "authorization", "x-api-key", "x-goog-api-key"})

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


def _redact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: ("***" if k.lower() in REDACTED_KEYS and v else v) for k, v in data.items()}


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        base["msg"] = msg_text
        # Structured events arrive as a JSON string; hoist their keys so the
        # emitted line is not double-encoded.
        with contextlib.suppress(ValueError):
            parsed = json.loads(msg_text)
            if isinstance(parsed, dict):
                base.pop("msg", None)
                base.update(parsed)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS:
                continue
            if k not in base:
                base[k] = v
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(_redact(base), ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO", "REDACTED_KEYS"]
