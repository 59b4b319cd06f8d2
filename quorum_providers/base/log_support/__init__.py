"""Auxiliary logging helpers (formatter, context) used by base.logging."""

from .json_formatter import ISO, REDACTED_KEYS, JsonFormatter
from .logging_context import LogContext

__all__ = ["JsonFormatter", "ISO", "REDACTED_KEYS", "LogContext"]
