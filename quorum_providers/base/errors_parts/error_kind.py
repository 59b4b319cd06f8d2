"""
Normalized error kinds shared by every provider adapter.

The set is closed: producers pick one of these members and never invent new
ones. ``explain`` in :mod:`.explain` maps each kind to a single user-facing
sentence.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed enumeration of failure categories surfaced to callers."""

    INVALID_PROVIDER = "invalid_provider"
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    PROVIDER_ERROR = "provider_error"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CONTENT_FILTERED = "content_filtered"
    UNKNOWN = "unknown"


__all__ = ["ErrorKind"]
