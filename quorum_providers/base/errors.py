"""Unified error model (public API facade).

Purpose
-------
Expose the single error taxonomy used across adapters, the credential layer
and the facade through the canonical ``quorum_providers.base.errors`` import
path. Implementations live under ``errors_parts``.

Notes
-----
- ``CoreError`` is the only exception type that crosses module boundaries.
- ``explain`` is total over ``ErrorKind``; ``to_core_error`` never raises.
"""

from .errors_parts import (
    CANCELLED_MESSAGE,
    MODEL_NOT_AVAILABLE_MESSAGE,
    NO_RESPONSE_MESSAGE,
    CoreError,
    ErrorKind,
    error_from_status,
    explain,
    is_content_filter_code,
    kind_for_status,
    suggestions,
    to_core_error,
)

__all__ = [
    "ErrorKind",
    "CoreError",
    "explain",
    "suggestions",
    "CANCELLED_MESSAGE",
    "MODEL_NOT_AVAILABLE_MESSAGE",
    "NO_RESPONSE_MESSAGE",
    "error_from_status",
    "is_content_filter_code",
    "kind_for_status",
    "to_core_error",
]
