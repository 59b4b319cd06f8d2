"""Error types and helpers backing :mod:`quorum_providers.base.errors`."""

from .error_kind import ErrorKind
from .core_error import CoreError
from .explain import explain, suggestions
from .classification import (
    CANCELLED_MESSAGE,
    MODEL_NOT_AVAILABLE_MESSAGE,
    NO_RESPONSE_MESSAGE,
    error_from_status,
    is_content_filter_code,
    kind_for_status,
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
