"""
Classification helpers mapping HTTP outcomes and exceptions to ``CoreError``.

Implements status extraction, status-to-kind mapping, provider error-body
parsing and a small message heuristic as the last resort for exceptions that
carry neither a status nor a recognizable transport type.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from .core_error import CoreError
from .error_kind import ErrorKind

CANCELLED_MESSAGE = "the operation was cancelled"
NO_RESPONSE_MESSAGE = "no response from provider"
MODEL_NOT_AVAILABLE_MESSAGE = "The requested model is not available."

_HTTP_STATUS_MAP: Dict[int, ErrorKind] = {
    401: ErrorKind.INVALID_CREDENTIAL,
    403: ErrorKind.INVALID_CREDENTIAL,
    404: ErrorKind.PROVIDER_ERROR,
    408: ErrorKind.TIMEOUT,
    429: ErrorKind.RATE_LIMIT,
    504: ErrorKind.TIMEOUT,
}

# Substrings in a provider error code/type that denote a safety refusal.
_CONTENT_FILTER_MARKERS = ("content_policy", "content_filter", "safety", "moderation")


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    try:
        resp = getattr(exc, "response", None)
    except RuntimeError:
        # httpx raises when ``.response`` is read on a request-only error.
        resp = None
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _error_body_fields(payload: Any) -> tuple[Optional[str], Optional[str]]:
    """Return ``(message, code)`` from a provider JSON error body.

    Handles the ``{"error": {"message", "code"|"type"|"status"}}`` shape used by
    all four vendors, plus a bare ``{"message": ...}`` fallback.
    """
    if not isinstance(payload, Mapping):
        return None, None
    err = payload.get("error", payload)
    if isinstance(err, str):
        return err, None
    if not isinstance(err, Mapping):
        return None, None
    message = err.get("message")
    code = err.get("code") or err.get("type") or err.get("status")
    return (
        str(message) if message else None,
        str(code) if code not in (None, "") else None,
    )


def is_content_filter_code(code: Optional[str]) -> bool:
    """Return True when a provider error code denotes a content-policy refusal."""
    if not code:
        return False
    lowered = code.lower()
    return any(marker in lowered for marker in _CONTENT_FILTER_MARKERS)


def kind_for_status(status: int, code: Optional[str] = None) -> ErrorKind:
    """Map an HTTP status (and optional provider error code) to an ``ErrorKind``.

    Any non-2xx status not listed explicitly is a ``PROVIDER_ERROR``.
    """
    if is_content_filter_code(code):
        return ErrorKind.CONTENT_FILTERED
    return _HTTP_STATUS_MAP.get(status, ErrorKind.PROVIDER_ERROR)


def error_from_status(status: int, payload: Any = None, *, provider: Optional[str] = None) -> CoreError:
    """Build a ``CoreError`` from a non-success HTTP status and its JSON body.

    The provider's ``error.message`` is embedded in the resulting message; a
    404 without a body message reads "The requested model is not available.".
    """
    detail, code = _error_body_fields(payload)
    kind = kind_for_status(status, code)
    if status == 404 and not detail:
        detail = MODEL_NOT_AVAILABLE_MESSAGE
    message = f"HTTP {status}: {detail}" if detail else f"HTTP {status}"
    return CoreError(kind=kind, message=message, provider=provider)


def _heuristic_from_message(msg: str) -> ErrorKind:
    """Substring heuristic for exceptions without status or transport type."""
    if "timeout" in msg or "timed out" in msg:
        return ErrorKind.TIMEOUT
    if "rate" in msg and "limit" in msg:
        return ErrorKind.RATE_LIMIT
    return ErrorKind.UNKNOWN


def to_core_error(
    exc: BaseException,
    *,
    provider: Optional[str] = None,
    cancelled: bool = False,
) -> CoreError:
    """Classify an exception into a ``CoreError``.

    Precedence:
        1. ``CoreError`` passthrough.
        2. Cooperative cancellation (``CancelledError`` or ``cancelled=True``)
           becomes ``TIMEOUT`` with "the operation was cancelled".
        3. ``httpx.TimeoutException`` becomes ``TIMEOUT``.
        4. HTTP status mapping.
        5. ``httpx.TransportError`` (network failure) becomes ``UNKNOWN``.
        6. Message heuristics, then ``UNKNOWN``.
    """
    if isinstance(exc, CoreError):
        if provider and not exc.provider:
            exc.provider = provider
        return exc
    if cancelled or isinstance(exc, CancelledError):
        return CoreError(kind=ErrorKind.TIMEOUT, message=CANCELLED_MESSAGE, provider=provider)
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return CoreError(kind=ErrorKind.TIMEOUT, message=str(exc) or "request timed out", provider=provider)
    if isinstance(exc, Exception):
        status = _extract_status(exc)
        if status is not None:
            return error_from_status(status, provider=provider)
    if isinstance(exc, httpx.TransportError):
        return CoreError(kind=ErrorKind.UNKNOWN, message=f"network error: {exc}", provider=provider)
    text = str(exc) or type(exc).__name__
    return CoreError(kind=_heuristic_from_message(text.lower()), message=text, provider=provider)


__all__ = [
    "CANCELLED_MESSAGE",
    "NO_RESPONSE_MESSAGE",
    "MODEL_NOT_AVAILABLE_MESSAGE",
    "error_from_status",
    "is_content_filter_code",
    "kind_for_status",
    "to_core_error",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
