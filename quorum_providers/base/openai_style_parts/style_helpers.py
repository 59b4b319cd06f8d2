"""Helpers for OpenAI-compatible Chat Completions payloads.

Pure functions (no I/O) shared by :class:`OpenAIStyleAdapter` and its tests.
"""
from __future__ import annotations

from typing import Any, Optional

from ..errors import CoreError, ErrorKind, is_content_filter_code, kind_for_status
from ..http_adapter_parts.wire import first

# finish_reason values that mean the provider withheld the reply.
CONTENT_FILTER_FINISH_REASONS = frozenset({"content_filter"})


def extract_openai_text(data: Any) -> Optional[str]:
    """Return ``choices[0].message.content`` (``None`` when absent)."""
    choice = first(data.get("choices")) if isinstance(data, dict) else None
    if not isinstance(choice, dict):
        return None
    message = choice.get("message") or {}
    content = message.get("content")
    return content if isinstance(content, str) else None


def extract_openai_delta(obj: Any) -> Optional[str]:
    """Return ``choices[0].delta.content`` from a stream chunk."""
    choice = first(obj.get("choices")) if isinstance(obj, dict) else None
    if not isinstance(choice, dict):
        return None
    delta = choice.get("delta") or {}
    content = delta.get("content")
    return content if isinstance(content, str) else None


def openai_content_filter_error(data: Any, provider: str) -> Optional[CoreError]:
    """Detect a safety stop in a blocking reply (finish reason or refusal)."""
    choice = first(data.get("choices")) if isinstance(data, dict) else None
    if not isinstance(choice, dict):
        return None
    message = choice.get("message") or {}
    refusal = message.get("refusal")
    if choice.get("finish_reason") in CONTENT_FILTER_FINISH_REASONS or (refusal and not message.get("content")):
        detail = refusal if isinstance(refusal, str) and refusal else "reply withheld by content filter"
        return CoreError(ErrorKind.CONTENT_FILTERED, detail, provider=provider)
    return None


def openai_stream_error(obj: Any, provider: str) -> Optional[CoreError]:
    """Recognize ``{"error": {...}}`` frames and content-filter finish reasons."""
    if not isinstance(obj, dict):
        return None
    err = obj.get("error")
    if isinstance(err, dict):
        code = err.get("code") or err.get("type")
        code = str(code) if code else None
        status = err.get("status") if isinstance(err.get("status"), int) else 500
        kind = ErrorKind.CONTENT_FILTERED if is_content_filter_code(code) else kind_for_status(status, code)
        return CoreError(kind, str(err.get("message") or "stream error"), provider=provider)
    choice = first(obj.get("choices"))
    if isinstance(choice, dict) and choice.get("finish_reason") in CONTENT_FILTER_FINISH_REASONS:
        return CoreError(ErrorKind.CONTENT_FILTERED, "reply withheld by content filter", provider=provider)
    return None


__all__ = [
    "CONTENT_FILTER_FINISH_REASONS",
    "extract_openai_text",
    "extract_openai_delta",
    "openai_content_filter_error",
    "openai_stream_error",
]
