"""Anthropic helpers module.

Purpose:
- Side-effect-free utilities for the Anthropic Messages API wire format:
  payload construction, reply text extraction and stream event translation.
  Kept apart from ``client.py`` so they can be tested without HTTP.

Wire notes:
- System messages are not part of ``messages``; they travel in a top-level
  ``system`` string.
- ``max_tokens`` is mandatory on every request.
- Stream events are ``data:`` lines whose JSON carries a ``type``; text
  arrives in ``content_block_delta`` events at ``delta.text`` and failures in
  ``error`` events.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.dto import GenerationSettings
from ..base.errors import CoreError, ErrorKind
from ..base.http_adapter import split_system, to_wire_messages
from ..base.models import ConversationMessage

# Generic setting -> Messages API field. Penalties have no equivalent.
ANTHROPIC_WIRE_NAMES: Mapping[str, str] = {
    "temperature": "temperature",
    "max_tokens": "max_tokens",
    "top_p": "top_p",
}

# Error ``type`` values carried in-band by the stream and in error bodies.
_STREAM_ERROR_KINDS: Mapping[str, ErrorKind] = {
    "authentication_error": ErrorKind.INVALID_CREDENTIAL,
    "permission_error": ErrorKind.INVALID_CREDENTIAL,
    "rate_limit_error": ErrorKind.RATE_LIMIT,
    "timeout_error": ErrorKind.TIMEOUT,
}

REFUSAL_STOP_REASON = "refusal"


def build_payload(
    messages: Sequence[ConversationMessage],
    *,
    model: str,
    settings: Optional[GenerationSettings],
    default_max_tokens: int,
    stream: bool,
) -> Dict[str, Any]:
    """Build the ``POST /messages`` body."""
    system, rest = split_system(messages)
    payload: Dict[str, Any] = {"model": model, "messages": to_wire_messages(rest)}
    if system:
        payload["system"] = system
    if settings is not None:
        payload.update(settings.to_wire(ANTHROPIC_WIRE_NAMES))
    payload.setdefault("max_tokens", default_max_tokens)
    if stream:
        payload["stream"] = True
    return payload


def extract_text(data: Any) -> Optional[str]:
    """Concatenate the ``text`` blocks of a Messages API reply."""
    if not isinstance(data, dict):
        return None
    blocks = data.get("content")
    if not isinstance(blocks, list):
        return None
    parts: List[str] = [
        b["text"] for b in blocks if isinstance(b, dict) and b.get("type") == "text" and isinstance(b.get("text"), str)
    ]
    return "".join(parts) or None


def content_filter_error(data: Any) -> Optional[CoreError]:
    """Return ``CONTENT_FILTERED`` when the model refused for safety reasons."""
    if isinstance(data, dict) and data.get("stop_reason") == REFUSAL_STOP_REASON:
        return CoreError(ErrorKind.CONTENT_FILTERED, "reply withheld by safety system", provider="anthropic")
    return None


def extract_delta(obj: Any) -> Optional[str]:
    """Return ``delta.text`` from a ``content_block_delta`` event."""
    if not isinstance(obj, dict):
        return None
    delta = obj.get("delta")
    if not isinstance(delta, dict):
        return None
    text = delta.get("text")
    return text if isinstance(text, str) else None


def stream_error(obj: Any) -> Optional[CoreError]:
    """Translate an in-band ``error`` event (or refusal stop) into a ``CoreError``."""
    if not isinstance(obj, dict):
        return None
    if obj.get("type") == "error":
        err = obj.get("error") or {}
        kind = _STREAM_ERROR_KINDS.get(str(err.get("type")), ErrorKind.PROVIDER_ERROR)
        return CoreError(kind, str(err.get("message") or "stream error"), provider="anthropic")
    if obj.get("type") == "message_delta":
        delta = obj.get("delta") or {}
        if delta.get("stop_reason") == REFUSAL_STOP_REASON:
            return CoreError(ErrorKind.CONTENT_FILTERED, "reply withheld by safety system", provider="anthropic")
    return None


__all__ = [
    "ANTHROPIC_WIRE_NAMES",
    "build_payload",
    "extract_text",
    "content_filter_error",
    "extract_delta",
    "stream_error",
]
