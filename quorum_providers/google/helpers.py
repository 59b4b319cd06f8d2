"""Google Generative Language API helpers.

Purpose:
- Side-effect-free translation between the conversation model and the
  ``generateContent`` wire format.

Wire notes:
- Conversation turns go in ``contents`` with roles ``user`` and ``model``
  (assistant turns); system messages become ``systemInstruction``.
- Generation settings live under ``generationConfig`` with camelCase names.
- Replies carry text in ``candidates[0].content.parts[*].text``; streamed
  chunks (``:streamGenerateContent?alt=sse``) use the same shape.
- Safety blocks surface as ``promptFeedback.blockReason`` or a candidate
  ``finishReason`` such as ``SAFETY``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.dto import GenerationSettings
from ..base.errors import CoreError, ErrorKind, kind_for_status
from ..base.http_adapter import first, split_system
from ..base.models import ConversationMessage

GOOGLE_WIRE_NAMES: Mapping[str, str] = {
    "temperature": "temperature",
    "max_tokens": "maxOutputTokens",
    "top_p": "topP",
    "frequency_penalty": "frequencyPenalty",
    "presence_penalty": "presencePenalty",
}

SAFETY_FINISH_REASONS = frozenset({"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"})


def to_contents(messages: Sequence[ConversationMessage]) -> List[Dict[str, Any]]:
    """Map non-system messages to ``contents`` entries (assistant -> ``model``)."""
    return [
        {"role": "user" if m.wire_role == "user" else "model", "parts": [{"text": m.text}]}
        for m in messages
    ]


def build_payload(
    messages: Sequence[ConversationMessage],
    *,
    settings: Optional[GenerationSettings],
) -> Dict[str, Any]:
    """Build the ``generateContent`` request body."""
    system, rest = split_system(messages)
    payload: Dict[str, Any] = {"contents": to_contents(rest)}
    if system:
        payload["systemInstruction"] = {"parts": [{"text": system}]}
    if settings is not None:
        generation_config = settings.to_wire(GOOGLE_WIRE_NAMES)
        if generation_config:
            payload["generationConfig"] = generation_config
    return payload


def extract_text(data: Any) -> Optional[str]:
    """Concatenate ``candidates[0].content.parts[*].text``."""
    if not isinstance(data, dict):
        return None
    candidate = first(data.get("candidates"))
    if not isinstance(candidate, dict):
        return None
    parts = (candidate.get("content") or {}).get("parts")
    if not isinstance(parts, list):
        return None
    text = "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))
    return text or None


def content_filter_error(data: Any) -> Optional[CoreError]:
    """Return ``CONTENT_FILTERED`` for prompt blocks or safety finish reasons."""
    if not isinstance(data, dict):
        return None
    feedback = data.get("promptFeedback") or {}
    reason = feedback.get("blockReason")
    if reason:
        return CoreError(ErrorKind.CONTENT_FILTERED, f"prompt blocked: {reason}", provider="google")
    candidate = first(data.get("candidates"))
    if isinstance(candidate, dict) and candidate.get("finishReason") in SAFETY_FINISH_REASONS:
        return CoreError(
            ErrorKind.CONTENT_FILTERED,
            f"reply blocked: {candidate.get('finishReason')}",
            provider="google",
        )
    return None


def stream_error(obj: Any) -> Optional[CoreError]:
    """Recognize ``{"error": {...}}`` chunks and safety stops mid-stream."""
    if not isinstance(obj, dict):
        return None
    err = obj.get("error")
    if isinstance(err, dict):
        status = err.get("code") if isinstance(err.get("code"), int) else 500
        return CoreError(
            kind_for_status(status, err.get("status")),
            str(err.get("message") or "stream error"),
            provider="google",
        )
    return content_filter_error(obj)


__all__ = [
    "GOOGLE_WIRE_NAMES",
    "to_contents",
    "build_payload",
    "extract_text",
    "content_filter_error",
    "stream_error",
]
