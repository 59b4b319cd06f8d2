"""OpenAIStyleAdapter: shared base for OpenAI-compatible Chat Completions APIs.

Purpose:
- OpenAI and Grok (xAI) speak the same wire protocol: bearer auth,
  ``POST /chat/completions`` with ``{"model", "messages", ...settings}``,
  ``data:`` stream frames terminated by ``[DONE]``. Subclasses only pick the
  provider id; base URL and models come from configuration.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..dto import GenerationSettings
from ..errors import CoreError
from ..http_adapter_parts.base import BaseHttpAdapter
from ..http_adapter_parts.wire import to_wire_messages
from ..models import ConversationMessage
from .style_helpers import (
    extract_openai_delta,
    extract_openai_text,
    openai_content_filter_error,
    openai_stream_error,
)


class OpenAIStyleAdapter(BaseHttpAdapter):
    """Reusable base class for OpenAI-compatible providers."""

    stream_sentinel = "[DONE]"

    def _auth_headers(self, credential: str) -> Dict[str, str]:
        return {"authorization": f"Bearer {credential}"}

    def _chat_path(self, model: str, stream: bool) -> str:
        return "/chat/completions"

    def _build_payload(
        self,
        messages: Sequence[ConversationMessage],
        model: str,
        settings: Optional[GenerationSettings],
        stream: bool,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"model": model, "messages": to_wire_messages(messages)}
        payload.update(self._wire_settings(settings))
        if stream:
            payload["stream"] = True
        return payload

    def _extract_text(self, data: Any) -> Optional[str]:
        return extract_openai_text(data)

    def _extract_delta(self, obj: Any) -> Optional[str]:
        return extract_openai_delta(obj)

    def _content_filter_error(self, data: Any) -> Optional[CoreError]:
        return openai_content_filter_error(data, self.provider_id)

    def _extract_stream_error(self, obj: Any) -> Optional[CoreError]:
        return openai_stream_error(obj, self.provider_id)


__all__ = ["OpenAIStyleAdapter"]
