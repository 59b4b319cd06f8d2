"""AnthropicAdapter.

Purpose:
    Implements the adapter contract against the Anthropic Messages API
    (``POST {base}/messages``, default base ``https://api.anthropic.com/v1``).

Auth:
    ``x-api-key`` plus the mandatory ``anthropic-version`` header (configurable,
    default ``2023-06-01``).

Streaming:
    ``stream: true`` yields typed SSE events; there is no ``[DONE]`` sentinel,
    the stream simply ends after ``message_stop``. In-band ``error`` events end
    the sequence with the mapped error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..base.dto import GenerationSettings
from ..base.errors import CoreError
from ..base.http_adapter import BaseHttpAdapter
from ..base.models import ConversationMessage
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_MAX_TOKENS
from . import helpers
from .helpers import ANTHROPIC_WIRE_NAMES


class AnthropicAdapter(BaseHttpAdapter):
    provider_id = "anthropic"
    settings_field_map = ANTHROPIC_WIRE_NAMES
    stream_sentinel = None

    @property
    def _api_version(self) -> str:
        return str(self._config.get("api_version") or ANTHROPIC_API_VERSION)

    @property
    def _default_max_tokens(self) -> int:
        return int(self._config.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS)

    def _auth_headers(self, credential: str) -> Dict[str, str]:
        return {"x-api-key": credential, "anthropic-version": self._api_version}

    def _chat_path(self, model: str, stream: bool) -> str:
        return "/messages"

    def _build_payload(
        self,
        messages: Sequence[ConversationMessage],
        model: str,
        settings: Optional[GenerationSettings],
        stream: bool,
    ) -> Dict[str, Any]:
        return helpers.build_payload(
            messages,
            model=model,
            settings=settings,
            default_max_tokens=self._default_max_tokens,
            stream=stream,
        )

    def _extract_text(self, data: Any) -> Optional[str]:
        return helpers.extract_text(data)

    def _extract_delta(self, obj: Any) -> Optional[str]:
        return helpers.extract_delta(obj)

    def _content_filter_error(self, data: Any) -> Optional[CoreError]:
        return helpers.content_filter_error(data)

    def _extract_stream_error(self, obj: Any) -> Optional[CoreError]:
        return helpers.stream_error(obj)


__all__ = ["AnthropicAdapter"]
