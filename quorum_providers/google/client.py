"""GoogleAdapter.

Purpose:
    Implements the adapter contract against the Generative Language REST API
    (default base ``https://generativelanguage.googleapis.com/v1beta``).

Endpoints:
    - blocking: ``POST /models/{model}:generateContent``
    - streaming: ``POST /models/{model}:streamGenerateContent?alt=sse``
    - credential probe: ``GET /models``

Auth:
    ``x-goog-api-key`` header, which keeps the key out of URLs and logs.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..base.dto import GenerationSettings
from ..base.errors import CoreError
from ..base.http_adapter import BaseHttpAdapter
from ..base.models import ConversationMessage
from . import helpers
from .helpers import GOOGLE_WIRE_NAMES


class GoogleAdapter(BaseHttpAdapter):
    provider_id = "google"
    settings_field_map = GOOGLE_WIRE_NAMES
    stream_sentinel = None

    def _auth_headers(self, credential: str) -> Dict[str, str]:
        return {"x-goog-api-key": credential}

    def _chat_path(self, model: str, stream: bool) -> str:
        if stream:
            return f"/models/{model}:streamGenerateContent?alt=sse"
        return f"/models/{model}:generateContent"

    def _build_payload(
        self,
        messages: Sequence[ConversationMessage],
        model: str,
        settings: Optional[GenerationSettings],
        stream: bool,
    ) -> Dict[str, Any]:
        return helpers.build_payload(messages, settings=settings)

    def _extract_text(self, data: Any) -> Optional[str]:
        return helpers.extract_text(data)

    def _extract_delta(self, obj: Any) -> Optional[str]:
        return helpers.extract_text(obj)

    def _content_filter_error(self, data: Any) -> Optional[CoreError]:
        return helpers.content_filter_error(data)

    def _extract_stream_error(self, obj: Any) -> Optional[CoreError]:
        return helpers.stream_error(obj)


__all__ = ["GoogleAdapter"]
