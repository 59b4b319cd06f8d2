"""Grok (xAI) adapter tests.

The adapter shares the OpenAI-compatible flow, so these tests only pin what
is Grok-specific: base URL, model list, provider naming and capabilities.
"""
from __future__ import annotations

import httpx

from quorum_providers.base.errors import ErrorKind
from quorum_providers.base.models import ConversationMessage
from quorum_providers.base.streaming import accumulate_frames
from quorum_providers.grok import GrokAdapter
from quorum_providers.tests.helpers import RecordingTransport, openai_reply, provider_handler

KEY = "xai-test"


def test_grok_defaults():
    adapter = GrokAdapter(http_client=RecordingTransport(provider_handler("grok", ["x"])).client())
    assert adapter.get_provider_name() == "grok"
    assert adapter.get_available_models() == ["grok-3", "grok-2"]
    assert adapter.get_default_model() == "grok-3"
    caps = adapter.get_capabilities()
    assert caps.max_context_length == 16_384
    assert not caps.supports_vision and caps.supports_streaming


def test_grok_posts_to_xai_with_bearer_auth():
    transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_reply("pong")))
    adapter = GrokAdapter(http_client=transport.client())
    result = adapter.send_message([ConversationMessage.user("ping")], KEY, "grok-2")
    assert result.data == "pong"
    request = transport.requests[0]
    assert str(request.url) == "https://api.x.ai/v1/chat/completions"
    assert request.headers["authorization"] == f"Bearer {KEY}"
    assert transport.last_json()["model"] == "grok-2"


def test_grok_stream():
    adapter = GrokAdapter(http_client=RecordingTransport(provider_handler("grok", ["a", "b", "c"])).client())
    assert accumulate_frames(adapter.stream_message([ConversationMessage.user("x")], KEY)).data == "abc"


def test_grok_unknown_model_rejected_before_network():
    transport = RecordingTransport(provider_handler("grok", ["x"]))
    adapter = GrokAdapter(http_client=transport.client())
    result = adapter.send_message([ConversationMessage.user("x")], KEY, "gpt-4o")
    assert result.error.kind is ErrorKind.PROVIDER_ERROR
    assert "gpt-4o" in result.error.message
    assert transport.calls == 0


def test_grok_models_from_environment(monkeypatch):
    monkeypatch.setenv("GROK_MODELS", "grok-3, grok-3-mini")
    monkeypatch.setenv("GROK_BASE_URL", "https://proxy.example/xai/v1")
    transport = RecordingTransport(lambda r: httpx.Response(200, json=openai_reply("ok")))
    adapter = GrokAdapter(http_client=transport.client())
    assert adapter.get_available_models() == ["grok-3", "grok-3-mini"]
    adapter.send_message([ConversationMessage.user("x")], KEY, "grok-3-mini")
    assert str(transport.requests[0].url) == "https://proxy.example/xai/v1/chat/completions"
