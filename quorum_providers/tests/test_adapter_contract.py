"""Adapter contract tests, run against every built-in provider.

Each property here must hold for all four adapters:
- a missing credential fails with ``MISSING_CREDENTIAL`` and no request;
- an unknown model fails before any request;
- streamed tokens concatenate to the blocking reply for the same input;
- cancelling an in-flight stream ends it with one terminal error frame;
- an empty reply is ``PROVIDER_ERROR`` "no response from provider";
- the ``streaming`` capability flag matches a working ``stream_message``.
"""
from __future__ import annotations

import logging

import httpx
import pytest

from quorum_providers.base.cancellation import CancellationToken
from quorum_providers.base.capabilities import CAPABILITIES
from quorum_providers.base.errors import CANCELLED_MESSAGE, ErrorKind
from quorum_providers.base.factory import BUILTIN_ADAPTERS, create_default_factory
from quorum_providers.base.interfaces import ProviderAdapter
from quorum_providers.base.models import ConversationMessage
from quorum_providers.base.streaming import StreamingCallbacks, accumulate_frames
from quorum_providers.config.defaults import SUPPORTED_PROVIDERS
from quorum_providers.tests.helpers import (
    FAKE_KEYS,
    PROVIDERS,
    REPLY_BUILDERS,
    STREAM_BUILDERS,
    RecordingTransport,
    no_network,
    provider_handler,
    streamed,
)

MESSAGES = [ConversationMessage.system("Be nice."), ConversationMessage.user("Hello")]


def _adapter(provider: str, transport: RecordingTransport) -> ProviderAdapter:
    return create_default_factory(http_client=transport.client()).get_client(provider)


def test_registry_tables_agree():
    assert set(SUPPORTED_PROVIDERS) == set(BUILTIN_ADAPTERS) == set(CAPABILITIES) == set(PROVIDERS)


@pytest.mark.parametrize("provider", PROVIDERS)
def test_implements_protocol(provider):
    adapter = _adapter(provider, RecordingTransport(no_network))
    assert isinstance(adapter, ProviderAdapter)
    assert adapter.get_provider_name() == provider
    assert adapter.get_default_model() in adapter.get_available_models()


@pytest.mark.parametrize("provider", PROVIDERS)
@pytest.mark.parametrize("credential", ["", "   "])
def test_missing_credential_makes_no_request(provider, credential):
    transport = RecordingTransport(no_network)
    adapter = _adapter(provider, transport)
    errors = []

    result = adapter.send_message(MESSAGES, credential, callbacks=StreamingCallbacks(on_error=errors.append))
    frames = list(adapter.stream_message(MESSAGES, credential))

    assert result.error.kind is ErrorKind.MISSING_CREDENTIAL
    assert len(errors) == 1
    assert len(frames) == 1 and frames[0].error.kind is ErrorKind.MISSING_CREDENTIAL
    assert adapter.validate_credential(credential) is False
    assert transport.calls == 0


@pytest.mark.parametrize("provider", PROVIDERS)
def test_unknown_model_makes_no_request(provider):
    transport = RecordingTransport(no_network)
    adapter = _adapter(provider, transport)
    assert "no-such-model" not in adapter.get_available_models()

    result = adapter.send_message(MESSAGES, FAKE_KEYS[provider], "no-such-model")
    frames = list(adapter.stream_message(MESSAGES, FAKE_KEYS[provider], "no-such-model"))

    assert result.error.kind is ErrorKind.PROVIDER_ERROR
    assert frames[-1].done and frames[-1].error.kind is ErrorKind.PROVIDER_ERROR
    assert transport.calls == 0


@pytest.mark.parametrize("provider", PROVIDERS)
def test_stream_matches_blocking(provider):
    tokens = ["Hel", "lo", ", ", "wörld", "!"]
    transport = RecordingTransport(provider_handler(provider, tokens))
    adapter = _adapter(provider, transport)

    blocking = adapter.send_message(MESSAGES, FAKE_KEYS[provider])
    frames = list(adapter.stream_message(MESSAGES, FAKE_KEYS[provider]))

    assert blocking.success
    assert "".join(f.token for f in frames if f.token) == blocking.data == "Hello, wörld!"
    assert [f.done for f in frames].count(True) == 1 and frames[-1].done


@pytest.mark.parametrize("provider", PROVIDERS)
def test_capability_flag_matches_streaming(provider):
    transport = RecordingTransport(provider_handler(provider, ["ok"]))
    adapter = _adapter(provider, transport)
    assert adapter.supports_streaming() is adapter.get_capabilities().supports_streaming
    if adapter.supports_streaming():
        assert accumulate_frames(adapter.stream_message(MESSAGES, FAKE_KEYS[provider])).data == "ok"


@pytest.mark.parametrize("provider", PROVIDERS)
def test_closed_client_disables_streaming(provider):
    transport = RecordingTransport(no_network)
    client = transport.client()
    adapter = create_default_factory(http_client=client).get_client(provider)
    client.close()
    assert adapter.supports_streaming() is False


@pytest.mark.parametrize("provider", PROVIDERS)
def test_cancel_in_flight_stream(provider):
    tokens = [f"t{i} " for i in range(20)]
    transport = RecordingTransport(lambda r: streamed(STREAM_BUILDERS[provider](tokens)))
    adapter = _adapter(provider, transport)
    token = CancellationToken()

    seen = []
    for frame in adapter.stream_message(MESSAGES, FAKE_KEYS[provider], cancellation_token=token):
        seen.append(frame)
        if len(seen) == 2:
            token.cancel("user pressed stop")

    assert [f.token for f in seen[:2]] == ["t0 ", "t1 "]
    assert len(seen) == 3
    assert seen[-1].done and seen[-1].error.kind is ErrorKind.TIMEOUT
    assert seen[-1].error.message == CANCELLED_MESSAGE


@pytest.mark.parametrize("provider", PROVIDERS)
def test_cancelled_before_send(provider):
    transport = RecordingTransport(no_network)
    adapter = _adapter(provider, transport)
    token = CancellationToken()
    token.cancel()

    result = adapter.send_message(MESSAGES, FAKE_KEYS[provider], cancellation_token=token)
    frames = list(adapter.stream_message(MESSAGES, FAKE_KEYS[provider], cancellation_token=token))

    assert result.error.message == CANCELLED_MESSAGE
    assert len(frames) == 1 and frames[0].error.message == CANCELLED_MESSAGE
    assert transport.calls == 0


@pytest.mark.parametrize("provider", PROVIDERS)
def test_cancel_while_request_is_in_flight(provider):
    token = CancellationToken()

    def _handler(request):
        # the caller cancels while the provider is still answering
        token.cancel()
        return httpx.Response(200, json=REPLY_BUILDERS[provider]("too late"))

    adapter = _adapter(provider, RecordingTransport(_handler))
    result = adapter.send_message(MESSAGES, FAKE_KEYS[provider], cancellation_token=token)
    assert result.error.kind is ErrorKind.TIMEOUT
    assert result.error.message == CANCELLED_MESSAGE


@pytest.mark.parametrize("provider", PROVIDERS)
def test_empty_reply_is_provider_error(provider):
    transport = RecordingTransport(lambda r: httpx.Response(200, json=REPLY_BUILDERS[provider](None)))
    adapter = _adapter(provider, transport)
    result = adapter.send_message(MESSAGES, FAKE_KEYS[provider])
    assert result.error.kind is ErrorKind.PROVIDER_ERROR
    assert "no response from provider" in result.error.message

    empty_stream = RecordingTransport(lambda r: streamed(STREAM_BUILDERS[provider]([])))
    frames = list(_adapter(provider, empty_stream).stream_message(MESSAGES, FAKE_KEYS[provider]))
    assert len(frames) == 1
    assert frames[0].error.kind is ErrorKind.PROVIDER_ERROR


@pytest.mark.parametrize(
    "status, kind",
    [(401, ErrorKind.INVALID_CREDENTIAL), (429, ErrorKind.RATE_LIMIT), (500, ErrorKind.PROVIDER_ERROR)],
)
@pytest.mark.parametrize("provider", PROVIDERS)
def test_status_mapping_per_adapter(provider, status, kind):
    transport = RecordingTransport(lambda r: httpx.Response(status, json={"error": {"message": "nope"}}))
    adapter = _adapter(provider, transport)
    assert adapter.send_message(MESSAGES, FAKE_KEYS[provider]).error.kind is kind
    assert list(adapter.stream_message(MESSAGES, FAKE_KEYS[provider]))[-1].error.kind is kind


@pytest.mark.parametrize("provider", PROVIDERS)
def test_stream_logs_lifecycle_with_metrics(provider, log_events):
    adapter = _adapter(provider, RecordingTransport(provider_handler(provider, ["a", "b"])))
    list(adapter.stream_message(MESSAGES, FAKE_KEYS[provider]))

    events = [e for e in log_events() if e.get("provider") == provider]
    names = [e["event"] for e in events]
    assert names[0] == "stream.start" and names[-1] == "stream.end"
    end = events[-1]
    assert end["metrics"]["emitted_count"] == 2
    assert end["metrics"]["total_duration_ms"] >= 0
    assert end["metrics"]["time_to_first_token_ms"] is not None
    assert end["phase"] == "finalize" and end["emitted"] is True
    for key in ("structured", "phase", "attempt", "emitted", "tokens"):
        assert key in end


@pytest.mark.parametrize("provider", PROVIDERS)
def test_credentials_never_logged(provider, log_events):
    secret = FAKE_KEYS[provider] + "-SECRET"
    adapter = _adapter(provider, RecordingTransport(provider_handler(provider, ["x"])))
    adapter.send_message(MESSAGES, secret)
    list(adapter.stream_message(MESSAGES, secret))
    adapter.send_message(MESSAGES, secret, "no-such-model")
    assert log_events()
    assert all(secret not in repr(e) for e in log_events())


@pytest.mark.parametrize("provider", PROVIDERS)
def test_cancelled_stream_logged_as_cancelled(provider, log_events):
    token = CancellationToken()
    adapter = _adapter(provider, RecordingTransport(lambda r: streamed(STREAM_BUILDERS[provider](["a", "b", "c"]))))
    for frame in adapter.stream_message(MESSAGES, FAKE_KEYS[provider], cancellation_token=token):
        token.cancel()
    cancelled = [e for e in log_events() if e["event"] == "stream.cancelled"]
    assert len(cancelled) == 1
    assert cancelled[0]["_level"] == logging.WARNING
    assert cancelled[0]["error_code"] == ErrorKind.TIMEOUT.value
