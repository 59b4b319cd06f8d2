"""Shared testing utilities for adapter, streaming and facade tests.

Purpose:
    Build mocked provider responses once so individual test modules stay
    focused on behavior. Everything here runs over ``httpx.MockTransport``;
    no test touches the network.

Exports:
    - assert_true(condition, message)
    - RecordingTransport: MockTransport wrapper remembering every request
    - sse(...): encode a list of JSON events as ``data:`` lines
    - reply/stream builders per provider and ``provider_handler``
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import httpx

Handler = Callable[[httpx.Request], httpx.Response]

PROVIDERS = ("openai", "anthropic", "grok", "google")

FAKE_KEYS: Dict[str, str] = {
    "openai": "sk-test-openai",
    "anthropic": "sk-ant-test",
    "grok": "xai-test",
    "google": "AIza-test",
}


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` if ``condition`` is False."""
    if not condition:
        raise AssertionError(message)


class RecordingTransport:
    """Route requests to ``handler`` and keep them for later assertions."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


def no_network(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"unexpected request to {request.url}")


def sse(events: Iterable[Any], *, done: bool = False, event_names: bool = False) -> List[bytes]:
    """Encode ``events`` as SSE chunks, one chunk per event."""
    chunks: List[bytes] = []
    for ev in events:
        line = ""
        if event_names and isinstance(ev, dict) and "type" in ev:
            line += f"event: {ev['type']}\n"
        payload = ev if isinstance(ev, str) else json.dumps(ev)
        line += f"data: {payload}\n\n"
        chunks.append(line.encode("utf-8"))
    if done:
        chunks.append(b"data: [DONE]\n\n")
    return chunks


def streamed(chunks: List[bytes], status: int = 200) -> httpx.Response:
    """Response whose body arrives as the given separate chunks."""
    return httpx.Response(
        status,
        headers={"content-type": "text/event-stream"},
        content=iter(chunks),
    )


# ----- OpenAI-compatible (openai, grok) -----
def openai_reply(text: Optional[str]) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": text}, "finish_reason": "stop"}
        ],
    }


def openai_stream(tokens: Iterable[str]) -> List[bytes]:
    events = [{"choices": [{"index": 0, "delta": {"role": "assistant"}}]}]
    events += [{"choices": [{"index": 0, "delta": {"content": t}}]} for t in tokens]
    events.append({"choices": [{"index": 0, "delta": {}, "finish_reason": "stop"}]})
    return sse(events, done=True)


# ----- Anthropic -----
def anthropic_reply(text: Optional[str]) -> Dict[str, Any]:
    content = [{"type": "text", "text": text}] if text is not None else []
    return {"id": "msg_1", "type": "message", "content": content, "stop_reason": "end_turn"}


def anthropic_stream(tokens: Iterable[str]) -> List[bytes]:
    events: List[Dict[str, Any]] = [
        {"type": "message_start", "message": {"id": "msg_1", "content": []}},
        {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
    ]
    events += [
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": t}} for t in tokens
    ]
    events += [
        {"type": "content_block_stop", "index": 0},
        {"type": "message_delta", "delta": {"stop_reason": "end_turn"}},
        {"type": "message_stop"},
    ]
    return sse(events, event_names=True)


# ----- Google -----
def google_reply(text: Optional[str]) -> Dict[str, Any]:
    parts = [{"text": text}] if text is not None else []
    return {"candidates": [{"content": {"role": "model", "parts": parts}, "finishReason": "STOP"}]}


def google_stream(tokens: Iterable[str]) -> List[bytes]:
    return sse(google_reply(t) for t in tokens)


REPLY_BUILDERS: Dict[str, Callable[[Optional[str]], Dict[str, Any]]] = {
    "openai": openai_reply,
    "grok": openai_reply,
    "anthropic": anthropic_reply,
    "google": google_reply,
}

STREAM_BUILDERS: Dict[str, Callable[[Iterable[str]], List[bytes]]] = {
    "openai": openai_stream,
    "grok": openai_stream,
    "anthropic": anthropic_stream,
    "google": google_stream,
}


def is_stream_request(request: httpx.Request) -> bool:
    if request.url.path.endswith(":streamGenerateContent"):
        return True
    if request.method != "POST" or not request.content:
        return False
    return bool(json.loads(request.content).get("stream"))


def provider_handler(provider: str, tokens: List[str]) -> Handler:
    """Serve ``tokens`` as a stream, or their concatenation as a blocking reply."""

    def _handle(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"data": []})
        if is_stream_request(request):
            return streamed(STREAM_BUILDERS[provider](tokens))
        return httpx.Response(200, json=REPLY_BUILDERS[provider]("".join(tokens)))

    return _handle


def status_handler(status: int, body: Optional[Dict[str, Any]] = None) -> Handler:
    def _handle(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body if body is not None else {})

    return _handle


def frames_tokens(frames: Iterable[Any]) -> Iterator[str]:
    for f in frames:
        if f.token:
            yield f.token
