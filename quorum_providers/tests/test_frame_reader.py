"""Tests for ``iter_stream_frames`` and ``drive_stream``.

Covers multi-byte characters split across chunks, the single terminal frame
guarantee, cancellation between frames, read failures and callback order.
"""
from __future__ import annotations

import httpx

from quorum_providers.base.cancellation import CancellationToken
from quorum_providers.base.errors import CANCELLED_MESSAGE, CoreError, ErrorKind
from quorum_providers.base.models import StreamFrame
from quorum_providers.base.streaming import (
    FrameParser,
    StreamingCallbacks,
    accumulate_frames,
    drive_stream,
    iter_stream_frames,
)


def _parser(**kwargs):
    return FrameParser(lambda obj: obj["t"], **kwargs)


def _event(text: str) -> bytes:
    return ('data: {"t": "%s"}\n\n' % text).encode("utf-8")


def test_multibyte_character_split_across_chunks():
    raw = _event("café ☕")
    cut = raw.index("é".encode("utf-8")) + 1
    frames = list(iter_stream_frames([raw[:cut], raw[cut:]], _parser()))
    assert [f.token for f in frames if not f.done] == ["café ☕"]
    assert frames[-1] == StreamFrame.end()


def test_exactly_one_terminal_frame_last():
    chunks = [_event("a"), _event("b"), b"data: [DONE]\n\n", _event("never")]
    frames = list(iter_stream_frames(chunks, _parser()))
    assert [f.done for f in frames] == [False, False, True]
    assert frames[-1].error is None


def test_stream_without_sentinel_or_trailing_newline():
    frames = list(iter_stream_frames([b'data: {"t": "x"}\n', b'data: {"t": "y"}'], _parser(sentinel=None)))
    assert [f.token for f in frames] == ["x", "y", None]
    assert frames[-1].done


def test_cancelled_before_start_yields_only_cancelled_frame():
    token = CancellationToken()
    token.cancel()
    frames = list(iter_stream_frames([_event("a")], _parser(), token, provider="openai"))
    assert len(frames) == 1
    assert frames[0].done and frames[0].error.kind is ErrorKind.TIMEOUT
    assert frames[0].error.message == CANCELLED_MESSAGE
    assert frames[0].error.provider == "openai"


def test_cancel_mid_stream_stops_tokens():
    token = CancellationToken()
    # two events in one chunk so cancellation is seen between frames of a chunk
    chunks = [_event("one") + _event("two"), _event("three")]
    seen = []
    for frame in iter_stream_frames(chunks, _parser(), token):
        seen.append(frame)
        if frame.token == "one":
            token.cancel("user")
    assert [f.token for f in seen[:-1]] == ["one"]
    assert seen[-1].done and seen[-1].error.message == CANCELLED_MESSAGE


def test_read_failure_becomes_terminal_error():
    def _chunks():
        yield _event("partial")
        raise httpx.ReadError("connection reset")

    frames = list(iter_stream_frames(_chunks(), _parser()))
    assert frames[0].token == "partial"
    assert frames[-1].done and frames[-1].error.kind is ErrorKind.UNKNOWN
    assert len(frames) == 2


def test_drive_stream_fires_callbacks_in_order():
    calls = []
    callbacks = StreamingCallbacks(
        on_token=lambda t: calls.append(("token", t)),
        on_complete=lambda text: calls.append(("complete", text)),
        on_error=lambda e: calls.append(("error", e)),
    )
    frames = [StreamFrame.of_token("Hel"), StreamFrame.of_token("lo"), StreamFrame.end()]
    result = drive_stream(frames, callbacks)
    assert result.success and result.data == "Hello"
    assert calls == [("token", "Hel"), ("token", "lo"), ("complete", "Hello")]


def test_drive_stream_error_fires_on_error_once():
    errors = []
    err = CoreError(ErrorKind.RATE_LIMIT, "slow")
    result = drive_stream(
        [StreamFrame.of_token("x"), StreamFrame.end(err)],
        StreamingCallbacks(on_error=errors.append),
    )
    assert not result.success and result.error is err
    assert errors == [err]


def test_missing_terminal_frame_is_a_failure():
    result = accumulate_frames([StreamFrame.of_token("dangling")])
    assert not result.success
    assert result.error.kind is ErrorKind.UNKNOWN
