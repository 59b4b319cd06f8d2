"""Drive a :class:`FrameParser` over a byte stream.

``iter_stream_frames`` is the lazy bridge between an HTTP response body and
the caller: it decodes bytes with an incremental UTF-8 decoder (so a
multi-byte character split across two network chunks is reassembled), feeds
the parser and yields frames one at a time. Nothing is read ahead of what the
consumer pulls.

Termination guarantees:
    - exactly one terminal frame (``done=True``) is yielded, always last;
    - cancellation observed before or between frames ends the sequence with
      ``TIMEOUT`` "the operation was cancelled" and no further tokens;
    - a read failure ends the sequence with the classified error.
"""
from __future__ import annotations

import codecs
from typing import Iterable, Iterator, Optional

from ..cancellation import CancellationToken
from ..errors import CANCELLED_MESSAGE, CoreError, ErrorKind, to_core_error
from ..models import StreamFrame
from .frame_parser import FrameParser


def _cancelled_frame(provider: Optional[str]) -> StreamFrame:
    return StreamFrame.end(CoreError(ErrorKind.TIMEOUT, CANCELLED_MESSAGE, provider=provider))


def iter_stream_frames(
    byte_chunks: Iterable[bytes],
    parser: FrameParser,
    cancellation_token: Optional[CancellationToken] = None,
    *,
    provider: Optional[str] = None,
) -> Iterator[StreamFrame]:
    """Yield token frames parsed from ``byte_chunks`` followed by one terminal frame."""
    token = cancellation_token
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _is_cancelled() -> bool:
        return token is not None and token.cancelled

    try:
        for chunk in byte_chunks:
            if _is_cancelled():
                yield _cancelled_frame(provider)
                return
            for frame in parser.feed(decoder.decode(chunk)):
                if _is_cancelled():
                    yield _cancelled_frame(provider)
                    return
                yield frame
                if frame.done:
                    return
            if parser.finished:
                break
        else:
            tail = parser.feed(decoder.decode(b"", final=True)) + parser.flush()
            for frame in tail:
                if _is_cancelled():
                    yield _cancelled_frame(provider)
                    return
                yield frame
                if frame.done:
                    return
    except Exception as exc:
        yield StreamFrame.end(to_core_error(exc, provider=provider, cancelled=_is_cancelled()))
        return

    if _is_cancelled():
        yield _cancelled_frame(provider)
        return
    yield StreamFrame.end()


__all__ = ["iter_stream_frames"]
