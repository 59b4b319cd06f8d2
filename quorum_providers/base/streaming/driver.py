"""Consume a frame sequence into a ``Result`` while firing callbacks.

The adapters expose a pull-based sequence; UI callers often want push-style
callbacks. ``drive_stream`` bridges the two without spawning anything: it
iterates in the caller's thread and invokes the callbacks inline.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..errors import CoreError, ErrorKind
from ..models import StreamFrame
from ..result import Result
from .callbacks import StreamingCallbacks


def drive_stream(
    frames: Iterable[StreamFrame],
    callbacks: Optional[StreamingCallbacks] = None,
) -> Result[str]:
    """Iterate ``frames`` to completion and return the accumulated text.

    ``on_token`` fires per token, then exactly one of ``on_complete`` or
    ``on_error`` fires when the terminal frame arrives.
    """
    cb = callbacks or StreamingCallbacks()
    parts: List[str] = []
    for frame in frames:
        if frame.token:
            parts.append(frame.token)
            if cb.on_token is not None:
                cb.on_token(frame.token)
        if not frame.done:
            continue
        if frame.error is not None:
            if cb.on_error is not None:
                cb.on_error(frame.error)
            return Result.fail(frame.error)
        text = "".join(parts)
        if cb.on_complete is not None:
            cb.on_complete(text)
        return Result.ok(text)
    # A well-formed sequence never ends without a terminal frame.
    error = CoreError(ErrorKind.UNKNOWN, "stream ended without a terminal frame")
    if cb.on_error is not None:
        cb.on_error(error)
    return Result.fail(error)


def accumulate_frames(frames: Iterable[StreamFrame]) -> Result[str]:
    """Collect a frame sequence into one text result (no callbacks)."""
    return drive_stream(frames)


__all__ = ["drive_stream", "accumulate_frames"]
