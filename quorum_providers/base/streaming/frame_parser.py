"""Incremental Server-Sent-Event frame parser.

Purpose:
    Turn an arbitrarily chunked text stream of ``data:`` lines into token
    frames. Network chunks do not respect line boundaries, so the parser keeps
    the incomplete trailing line in a buffer and only parses a line once its
    newline has arrived (or the stream ends and :meth:`FrameParser.flush` is
    called).

Line rules:
    - blank lines and lines that do not start with the prefix (``event:``
      lines, ``:`` heartbeats) are discarded;
    - a payload equal to the sentinel (``[DONE]``) is discarded and marks the
      parser finished;
    - every other payload is parsed as JSON; malformed JSON is logged as
      ``stream.decode_error`` and skipped, the stream continues.

Provider specifics are injected: ``extract_delta`` pulls the text delta out of
a decoded object and the optional ``extract_error`` recognizes in-band error
events, which terminate the stream with an error frame.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List, Optional

from ..errors import CoreError
from ..logging import LogContext, normalized_log_event
from ..models import StreamFrame

DeltaExtractor = Callable[[Any], Optional[str]]
ErrorExtractor = Callable[[Any], Optional[CoreError]]

DEFAULT_PREFIX = "data:"
DEFAULT_SENTINEL = "[DONE]"

# SSE line endings: CRLF, LF or a bare CR. Not str.splitlines: U+2028 may occur
# unescaped inside a JSON payload.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class FrameParser:
    """Stateful line-buffering parser for one streamed response.

    Instances are single-use: create one per response.
    """

    def __init__(
        self,
        extract_delta: DeltaExtractor,
        *,
        prefix: str = DEFAULT_PREFIX,
        sentinel: Optional[str] = DEFAULT_SENTINEL,
        extract_error: Optional[ErrorExtractor] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._extract_delta = extract_delta
        self._extract_error = extract_error
        self._prefix = prefix
        self._sentinel = sentinel
        self._logger = logger
        self._ctx = ctx
        self._buffer = ""
        self.finished = False
        self.decode_errors = 0

    def feed(self, text: str) -> List[StreamFrame]:
        """Consume decoded ``text`` and return the frames completed by it.

        A returned frame with ``done=True`` is an in-band provider error; the
        caller must stop reading after it.
        """
        if not text:
            return []
        self._buffer += text
        *complete, self._buffer = _LINE_BREAK.split(self._buffer)
        return self._parse_lines(complete)

    def flush(self) -> List[StreamFrame]:
        """Parse whatever remains in the buffer at end of stream."""
        rest, self._buffer = self._buffer, ""
        return self._parse_lines([rest]) if rest else []

    def _parse_lines(self, lines: List[str]) -> List[StreamFrame]:
        frames: List[StreamFrame] = []
        for raw in lines:
            if self.finished:
                break
            frame = self._parse_line(raw)
            if frame is None:
                continue
            frames.append(frame)
            if frame.done:
                self.finished = True
        return frames

    def _parse_line(self, raw: str) -> Optional[StreamFrame]:
        line = raw.strip()
        if not line:
            return None
        if self._sentinel is not None and line == self._sentinel:
            self.finished = True
            return None
        if not line.startswith(self._prefix):
            return None
        payload = line[len(self._prefix):].strip()
        if not payload:
            return None
        if self._sentinel is not None and payload == self._sentinel:
            self.finished = True
            return None
        try:
            obj = json.loads(payload)
        except ValueError as exc:
            self.decode_errors += 1
            self._log_decode_error(payload, exc)
            return None
        if self._extract_error is not None:
            error = self._extract_error(obj)
            if error is not None:
                return StreamFrame.end(error)
        try:
            delta = self._extract_delta(obj)
        except (KeyError, IndexError, TypeError, AttributeError):
            delta = None
        if not delta:
            return None
        return StreamFrame.of_token(delta)

    def _log_decode_error(self, payload: str, exc: Exception) -> None:
        if self._logger is None:
            return
        normalized_log_event(
            self._logger,
            "stream.decode_error",
            self._ctx,
            phase="stream",
            emitted=None,
            tokens=None,
            error=str(exc),
            line_preview=payload[:120],
            level=logging.WARNING,
        )


__all__ = ["FrameParser", "DeltaExtractor", "ErrorExtractor", "DEFAULT_PREFIX", "DEFAULT_SENTINEL"]
