"""Abort an in-flight request by shutting down the socket it opened.

Purpose:
    Closing an ``httpx`` response only helps once response headers have
    arrived. A request still waiting for its headers sits in a blocking socket
    read that nothing else interrupts. :class:`ConnectionAbort` records every
    network stream a request opens through the httpcore ``trace`` extension
    and, when asked to abort, shuts those sockets down in both directions so
    the blocked read returns and the request fails with a transport error.

Usage:
    abort = ConnectionAbort()
    with token.registered(abort.abort):
        client.stream("POST", url, extensions={"trace": abort.trace})

Only connections opened by the traced request are seen. Requests that reuse
an idle pooled connection must therefore run on a client of their own (see
:func:`quorum_providers.base.http.client.new_httpx_client`).
"""

from __future__ import annotations

import contextlib
import socket
import threading
from typing import Any, List, Mapping

_OPEN_EVENTS = frozenset(
    {
        "connection.connect_tcp.complete",
        "connection.connect_unix_socket.complete",
        "connection.start_tls.complete",
    }
)


def _shutdown(stream: Any) -> None:
    sock = stream.get_extra_info("socket")
    if sock is None:
        return
    # raw sockets are detached once wrapped for TLS; they raise EBADF here
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


class ConnectionAbort:
    """Collect the network streams of one request and shut them down on demand."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._streams: List[Any] = []
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def trace(self, event: str, info: Mapping[str, Any]) -> None:
        """httpcore ``trace`` extension callback."""
        if event not in _OPEN_EVENTS:
            return
        stream = info.get("return_value")
        if stream is None:
            return
        with self._lock:
            self._streams.append(stream)
            aborted = self._aborted
        if aborted:
            _shutdown(stream)

    def abort(self) -> None:
        """Shut down every stream seen so far and any opened afterwards."""
        with self._lock:
            self._aborted = True
            streams = list(self._streams)
        for stream in streams:
            _shutdown(stream)


__all__ = ["ConnectionAbort"]
