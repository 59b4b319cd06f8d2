"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class passed from caller to facade to
adapter to frame reader. Operations poll it between I/O steps and may register
a release callback (for example closing an open HTTP response) that runs when
cancellation is requested.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import Lock
from typing import Callable, Iterator, List

from .cancelled_error import CancelledError
from .state import State

_logger = logging.getLogger("quorum.cancellation")


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    Thread-safe for ``cancel`` from another thread while the owning operation
    polls ``raise_if_cancelled``. Child tokens inherit cancellation when the
    parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run release callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for callback in callbacks:
            try:
                callback()
            except Exception as exc:  # release hooks must not stop cancellation
                _logger.debug("cancel callback failed: %s", exc)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run once on cancellation.

        When the token is already cancelled the callback runs immediately.
        Returns a function that unregisters the callback.
        """
        with self._lock:
            run_now = self._state.cancelled
            if not run_now:
                self._state.callbacks.append(callback)
        if run_now:
            callback()

        def _unregister() -> None:
            with self._lock:
                if callback in self._state.callbacks:
                    self._state.callbacks.remove(callback)

        return _unregister

    @contextmanager
    def registered(self, callback: Callable[[], None]) -> Iterator[None]:
        """Context manager keeping ``callback`` registered for the block only."""
        unregister = self.on_cancel(callback)
        try:
            yield
        finally:
            unregister()

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
