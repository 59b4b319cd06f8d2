"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
inside adapters. It never reaches callers directly: the classification layer
turns it into a ``TIMEOUT`` ``CoreError``.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request."""


__all__ = ["CancelledError"]
