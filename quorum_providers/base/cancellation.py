"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs via the canonical
``quorum_providers.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is threaded caller -> facade -> adapter -> frame reader.
- ``CancelledError`` is raised internally by operations that observe a
  cancellation request and is mapped to a ``TIMEOUT`` error at the boundary.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
