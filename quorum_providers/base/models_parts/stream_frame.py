"""
Incremental frame emitted by streaming adapters.

A streamed reply is a finite sequence of ``StreamFrame`` values: zero or more
token frames followed by exactly one terminal frame (``done=True``), which
carries an ``error`` when the stream failed or was cancelled.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..errors_parts.core_error import CoreError


@dataclass(frozen=True)
class StreamFrame:
    """One element of a streamed reply."""

    done: bool
    token: Optional[str] = None
    error: Optional["CoreError"] = None

    @classmethod
    def of_token(cls, token: str) -> "StreamFrame":
        return cls(done=False, token=token)

    @classmethod
    def end(cls, error: Optional["CoreError"] = None) -> "StreamFrame":
        return cls(done=True, error=error)

    def is_error(self) -> bool:
        return self.error is not None


__all__ = ["StreamFrame"]
