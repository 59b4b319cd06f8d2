"""Push-style callbacks driven from a pulled frame sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import CoreError


@dataclass(frozen=True)
class StreamingCallbacks:
    """Optional observers for a reply.

    ``on_token`` receives each text delta (streaming path only).
    ``on_complete`` receives the full reply text once.
    ``on_error`` receives the terminal error once.
    """

    on_token: Optional[Callable[[str], None]] = None
    on_complete: Optional[Callable[[str], None]] = None
    on_error: Optional[Callable[[CoreError], None]] = None

    @property
    def wants_tokens(self) -> bool:
        return self.on_token is not None


__all__ = ["StreamingCallbacks"]
