"""Unified helper for determining streaming capability at runtime."""
from __future__ import annotations

from typing import Any

__all__ = ["streaming_supported"]


def streaming_supported(http_client: Any, *, capability_flag: bool) -> bool:
    """Return True when the capability row allows streaming and ``http_client``
    can open a streamed response right now (has ``stream`` and is not closed).
    """
    if not capability_flag or http_client is None:
        return False
    if not callable(getattr(http_client, "stream", None)):
        return False
    return not getattr(http_client, "is_closed", False)
