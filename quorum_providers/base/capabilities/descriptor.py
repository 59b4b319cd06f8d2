"""Capability descriptor value type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Static feature flags for one provider.

    ``supports_streaming`` is a promise: an adapter whose row sets it must
    implement a working ``stream_message``.
    """

    supports_streaming: bool
    supports_system_messages: bool
    max_context_length: int
    supports_function_calling: Optional[bool] = None
    supports_vision: Optional[bool] = None
    supports_tool: Optional[bool] = None


__all__ = ["CapabilityDescriptor"]
