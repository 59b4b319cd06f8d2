"""Static capability table keyed by provider id."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .descriptor import CapabilityDescriptor

CAPABILITIES: Mapping[str, CapabilityDescriptor] = MappingProxyType(
    {
        "openai": CapabilityDescriptor(
            supports_streaming=True,
            supports_system_messages=True,
            max_context_length=128_000,
            supports_function_calling=True,
            supports_vision=True,
            supports_tool=True,
        ),
        "anthropic": CapabilityDescriptor(
            supports_streaming=True,
            supports_system_messages=True,
            max_context_length=100_000,
            supports_vision=True,
        ),
        "grok": CapabilityDescriptor(
            supports_streaming=True,
            supports_system_messages=True,
            max_context_length=16_384,
        ),
        "google": CapabilityDescriptor(
            supports_streaming=True,
            supports_system_messages=True,
            max_context_length=32_768,
        ),
    }
)


def get_capabilities(provider_id: str) -> Optional[CapabilityDescriptor]:
    """Return the descriptor for ``provider_id`` or ``None`` if unknown."""
    return CAPABILITIES.get((provider_id or "").strip().lower())


__all__ = ["CAPABILITIES", "get_capabilities"]
