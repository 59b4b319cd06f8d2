"""
Provider-agnostic data model (public facade).

Re-exports the conversation message and stream frame types that live under
``models_parts`` so adapters and callers import them from one place.
"""
from __future__ import annotations

from .models_parts import ConversationMessage, DeliveryStatus, SenderRole, StreamFrame, wire_role

__all__ = [
    "ConversationMessage",
    "DeliveryStatus",
    "SenderRole",
    "StreamFrame",
    "wire_role",
]
