"""Data model types re-exported by :mod:`quorum_providers.base.models`."""

from .conversation_message import ConversationMessage, DeliveryStatus, SenderRole, wire_role
from .stream_frame import StreamFrame

__all__ = [
    "ConversationMessage",
    "DeliveryStatus",
    "SenderRole",
    "StreamFrame",
    "wire_role",
]
