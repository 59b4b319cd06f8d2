"""
Conversation message DTO used across adapters and the facade.

Defines the immutable ``ConversationMessage`` dataclass, the well-known sender
roles and the delivery status literal. ``sender_role`` is a free string:
``"user"`` and ``"system"`` are special, any other value (a provider id, a
participant id) is treated as an assistant turn on the wire.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..errors_parts.core_error import CoreError


class SenderRole(str, Enum):
    """Well-known sender roles."""

    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"


DeliveryStatus = Literal["sending", "sent", "error"]


def _now_ms() -> int:
    return int(time.time() * 1000)


def wire_role(sender_role: Any) -> str:
    """Map a sender role to the generic wire role (``user|system|assistant``)."""
    value = sender_role.value if isinstance(sender_role, SenderRole) else str(sender_role)
    if value == SenderRole.USER.value:
        return "user"
    if value == SenderRole.SYSTEM.value:
        return "system"
    return "assistant"


@dataclass(frozen=True)
class ConversationMessage:
    """A single conversation turn.

    Attributes:
        id: Unique identifier (UUID4 string by default).
        sender_role: ``"user"``, ``"system"`` or any other sender id (assistant).
        text: Message text.
        timestamp: Creation time in epoch milliseconds.
        provider_id: Provider that produced the message, if any.
        model_id: Model that produced the message, if any.
        delivery_status: ``sending``, ``sent`` or ``error``.
        error: Normalized error attached to failed messages.
    """

    id: str
    sender_role: str
    text: str
    timestamp: int
    provider_id: Optional[str] = None
    model_id: Optional[str] = None
    delivery_status: Optional[DeliveryStatus] = None
    error: Optional["CoreError"] = None

    @classmethod
    def create(
        cls,
        sender_role: Any,
        text: str,
        *,
        provider_id: Optional[str] = None,
        model_id: Optional[str] = None,
        delivery_status: Optional[DeliveryStatus] = None,
        error: Optional["CoreError"] = None,
    ) -> "ConversationMessage":
        """Build a message with a fresh id and the current timestamp."""
        role = sender_role.value if isinstance(sender_role, SenderRole) else str(sender_role)
        return cls(
            id=str(uuid.uuid4()),
            sender_role=role,
            text=text,
            timestamp=_now_ms(),
            provider_id=provider_id,
            model_id=model_id,
            delivery_status=delivery_status,
            error=error,
        )

    @classmethod
    def user(cls, text: str) -> "ConversationMessage":
        return cls.create(SenderRole.USER, text)

    @classmethod
    def system(cls, text: str) -> "ConversationMessage":
        return cls.create(SenderRole.SYSTEM, text)

    @property
    def wire_role(self) -> str:
        """Generic wire role for this message."""
        return wire_role(self.sender_role)

    def with_updates(self, **fields: Any) -> "ConversationMessage":
        """Return a copy with ``fields`` replaced; the original is untouched."""
        return replace(self, **fields)


__all__ = ["ConversationMessage", "DeliveryStatus", "SenderRole", "wire_role"]
