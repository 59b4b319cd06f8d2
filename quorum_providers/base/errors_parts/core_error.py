"""
Structured error exception type.

Every failure that crosses a module boundary is a ``CoreError`` carrying a
normalized :class:`ErrorKind`. No stack or raw provider payload is retained;
the provider's own message is embedded in ``message`` instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from .error_kind import ErrorKind

if TYPE_CHECKING:  # pragma: no cover
    from ..models_parts.conversation_message import ConversationMessage


@dataclass
class CoreError(Exception):
    """Represents a normalized failure.

    Attributes:
        kind: Normalized :class:`ErrorKind` classification for the failure.
        message: Human-readable detail suitable for logging.
        offending_message: Optional error-status conversation message produced
            by the facade so a UI can render the failure in place.
        provider: Provider identifier where the error originated, if known.
    """

    kind: ErrorKind
    message: str
    offending_message: Optional["ConversationMessage"] = None
    provider: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, kind and message."""
        return f"{self.provider or '-'} {self.kind.value}: {self.message}"

    def with_offending_message(self, message: "ConversationMessage") -> "CoreError":
        """Return a copy of this error attached to ``message``."""
        return CoreError(
            kind=self.kind,
            message=self.message,
            offending_message=message,
            provider=self.provider,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error to a JSON-friendly mapping (for logging)."""
        data: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.provider:
            data["provider"] = self.provider
        return data


__all__ = ["CoreError"]
