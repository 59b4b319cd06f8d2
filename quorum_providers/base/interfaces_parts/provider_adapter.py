"""ProviderAdapter Protocol (single-class module).

Defines the uniform contract every provider adapter implements.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Protocol, Sequence, runtime_checkable

from ..cancellation import CancellationToken
from ..capabilities import CapabilityDescriptor
from ..dto import GenerationSettings
from ..models import ConversationMessage, StreamFrame
from ..result import Result
from ..streaming import StreamingCallbacks


@runtime_checkable
class ProviderAdapter(Protocol):
    """Uniform "send a conversation, get a reply" contract.

    Implementations never raise for provider failures on the send paths: the
    blocking path returns a failed ``Result`` and the streaming path ends with
    an error frame. ``validate_credential`` is the exception: network failures
    raise ``CoreError`` so the validator can decide how to report them.
    """

    def get_provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"``."""
        ...

    def get_available_models(self) -> List[str]:
        ...

    def get_default_model(self) -> str:
        ...

    def get_capabilities(self) -> CapabilityDescriptor:
        ...

    def supports_streaming(self) -> bool:
        ...

    def send_message(
        self,
        messages: Sequence[ConversationMessage],
        credential: str,
        model: Optional[str] = None,
        settings: Optional[GenerationSettings] = None,
        callbacks: Optional[StreamingCallbacks] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[str]:
        """Blocking request returning the full reply text."""
        ...

    def stream_message(
        self,
        messages: Sequence[ConversationMessage],
        credential: str,
        model: Optional[str] = None,
        settings: Optional[GenerationSettings] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[StreamFrame]:
        """Lazy, finite, non-restartable sequence of frames."""
        ...

    def validate_credential(self, credential: str) -> bool:
        ...
