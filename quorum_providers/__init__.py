"""quorum_providers package

One contract over several chat-completion providers (OpenAI, Anthropic, xAI
Grok, Google Gemini) for a multi-participant conversation front-end.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`CoreError`, :class:`ErrorKind`, :func:`explain`
    - Messages: :class:`ConversationMessage`, :class:`StreamingCallbacks`
    - Factory: :class:`ClientFactory`, :func:`get_client`
    - Credentials: :class:`CredentialStore`, :class:`CredentialValidator`
    - Facade: :class:`LLMService`

Typical use::

    service = LLMService(CredentialStore())
    result = service.send_message([ConversationMessage.user("hi")], "openai")
    if result.success:
        print(result.data.text)
"""

from .base.cancellation import CancellationToken
from .base.dto import GenerationSettings, ParticipantConfig
from .base.errors import CoreError, ErrorKind, explain
from .base.factory import ClientFactory, default_factory
from .base.interfaces import ProviderAdapter
from .base.models import ConversationMessage, SenderRole
from .base.result import Result
from .base.streaming import StreamingCallbacks
from .credentials import CredentialStore, CredentialValidator, StorageTier
from .service import LLMService

__version__ = "0.1.0"


def get_client(provider_id: str) -> ProviderAdapter:
    """Return the adapter for ``provider_id`` from the process-wide factory.

    Raises
    ------
    CoreError
        ``INVALID_PROVIDER`` for an unknown identifier.
    """
    return default_factory().get_client(provider_id)


__all__ = [
    "__version__",
    # Errors
    "CoreError",
    "ErrorKind",
    "explain",
    # Messages & settings
    "ConversationMessage",
    "SenderRole",
    "GenerationSettings",
    "ParticipantConfig",
    "StreamingCallbacks",
    "CancellationToken",
    "Result",
    # Adapters
    "ProviderAdapter",
    "ClientFactory",
    "get_client",
    # Credentials
    "CredentialStore",
    "CredentialValidator",
    "StorageTier",
    # Facade
    "LLMService",
]
