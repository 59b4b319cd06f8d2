"""
Providers Base Package

Exports the provider-agnostic contracts shared by every adapter:

- Errors: the closed error taxonomy and HTTP classification
- Models: conversation messages and stream frames
- Result: success/failure container returned by fallible operations
- Interfaces: the ``ProviderAdapter`` protocol
- Factory: lazy creation of adapters by provider id
- Cancellation, timeouts and streaming primitives
"""

from .cancellation import CancellationToken, CancelledError
from .capabilities import CapabilityDescriptor, get_capabilities
from .errors import CoreError, ErrorKind, explain, to_core_error
from .factory import ClientFactory, create_default_factory, default_factory
from .interfaces import ProviderAdapter
from .models import ConversationMessage, SenderRole, StreamFrame
from .result import Result, try_catch
from .streaming import StreamingCallbacks, drive_stream
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Errors
    "ErrorKind",
    "CoreError",
    "explain",
    "to_core_error",
    # Models
    "ConversationMessage",
    "SenderRole",
    "StreamFrame",
    # Result
    "Result",
    "try_catch",
    # Interfaces & capabilities
    "ProviderAdapter",
    "CapabilityDescriptor",
    "get_capabilities",
    # Factory
    "ClientFactory",
    "create_default_factory",
    "default_factory",
    # Timeouts & Cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    "CancelledError",
    # Streaming
    "StreamingCallbacks",
    "drive_stream",
]
