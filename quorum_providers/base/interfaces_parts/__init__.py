"""Single-class Protocol modules re-exported by :mod:`quorum_providers.base.interfaces`."""

from .provider_adapter import ProviderAdapter

__all__ = ["ProviderAdapter"]
