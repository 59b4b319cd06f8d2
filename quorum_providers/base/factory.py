"""Client Factory.

Purpose
-------
Resolve a provider identifier to an adapter instance. The factory is an
explicit object holding two maps: a constructor registry
(identifier -> zero-argument constructor) and a memo of adapters already
built. Callers (and tests) create their own instances; a process-wide default
is available for convenience but nothing depends on it.

Built-in providers are registered as lazy constructors that import their
adapter module with ``importlib`` on first use, so importing the factory does
not import every adapter.

Failure modes
-------------
- Unknown identifier -> ``CoreError(INVALID_PROVIDER)``.
- A constructor that raises propagates as ``CoreError(INVALID_PROVIDER)``
  naming the provider and the cause.
"""

from __future__ import annotations

import threading
from importlib import import_module
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import CoreError, ErrorKind
from .interfaces import ProviderAdapter

AdapterConstructor = Callable[[], ProviderAdapter]

# Canonical provider id -> (module path, class name)
BUILTIN_ADAPTERS: Mapping[str, Tuple[str, str]] = {
    "openai": ("quorum_providers.openai.client", "OpenAIAdapter"),
    "anthropic": ("quorum_providers.anthropic.client", "AnthropicAdapter"),
    "grok": ("quorum_providers.grok.client", "GrokAdapter"),
    "google": ("quorum_providers.google.client", "GoogleAdapter"),
}


def _normalize(provider_id: Any) -> str:
    return str(provider_id or "").strip().lower()


def lazy_constructor(module_path: str, class_name: str, **kwargs: Any) -> AdapterConstructor:
    """Return a constructor importing ``module_path`` only when first called."""

    def _construct() -> ProviderAdapter:
        module = import_module(module_path)
        klass = getattr(module, class_name)
        return klass(**kwargs)

    _construct.__qualname__ = f"lazy_constructor<{module_path}.{class_name}>"
    return _construct


class ClientFactory:
    """Create and memoize provider adapters by identifier.

    Design notes
    ------------
    - ``get_client`` returns the same instance for the same identifier until
      ``register_client`` replaces it or ``reset`` clears the memo.
    - Identifiers are matched case-insensitively.
    - Safe for concurrent ``get_client`` calls: construction is guarded by a
      lock so two threads never build two instances for one id.
    """

    def __init__(self, constructors: Optional[Mapping[str, AdapterConstructor]] = None) -> None:
        self._constructors: Dict[str, AdapterConstructor] = {}
        self._instances: Dict[str, ProviderAdapter] = {}
        self._lock = threading.RLock()
        for provider_id, ctor in (constructors or {}).items():
            self.register_constructor(provider_id, ctor)

    def register_constructor(self, provider_id: str, constructor: AdapterConstructor) -> None:
        """Register (or replace) the constructor for ``provider_id``.

        A previously memoized instance for the id is dropped so the next
        ``get_client`` uses the new constructor.
        """
        name = _normalize(provider_id)
        if not name:
            raise CoreError(ErrorKind.INVALID_PROVIDER, "provider id must not be empty")
        with self._lock:
            self._constructors[name] = constructor
            self._instances.pop(name, None)

    def register_client(self, provider_id: str, adapter: ProviderAdapter) -> None:
        """Overwrite the memoized adapter for ``provider_id`` (test injection)."""
        name = _normalize(provider_id)
        if not name:
            raise CoreError(ErrorKind.INVALID_PROVIDER, "provider id must not be empty")
        with self._lock:
            self._instances[name] = adapter

    def get_client(self, provider_id: str) -> ProviderAdapter:
        """Return the memoized adapter for ``provider_id``, building it once.

        Raises
        ------
        CoreError
            ``INVALID_PROVIDER`` when the id has no registered constructor or
            the constructor fails.
        """
        name = _normalize(provider_id)
        adapter = self._instances.get(name)
        if adapter is not None:
            return adapter
        with self._lock:
            adapter = self._instances.get(name)
            if adapter is not None:
                return adapter
            ctor = self._constructors.get(name)
            if ctor is None:
                raise CoreError(
                    ErrorKind.INVALID_PROVIDER,
                    f"unknown provider '{provider_id}'",
                    provider=name or None,
                )
            try:
                adapter = ctor()
            except CoreError:
                raise
            except Exception as exc:
                raise CoreError(
                    ErrorKind.INVALID_PROVIDER,
                    f"failed to initialize provider '{name}': {exc}",
                    provider=name,
                ) from exc
            self._instances[name] = adapter
            return adapter

    def supported(self) -> Tuple[str, ...]:
        """Return registered provider ids in registration order."""
        with self._lock:
            return tuple(self._constructors)

    def is_supported(self, provider_id: str) -> bool:
        return _normalize(provider_id) in self._constructors

    def reset(self) -> None:
        """Drop every memoized adapter (constructors stay registered)."""
        with self._lock:
            self._instances.clear()


def create_default_factory(**adapter_kwargs: Any) -> ClientFactory:
    """Return a fresh factory populated with the four built-in adapters.

    ``adapter_kwargs`` (for example ``http_client=...``) are forwarded to every
    built-in adapter constructor.
    """
    return ClientFactory(
        {
            provider_id: lazy_constructor(module_path, class_name, **adapter_kwargs)
            for provider_id, (module_path, class_name) in BUILTIN_ADAPTERS.items()
        }
    )


_DEFAULT: Optional[ClientFactory] = None
_DEFAULT_LOCK = threading.Lock()


def default_factory() -> ClientFactory:
    """Return the lazily created process-wide factory."""
    global _DEFAULT  # noqa: PLW0603 - documented module singleton
    if _DEFAULT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT is None:
                _DEFAULT = create_default_factory()
    return _DEFAULT


__all__ = [
    "AdapterConstructor",
    "BUILTIN_ADAPTERS",
    "ClientFactory",
    "create_default_factory",
    "default_factory",
    "lazy_constructor",
]
