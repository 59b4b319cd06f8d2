"""In-memory credential map mirrored into one storage tier.

Lookup order on construction: the persistent tier first, then the session
tier; the store adopts the tier where keys were found (``SESSION`` when both
are empty). Every mutation is written through to the current tier.

Credentials are never logged; events only carry provider ids.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Mapping, Optional

from ..base.logging import get_logger, log_event
from ..config.env import resolve_provider_key
from .storage import CredentialBackend, StorageTier, default_backends


def _norm(provider_id: str) -> str:
    return (provider_id or "").strip().lower()


class CredentialStore:
    """Provider -> credential map with tiered persistence.

    Parameters
    ----------
    tier:
        Tier to use. When omitted the tier is detected from where existing
        keys were found. When given and keys were found elsewhere, they are
        moved into ``tier``.
    backends:
        Tier -> backend mapping; defaults to SQLite / process vault / null.
    env_fallback:
        When True, ``get_key`` falls back to provider environment variables
        (``OPENAI_API_KEY`` ...) for providers without a stored key.
    """

    def __init__(
        self,
        tier: Optional[StorageTier] = None,
        backends: Optional[Mapping[StorageTier, CredentialBackend]] = None,
        *,
        env_fallback: bool = False,
    ) -> None:
        self._backends: Dict[StorageTier, CredentialBackend] = dict(backends or default_backends())
        for t in StorageTier:
            if t not in self._backends:
                raise ValueError(f"missing credential backend for tier {t.value}")
        self._env_fallback = env_fallback
        self._lock = threading.RLock()
        self._logger = get_logger("quorum.credentials")
        self._keys: Dict[str, str] = {}
        self._tier = StorageTier.SESSION
        detected = self._load()
        if tier is not None and tier is not detected:
            self.set_tier(tier)

    def _load(self) -> StorageTier:
        for t in (StorageTier.PERSISTENT, StorageTier.SESSION):
            keys = self._backends[t].load()
            if keys:
                self._keys = {_norm(p): k for p, k in keys.items() if k}
                self._tier = t
                log_event(self._logger, "credentials.load", tier=t.value, providers=sorted(self._keys))
                return t
        return self._tier

    def _persist(self) -> None:
        self._backends[self._tier].save(dict(self._keys))

    @property
    def tier(self) -> StorageTier:
        return self._tier

    def set_key(self, provider_id: str, credential: str) -> None:
        """Store ``credential`` for ``provider_id`` and write through."""
        with self._lock:
            self._keys[_norm(provider_id)] = credential
            self._persist()
        log_event(self._logger, "credentials.set", provider=_norm(provider_id), tier=self._tier.value)

    def get_key(self, provider_id: str) -> Optional[str]:
        """Return the stored credential (or the environment one, if enabled)."""
        name = _norm(provider_id)
        key = self._keys.get(name)
        if key:
            return key
        if self._env_fallback:
            value, _ = resolve_provider_key(name)
            return value
        return None

    def has_key(self, provider_id: str) -> bool:
        """True only when a non-empty credential is available."""
        return bool((self.get_key(provider_id) or "").strip())

    def remove_key(self, provider_id: str) -> None:
        with self._lock:
            if self._keys.pop(_norm(provider_id), None) is not None:
                self._persist()
        log_event(self._logger, "credentials.remove", provider=_norm(provider_id), tier=self._tier.value)

    def clear_keys(self) -> None:
        """Forget every credential and wipe the current tier."""
        with self._lock:
            self._keys.clear()
            self._backends[self._tier].clear()
        log_event(self._logger, "credentials.clear", tier=self._tier.value)

    def providers(self) -> List[str]:
        return sorted(self._keys)

    def set_tier(self, tier: StorageTier) -> None:
        """Move all held credentials to ``tier``.

        The previous tier is cleared first so a credential never lives in two
        tiers at once; ``NONE`` therefore wipes durable copies.
        """
        with self._lock:
            previous = self._tier
            if tier is previous:
                return
            self._backends[previous].clear()
            self._tier = tier
            self._persist()
        log_event(self._logger, "credentials.tier", previous=previous.value, tier=tier.value)


__all__ = ["CredentialStore"]
