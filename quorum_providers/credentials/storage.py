"""Credential storage tiers and their backends.

A :class:`CredentialStore` mirrors its keys into exactly one tier:

- ``PERSISTENT``: SQLite file surviving restarts.
- ``SESSION``: in-memory vault living as long as the process.
- ``NONE``: not mirrored anywhere; keys vanish with the store object.

Backends share a three-method shape (``load``, ``save``, ``clear``) so the
store can move keys between tiers without knowing how each one is kept.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, MutableMapping, Optional, Protocol, runtime_checkable

from ..persistence.sqlite import KeyStoreRepoSqlite, db_session


class StorageTier(str, Enum):
    PERSISTENT = "persistent"
    SESSION = "session"
    NONE = "none"


@runtime_checkable
class CredentialBackend(Protocol):
    """Storage for a provider -> credential mapping."""

    def load(self) -> Dict[str, str]:
        ...

    def save(self, keys: Mapping[str, str]) -> None:
        """Replace the stored mapping with ``keys``."""
        ...

    def clear(self) -> None:
        ...


class SqliteCredentialBackend:
    """Persistent tier backed by the SQLite ``keys`` table."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path

    def load(self) -> Dict[str, str]:
        with db_session(self._db_path) as conn:
            return KeyStoreRepoSqlite(conn).all_keys()

    def save(self, keys: Mapping[str, str]) -> None:
        with db_session(self._db_path) as conn:
            repo = KeyStoreRepoSqlite(conn)
            repo.delete_all()
            for provider, key in keys.items():
                repo.set_api_key(provider, key)

    def clear(self) -> None:
        with db_session(self._db_path) as conn:
            KeyStoreRepoSqlite(conn).delete_all()


# Process-lifetime vault shared by session backends that are not given one.
_SESSION_VAULT: Dict[str, str] = {}


class SessionCredentialBackend:
    """Session tier: a dict that lives as long as the process."""

    def __init__(self, vault: Optional[MutableMapping[str, str]] = None) -> None:
        self._vault = _SESSION_VAULT if vault is None else vault

    def load(self) -> Dict[str, str]:
        return dict(self._vault)

    def save(self, keys: Mapping[str, str]) -> None:
        self._vault.clear()
        self._vault.update(keys)

    def clear(self) -> None:
        self._vault.clear()


class NullCredentialBackend:
    """``NONE`` tier: stores nothing."""

    def load(self) -> Dict[str, str]:
        return {}

    def save(self, keys: Mapping[str, str]) -> None:
        return None

    def clear(self) -> None:
        return None


def default_backends(db_path: Optional[str] = None) -> Dict[StorageTier, CredentialBackend]:
    return {
        StorageTier.PERSISTENT: SqliteCredentialBackend(db_path),
        StorageTier.SESSION: SessionCredentialBackend(),
        StorageTier.NONE: NullCredentialBackend(),
    }


__all__ = [
    "StorageTier",
    "CredentialBackend",
    "SqliteCredentialBackend",
    "SessionCredentialBackend",
    "NullCredentialBackend",
    "default_backends",
]
