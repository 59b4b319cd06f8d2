"""SQLite repository for provider API keys.

``KeyStoreRepoSqlite`` stores one key per provider. Writes never commit on
their own; the surrounding ``db_session`` owns the transaction.
"""

from __future__ import annotations

import sqlite3
from typing import Dict, List, Optional


class KeyStoreRepoSqlite:
    """SQLite-backed repository for managing API keys."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get_api_key(self, provider: str) -> Optional[str]:
        """Return the key stored for ``provider`` (lowercased), or ``None``."""
        cur = self.conn.execute("SELECT api_key FROM keys WHERE provider = ?", (provider.lower(),))
        row = cur.fetchone()
        return row[0] if row else None

    def set_api_key(self, provider: str, key: str) -> None:
        """Insert or update the key for ``provider`` (no implicit commit)."""
        self.conn.execute(
            "INSERT INTO keys(provider, api_key, updated_at) VALUES(?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(provider) DO UPDATE SET api_key=excluded.api_key, updated_at=CURRENT_TIMESTAMP",
            (provider.lower(), key),
        )

    def delete_api_key(self, provider: str) -> None:
        """Delete the key for ``provider`` (idempotent, no commit)."""
        self.conn.execute("DELETE FROM keys WHERE provider = ?", (provider.lower(),))

    def delete_all(self) -> None:
        self.conn.execute("DELETE FROM keys")

    def list_providers(self) -> List[str]:
        """Return providers with stored keys in ascending order."""
        cur = self.conn.execute("SELECT provider FROM keys ORDER BY provider")
        return [r[0] for r in cur.fetchall()]

    def all_keys(self) -> Dict[str, str]:
        cur = self.conn.execute("SELECT provider, api_key FROM keys ORDER BY provider")
        return {r[0]: r[1] for r in cur.fetchall()}


__all__ = ["KeyStoreRepoSqlite"]
