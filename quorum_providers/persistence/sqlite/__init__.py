from __future__ import annotations

from .engine import create_connection, db_session, get_db_path, init_schema
from .keystore_repo import KeyStoreRepoSqlite

__all__ = [
    "create_connection",
    "db_session",
    "get_db_path",
    "init_schema",
    "KeyStoreRepoSqlite",
]
