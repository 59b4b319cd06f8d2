"""SQLite engine helpers for the persistence layer.

Purpose
-------
Open SQLite connections with consistent PRAGMA settings and ensure the
credential schema exists.

External dependencies
---------------------
- Standard library only (``sqlite3``). No side effects at import time.

Reliability strategy
--------------------
- Applies ``busy_timeout`` from ``config.defaults`` to mitigate lock
  contention between processes sharing one credential file.
- WAL journaling with NORMAL synchronous mode.

Location
--------
``QUORUM_KEYSTORE_PATH`` when set, otherwise ``~/.quorum/credentials.db``.
"""

from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ...config.defaults import (
    KEYSTORE_DEFAULT_PATH,
    KEYSTORE_PATH_ENV,
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Return a concrete database file path (not created yet).

    Precedence: explicit ``db_path`` -> ``QUORUM_KEYSTORE_PATH`` -> default.
    ``~`` is expanded.
    """
    raw = db_path or os.getenv(KEYSTORE_PATH_ENV) or KEYSTORE_DEFAULT_PATH
    return Path(raw).expanduser()


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection and apply PRAGMA settings.

    The parent directory is created when missing. ``row_factory`` is set to
    ``sqlite3.Row``.
    """
    path = get_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
    conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the ``keys`` table (provider -> API key) if missing, then commit."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS keys (
            provider TEXT PRIMARY KEY,
            api_key  TEXT NOT NULL,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """
    )
    conn.commit()


@contextmanager
def db_session(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """Context manager yielding a connection with schema initialized.

    Commits on normal exit, rolls back if the block raises, always closes.
    """
    conn = create_connection(db_path)
    try:
        init_schema(conn)
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


__all__ = ["get_db_path", "create_connection", "init_schema", "db_session"]
