"""Pytest configuration for the providers test suite.

Every test runs with a clean provider environment: credential and config
variables are removed, the credential database points into ``tmp_path`` and
the config/HTTP caches are reset afterwards so nothing leaks between tests.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List

import pytest

from quorum_providers.base.factory import ClientFactory, create_default_factory
from quorum_providers.base.http import close_all_clients
from quorum_providers.base.logging import get_logger
from quorum_providers.config import reload_config
from quorum_providers.config.defaults import CONFIG_FILE_ENV, KEYSTORE_PATH_ENV, SUPPORTED_PROVIDERS
from quorum_providers.config.env import ENV_MAP
from quorum_providers.credentials import storage as credential_storage
from quorum_providers.tests.helpers import RecordingTransport


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider env vars and isolate the credential database."""
    for names in ENV_MAP.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    for provider in SUPPORTED_PROVIDERS:
        for suffix in ("BASE_URL", "MODEL", "MODELS"):
            monkeypatch.delenv(f"{provider.upper()}_{suffix}", raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    monkeypatch.delenv("QUORUM_HTTP_CONNECT_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("QUORUM_HTTP_READ_TIMEOUT_SECONDS", raising=False)
    monkeypatch.setenv(KEYSTORE_PATH_ENV, str(tmp_path / "credentials.db"))
    reload_config()
    credential_storage._SESSION_VAULT.clear()
    yield
    credential_storage._SESSION_VAULT.clear()
    reload_config()
    close_all_clients()


@pytest.fixture()
def make_factory() -> Callable[[RecordingTransport], ClientFactory]:
    """Return a builder for fresh factories whose adapters use ``transport``."""

    def _make(transport: RecordingTransport) -> ClientFactory:
        return create_default_factory(http_client=transport.client())

    return _make


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture()
def log_events() -> Iterator[Callable[[], List[Dict[str, Any]]]]:
    """Capture structured events emitted under the ``quorum`` logger.

    The base logger does not propagate to root, so ``caplog`` cannot see it;
    a handler is attached directly instead. Yields a function returning the
    decoded JSON payloads seen so far, each tagged with ``_level``.
    """
    base = get_logger()
    handler = _ListHandler()
    base.addHandler(handler)

    def _events() -> List[Dict[str, Any]]:
        out: List[Dict[str, Any]] = []
        for record in handler.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict):
                payload["_level"] = record.levelno
                out.append(payload)
        return out

    try:
        yield _events
    finally:
        base.removeHandler(handler)
