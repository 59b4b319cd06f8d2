"""Unit tests for shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- A closed client is replaced on the next lookup.
- Timeouts come from the environment and default to none.
"""
from __future__ import annotations

from quorum_providers.base.http import close_all_clients, get_httpx_client
from quorum_providers.base.timeouts import (
    CONNECT_TIMEOUT_ENV,
    READ_TIMEOUT_ENV,
    TimeoutConfig,
    get_timeout_config,
)


def setup_function(_):
    # Ensure a clean slate for each test
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="openai")
    c2 = get_httpx_client("https://api.example.com", purpose="openai")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="openai")
    c2 = get_httpx_client("https://api.example.com", purpose="grok")
    assert c1 is not c2, "Different purposes should not share the same client instance"


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="openai")
    c2 = get_httpx_client("https://api.other.com", purpose="openai")
    assert c1 is not c2, "Different base URLs should not share the same client instance"


def test_closed_client_is_recreated():
    c1 = get_httpx_client("https://api.example.com", purpose="anthropic")
    c1.close()
    c2 = get_httpx_client("https://api.example.com", purpose="anthropic")
    assert c2 is not c1 and not c2.is_closed  # nosec B101


def test_close_all_clients_closes_pooled_instances():
    c1 = get_httpx_client(None, purpose="google")
    close_all_clients()
    assert c1.is_closed  # nosec B101


def test_no_timeout_by_default():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig()  # nosec B101
    client = get_httpx_client("https://api.example.com", purpose="openai")
    assert client.timeout.connect is None and client.timeout.read is None  # nosec B101


def test_timeouts_from_environment(monkeypatch):
    monkeypatch.setenv(CONNECT_TIMEOUT_ENV, "2.5")
    monkeypatch.setenv(READ_TIMEOUT_ENV, "30")
    cfg = get_timeout_config()
    assert cfg.connect_timeout_seconds == 2.5 and cfg.read_timeout_seconds == 30.0  # nosec B101
    timeout = cfg.to_httpx()
    assert timeout.connect == 2.5 and timeout.read == 30.0  # nosec B101
    assert timeout.write is None and timeout.pool is None  # nosec B101


def test_invalid_timeouts_are_ignored(monkeypatch):
    monkeypatch.setenv(CONNECT_TIMEOUT_ENV, "soon")
    monkeypatch.setenv(READ_TIMEOUT_ENV, "-1")
    assert get_timeout_config() == TimeoutConfig()  # nosec B101
