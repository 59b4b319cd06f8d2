from __future__ import annotations

import json
import logging

from quorum_providers.config import DEFAULTS, get_model, get_provider_config, reload_config
from quorum_providers.config.defaults import CONFIG_FILE_ENV
from quorum_providers.config.env import (
    ENV_MAP,
    get_env_var_candidates,
    get_env_var_name,
    is_placeholder,
    resolve_provider_key,
)


def _use_config_file(monkeypatch, path) -> None:
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reload_config()


def test_env_map_contains_expected_keys():
    assert set(ENV_MAP) == {"openai", "anthropic", "grok", "google"}  # nosec B101


def test_get_env_var_name_and_candidates():
    assert get_env_var_name("openai") == "OPENAI_API_KEY"  # nosec B101
    assert get_env_var_name("grok") == "XAI_API_KEY"  # nosec B101
    assert list(get_env_var_candidates("Google")) == ["GEMINI_API_KEY", "GOOGLE_API_KEY"]  # nosec B101
    assert get_env_var_name("mistral") is None  # nosec B101


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")  # nosec B101
    assert is_placeholder(" ChangeMe123 ")  # nosec B101
    assert is_placeholder("YOUR-API-KEY")  # nosec B101
    assert not is_placeholder("real-value")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_resolve_provider_key_prefers_canonical(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "canon")
    monkeypatch.setenv("GOOGLE_API_KEY", "alias")
    assert resolve_provider_key("google") == ("canon", "GEMINI_API_KEY")  # nosec B101


def test_resolve_provider_key_skips_placeholder_and_blank(monkeypatch):
    monkeypatch.setenv("XAI_API_KEY", "changeme")
    monkeypatch.setenv("GROK_API_KEY", "xai-real")
    assert resolve_provider_key("grok") == ("xai-real", "GROK_API_KEY")  # nosec B101
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    assert resolve_provider_key("openai") == (None, None)  # nosec B101
    assert resolve_provider_key("mistral") == (None, None)  # nosec B101


def test_defaults_when_nothing_is_configured():
    cfg = get_provider_config("openai")
    assert cfg["base_url"] == "https://api.openai.com/v1"  # nosec B101
    assert cfg["model"] == "gpt-4o" and cfg["model"] in cfg["models"]  # nosec B101
    assert get_model("anthropic") == "claude-3-7-sonnet-latest"  # nosec B101
    assert get_provider_config("unknown") == {"models": []}  # nosec B101


def test_returned_config_is_a_copy():
    cfg = get_provider_config("grok")
    cfg["models"].append("mutated")
    assert "mutated" not in DEFAULTS["grok"]["models"]  # nosec B101
    assert "mutated" not in get_provider_config("grok")["models"]  # nosec B101


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_BASE_URL", "https://proxy.example/v1")
    monkeypatch.setenv("OPENAI_MODELS", "gpt-a, gpt-b,,")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-b")
    cfg = get_provider_config("openai")
    assert cfg["base_url"] == "https://proxy.example/v1"  # nosec B101
    assert cfg["models"] == ["gpt-a", "gpt-b"] and cfg["model"] == "gpt-b"  # nosec B101


def test_default_model_outside_list_is_appended(monkeypatch):
    monkeypatch.setenv("GROK_MODEL", "grok-4")
    cfg = get_provider_config("grok")
    assert cfg["model"] == "grok-4"  # nosec B101
    assert cfg["models"][-1] == "grok-4"  # nosec B101


def test_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("GOOGLE_MODEL", "gemini-1.5-pro")
    cfg = get_provider_config("google", overrides={"model": "gemini-2.0-flash-lite", "base_url": None})
    assert cfg["model"] == "gemini-2.0-flash-lite"  # nosec B101
    assert cfg["base_url"].endswith("/v1beta")  # nosec B101


def test_json_config_file(tmp_path, monkeypatch):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"openai": {"models": ["team-gpt"], "model": "team-gpt"}}), encoding="utf-8")
    _use_config_file(monkeypatch, path)
    cfg = get_provider_config("openai")
    assert cfg["models"] == ["team-gpt"] and cfg["model"] == "team-gpt"  # nosec B101


def test_yaml_config_file_is_below_env(tmp_path, monkeypatch):
    path = tmp_path / "providers.yaml"
    path.write_text("grok:\n  base_url: https://file.example/v1\n  models: [grok-3]\n", encoding="utf-8")
    _use_config_file(monkeypatch, path)
    assert get_provider_config("grok")["base_url"] == "https://file.example/v1"  # nosec B101
    monkeypatch.setenv("GROK_BASE_URL", "https://env.example/v1")
    assert get_provider_config("grok")["base_url"] == "https://env.example/v1"  # nosec B101


def test_malformed_config_file_is_ignored(tmp_path, monkeypatch):
    path = tmp_path / "broken.yaml"
    path.write_text("openai: [unclosed\n", encoding="utf-8")
    _use_config_file(monkeypatch, path)
    records = []
    handler = logging.Handler(level=logging.WARNING)
    handler.emit = records.append  # type: ignore[method-assign]
    config_logger = logging.getLogger("quorum.config")
    config_logger.addHandler(handler)
    try:
        cfg = get_provider_config("openai")
    finally:
        config_logger.removeHandler(handler)
    assert cfg["model"] == "gpt-4o"  # nosec B101
    assert any("ignoring unreadable config file" in r.getMessage() for r in records)  # nosec B101


def test_missing_or_non_mapping_config_file(tmp_path, monkeypatch):
    _use_config_file(monkeypatch, tmp_path / "absent.yaml")
    assert get_provider_config("openai")["model"] == "gpt-4o"  # nosec B101
    listed = tmp_path / "list.yaml"
    listed.write_text("- openai\n- grok\n", encoding="utf-8")
    _use_config_file(monkeypatch, listed)
    assert get_provider_config("openai")["model"] == "gpt-4o"  # nosec B101
