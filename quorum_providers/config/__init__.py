"""Unified configuration layer for provider adapters.

Goals
-----
* Centralize defaults (base URLs, model lists, default models).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults (``config.defaults``)
    2. Optional external config file (JSON or YAML) named by ``QUORUM_CONFIG_FILE``
    3. Environment variables (``<PROVIDER>_BASE_URL``, ``<PROVIDER>_MODEL``,
       ``<PROVIDER>_MODELS`` comma-separated)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Credentials are deliberately absent from this layer; they live in the
credential store (with an environment fallback of their own).

External Config File
--------------------
```
openai:
  base_url: https://gateway.internal/openai/v1
  models: [gpt-4o, gpt-4o-mini]
  model: gpt-4o-mini
anthropic:
  max_tokens: 2048
```
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .defaults import (
    ANTHROPIC_API_VERSION,
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    ANTHROPIC_DEFAULT_MODEL,
    ANTHROPIC_MODELS,
    CONFIG_FILE_ENV,
    GOOGLE_DEFAULT_BASE_URL,
    GOOGLE_DEFAULT_MODEL,
    GOOGLE_MODELS,
    GROK_DEFAULT_BASE_URL,
    GROK_DEFAULT_MODEL,
    GROK_MODELS,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
    OPENAI_MODELS,
)

_logger = logging.getLogger("quorum.config")

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "base_url": OPENAI_DEFAULT_BASE_URL,
        "models": list(OPENAI_MODELS),
        "model": OPENAI_DEFAULT_MODEL,
    },
    "anthropic": {
        "base_url": ANTHROPIC_DEFAULT_BASE_URL,
        "models": list(ANTHROPIC_MODELS),
        "model": ANTHROPIC_DEFAULT_MODEL,
        "api_version": ANTHROPIC_API_VERSION,
        "max_tokens": ANTHROPIC_DEFAULT_MAX_TOKENS,
    },
    "grok": {
        "base_url": GROK_DEFAULT_BASE_URL,
        "models": list(GROK_MODELS),
        "model": GROK_DEFAULT_MODEL,
    },
    "google": {
        "base_url": GOOGLE_DEFAULT_BASE_URL,
        "models": list(GOOGLE_MODELS),
        "model": GOOGLE_DEFAULT_MODEL,
    },
}

ENV_FIELD_MAP = {
    "base_url": "BASE_URL",
    "model": "MODEL",
    "models": "MODELS",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _parse_config_text(text: str, suffix: str) -> Any:
    """Parse config file text as JSON (``.json``) or YAML (anything else)."""
    if suffix == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _load_external_config() -> Dict[str, Any]:
    """Return the parsed external config file, cached per path."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - documented module cache
    path = os.getenv(CONFIG_FILE_ENV) or ""
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path:
        p = Path(path).expanduser()
        if p.is_file():
            try:
                data = _parse_config_text(p.read_text(encoding="utf-8"), p.suffix.lower())
            except (ValueError, yaml.YAMLError) as exc:
                _logger.warning("ignoring unreadable config file %s: %s", p, exc)
                data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def reload_config() -> None:
    """Drop the cached external config so the next lookup re-reads it."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603
    _FILE_CACHE, _FILE_CACHE_PATH = None, None


def _split_models(value: Any) -> List[str]:
    if isinstance(value, str):
        return [m.strip() for m in value.split(",") if m.strip()]
    if isinstance(value, (list, tuple)):
        return [str(m).strip() for m in value if str(m).strip()]
    return []


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``models`` is always returned as a list and the default ``model`` is kept
    inside it (appended when a source names a default outside the list).
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULTS.get(name, {}).items()}

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    models = _split_models(cfg.get("models"))
    default_model = cfg.get("model")
    if default_model and default_model not in models:
        models.append(default_model)
    if not default_model and models:
        cfg["model"] = models[0]
    cfg["models"] = models
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reload_config",
    "DEFAULTS",
]
