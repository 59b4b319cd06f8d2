"""quorum_providers.config.defaults
================================

Central place for small, stable default values used across the package.
These can be overridden through the external config file, environment
variables or explicit overrides (see :func:`get_provider_config`), but they
provide working fallbacks for local development and tests.

This module intentionally avoids importing from other package modules to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider identifiers ----
SUPPORTED_PROVIDERS = ("openai", "anthropic", "grok", "google")

# ---- OpenAI ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_MODELS = ["gpt-4o", "gpt-4o-mini", "gpt-4.5-preview", "o3-mini"]
OPENAI_DEFAULT_MODEL = "gpt-4o"

# ---- Anthropic ----
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_MODELS = [
    "claude-3-7-sonnet-latest",
    "claude-3-5-sonnet-latest",
    "claude-3-5-haiku-latest",
]
ANTHROPIC_DEFAULT_MODEL = "claude-3-7-sonnet-latest"
# Wire protocol version header value required on every request.
ANTHROPIC_API_VERSION = "2023-06-01"
# The messages endpoint requires max_tokens; used when settings omit it.
ANTHROPIC_DEFAULT_MAX_TOKENS = 1000

# ---- Grok (xAI) ----
GROK_DEFAULT_BASE_URL = "https://api.x.ai/v1"
GROK_MODELS = ["grok-3", "grok-2"]
GROK_DEFAULT_MODEL = "grok-3"

# ---- Google (Generative Language API) ----
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GOOGLE_MODELS = ["gemini-2.0-flash", "gemini-2.0-flash-lite", "gemini-1.5-pro"]
GOOGLE_DEFAULT_MODEL = "gemini-2.0-flash"

# ---- Credential storage ----
KEYSTORE_PATH_ENV = "QUORUM_KEYSTORE_PATH"
KEYSTORE_DEFAULT_PATH = "~/.quorum/credentials.db"

# ---- External config ----
CONFIG_FILE_ENV = "QUORUM_CONFIG_FILE"

# ---- SQLite config (infrastructure) ----
# Busy timeout for lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


__all__ = [
    "SUPPORTED_PROVIDERS",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_MODELS",
    "OPENAI_DEFAULT_MODEL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "ANTHROPIC_MODELS",
    "ANTHROPIC_DEFAULT_MODEL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "GROK_DEFAULT_BASE_URL",
    "GROK_MODELS",
    "GROK_DEFAULT_MODEL",
    "GOOGLE_DEFAULT_BASE_URL",
    "GOOGLE_MODELS",
    "GOOGLE_DEFAULT_MODEL",
    "KEYSTORE_PATH_ENV",
    "KEYSTORE_DEFAULT_PATH",
    "CONFIG_FILE_ENV",
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
