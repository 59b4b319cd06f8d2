"""quorum_providers.config.env
============================

Environment variable mapping for provider credentials.

Purpose
-------
- Single source of truth mapping provider identifiers to the environment
  variables that may hold their API keys (canonical name first, then aliases).
- Small lookup helpers used by the credential store's environment fallback.

Failure Modes
-------------
- Helpers return ``None`` when a provider is unknown or nothing is set; they
  never raise.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Provider -> ordered tuple of acceptable env var names (canonical first)
ENV_MAP: Dict[str, Tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
    "grok": ("XAI_API_KEY", "GROK_API_KEY"),
    "google": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder rather than a real key.

    Heuristics: contains 'placeholder', 'changeme' or 'your-api-key'
    (case-insensitive, surrounding spaces ignored).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "your-api-key" in v


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the canonical environment variable name for a provider."""
    names = ENV_MAP.get((provider or "").strip().lower())
    return names[0] if names else None


def get_env_var_candidates(provider: str) -> Iterable[str]:
    """Yield acceptable environment variable names for a provider, canonical first."""
    yield from ENV_MAP.get((provider or "").strip().lower(), ())


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        value found; ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(provider):
        val = os.environ.get(name, "").strip()
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "get_env_var_name",
    "get_env_var_candidates",
    "resolve_provider_key",
]
