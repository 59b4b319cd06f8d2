"""Offline credential shape checks.

These heuristics catch obvious paste mistakes (wrong provider's key, truncated
value) before any network call. They never prove a key is valid; only the
provider's model-listing probe does that.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FormatCheck:
    """Outcome of a shape check; ``message`` explains a rejection."""

    valid: bool
    message: Optional[str] = None


_OPENAI_LEGACY_PREFIX = "sk-"
_OPENAI_PROJECT_PREFIX = "sk-proj-"
_OPENAI_LEGACY_LENGTH = 51
_OPENAI_PROJECT_LENGTH = 164
_ANTHROPIC_PREFIX = "sk-ant-"
_GROK_PREFIX = "xai-"
_MIN_LENGTH = 40
_GOOGLE_PREFIX = "AIza"
_GOOGLE_LENGTH = 39
_MIN_LENGTH_UNKNOWN = 30


def _check_openai(key: str) -> FormatCheck:
    if key.startswith(_OPENAI_PROJECT_PREFIX):
        if len(key) == _OPENAI_PROJECT_LENGTH:
            return FormatCheck(True)
        return FormatCheck(False, "OpenAI project keys are 164 characters long.")
    if key.startswith(_OPENAI_LEGACY_PREFIX):
        if len(key) == _OPENAI_LEGACY_LENGTH:
            return FormatCheck(True)
        return FormatCheck(False, "OpenAI keys are 51 characters long.")
    return FormatCheck(False, "OpenAI keys start with 'sk-' or 'sk-proj-'.")


def _check_prefixed(key: str, prefix: str, provider_label: str) -> FormatCheck:
    if not key.startswith(prefix):
        return FormatCheck(False, f"{provider_label} keys start with '{prefix}'.")
    if len(key) < _MIN_LENGTH:
        return FormatCheck(False, f"{provider_label} keys are at least {_MIN_LENGTH} characters long.")
    return FormatCheck(True)


def _check_google(key: str) -> FormatCheck:
    # Generative Language keys are "AIza" plus 35 characters
    if key.startswith(_GOOGLE_PREFIX):
        if len(key) == _GOOGLE_LENGTH:
            return FormatCheck(True)
        return FormatCheck(False, f"Google API keys are {_GOOGLE_LENGTH} characters long.")
    if len(key) < _GOOGLE_LENGTH:
        return FormatCheck(False, f"Google keys are at least {_GOOGLE_LENGTH} characters long.")
    return FormatCheck(True)


def check_credential_format(provider_id: str, key: Optional[str]) -> FormatCheck:
    """Check ``key`` against the known shape for ``provider_id``."""
    value = (key or "").strip()
    if not value:
        return FormatCheck(False, "API key is empty.")
    provider = (provider_id or "").strip().lower()
    if provider == "openai":
        return _check_openai(value)
    if provider == "anthropic":
        return _check_prefixed(value, _ANTHROPIC_PREFIX, "Anthropic")
    if provider == "grok":
        return _check_prefixed(value, _GROK_PREFIX, "Grok")
    if provider == "google":
        return _check_google(value)
    if len(value) < _MIN_LENGTH_UNKNOWN:
        return FormatCheck(False, f"API keys are at least {_MIN_LENGTH_UNKNOWN} characters long.")
    return FormatCheck(True)


__all__ = ["FormatCheck", "check_credential_format"]
