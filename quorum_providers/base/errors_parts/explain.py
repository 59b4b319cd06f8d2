"""
User-facing explanations for each :class:`ErrorKind`.

``explain`` is a pure total mapping: every member of the enum has exactly one
sentence. A lookup for anything else raises ``KeyError`` so a newly added kind
without a sentence fails loudly in tests rather than falling through.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from .error_kind import ErrorKind

_EXPLANATIONS: Mapping[ErrorKind, str] = MappingProxyType(
    {
        ErrorKind.INVALID_PROVIDER: "Invalid LLM provider selected.",
        ErrorKind.MISSING_CREDENTIAL: "API key is required. Please add your API key in settings.",
        ErrorKind.INVALID_CREDENTIAL: "Invalid API key. Please check your API key and try again.",
        ErrorKind.PROVIDER_ERROR: "The provider returned an error. Please try again.",
        ErrorKind.RATE_LIMIT: "Rate limit exceeded. Please try again later.",
        ErrorKind.TIMEOUT: "Request timed out. Please try again.",
        ErrorKind.CONTENT_FILTERED: "Content was filtered by the provider's safety system.",
        ErrorKind.UNKNOWN: "An unexpected error occurred. Please try again.",
    }
)

_SUGGESTIONS: Mapping[ErrorKind, Tuple[str, ...]] = MappingProxyType(
    {
        ErrorKind.INVALID_PROVIDER: (
            "Select one of the supported providers.",
            "Check the provider identifier for typos.",
        ),
        ErrorKind.MISSING_CREDENTIAL: (
            "Add your API key in settings.",
            "Make sure the key is saved for the selected provider.",
        ),
        ErrorKind.INVALID_CREDENTIAL: (
            "Check that your API key is correct.",
            "Make sure your API key has not expired.",
            "Verify that your account has access to the selected model.",
        ),
        ErrorKind.PROVIDER_ERROR: (
            "Try again in a few moments.",
            "Select a different model.",
            "Check the provider's status page.",
        ),
        ErrorKind.RATE_LIMIT: (
            "Wait a few minutes before trying again.",
            "Consider upgrading your API plan.",
            "Reduce the frequency of your requests.",
        ),
        ErrorKind.TIMEOUT: (
            "Check your internet connection.",
            "Try a shorter conversation.",
            "Try again later.",
        ),
        ErrorKind.CONTENT_FILTERED: (
            "Rephrase your message.",
            "Avoid content that may violate the provider's usage policy.",
        ),
        ErrorKind.UNKNOWN: (
            "Try again.",
            "Restart the application if the problem persists.",
        ),
    }
)


def explain(kind: ErrorKind) -> str:
    """Return the user-facing sentence for ``kind``.

    Raises:
        KeyError: when ``kind`` has no registered explanation.
    """
    return _EXPLANATIONS[kind]


def suggestions(kind: ErrorKind) -> Tuple[str, ...]:
    """Return short follow-up hints for ``kind`` (empty when none)."""
    return _SUGGESTIONS.get(kind, ())


__all__ = ["explain", "suggestions"]
