"""Credential storage and validation."""

from .format import FormatCheck, check_credential_format
from .storage import (
    CredentialBackend,
    NullCredentialBackend,
    SessionCredentialBackend,
    SqliteCredentialBackend,
    StorageTier,
    default_backends,
)
from .store import CredentialStore
from .validator import CredentialValidator

__all__ = [
    "CredentialBackend",
    "CredentialStore",
    "CredentialValidator",
    "FormatCheck",
    "NullCredentialBackend",
    "SessionCredentialBackend",
    "SqliteCredentialBackend",
    "StorageTier",
    "check_credential_format",
    "default_backends",
]
