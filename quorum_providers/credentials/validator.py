"""Credential validator.

``CredentialValidator.validate`` answers "does this key work?" with a
``Result[bool]`` and never raises: empty input, an optional offline shape
check failure, a rejected probe and any exception all come back as
``Result.ok(False)``. The probe itself is the adapter's
``validate_credential`` (the provider's model-listing endpoint).
"""

from __future__ import annotations

import logging
from typing import Optional

from ..base.factory import ClientFactory, default_factory
from ..base.logging import get_logger, log_event
from ..base.result import Result
from .format import check_credential_format


class CredentialValidator:
    def __init__(self, factory: Optional[ClientFactory] = None, *, check_format: bool = False) -> None:
        self._factory = factory
        self._check_format = check_format
        self._logger = get_logger("quorum.credentials")

    @property
    def factory(self) -> ClientFactory:
        return self._factory or default_factory()

    def validate(self, provider_id: str, credential: Optional[str]) -> Result[bool]:
        """Return ``Result.ok(True)`` only when the provider accepted ``credential``."""
        if not (provider_id or "").strip() or not (credential or "").strip():
            return Result.ok(False)
        if self._check_format and not check_credential_format(provider_id, credential).valid:
            log_event(self._logger, "credential.validate", provider=provider_id, valid=False, reason="format")
            return Result.ok(False)
        try:
            adapter = self.factory.get_client(provider_id)
            valid = bool(adapter.validate_credential(credential or ""))
        except Exception as exc:  # the validator reports failure, never raises
            log_event(
                self._logger,
                "credential.validate",
                provider=provider_id,
                valid=False,
                error=str(exc),
                level=logging.WARNING,
            )
            return Result.ok(False)
        log_event(self._logger, "credential.validate", provider=provider_id, valid=valid)
        return Result.ok(valid)


__all__ = ["CredentialValidator"]
