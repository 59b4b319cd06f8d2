"""Orchestration facade.

Purpose
-------
One entry point for "send this conversation to that provider": resolve the
credential, resolve the adapter, pick the streaming or blocking path and turn
the outcome into a conversation message.

Flow of ``send_message``
------------------------
1. Empty provider id -> ``INVALID_PROVIDER``.
2. Credential: explicit argument, else the credential store; none ->
   ``MISSING_CREDENTIAL`` (no adapter call, no network).
3. Adapter from the client factory (unknown id -> ``INVALID_PROVIDER``).
4. Streaming path only when callbacks carry ``on_token`` and the adapter
   supports streaming; the blocking path otherwise.
5. Success -> ``Result.ok(ConversationMessage)`` with status ``sent``.
   Failure -> ``Result.fail(CoreError)`` whose ``offending_message`` is an
   error-status message whose text is ``explain(kind)``.

Anything unexpected raised below the facade is wrapped as ``UNKNOWN``; the
facade itself never raises.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..base.cancellation import CancellationToken
from ..base.capabilities import CapabilityDescriptor, get_capabilities
from ..base.dto import GenerationSettings, ParticipantConfig
from ..base.errors import CoreError, ErrorKind, explain
from ..base.factory import ClientFactory, default_factory
from ..base.interfaces import ProviderAdapter
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ConversationMessage, SenderRole
from ..base.result import Result
from ..base.streaming import StreamingCallbacks, drive_stream
from ..credentials import CredentialStore, CredentialValidator


def prepare_messages(
    messages: Sequence[ConversationMessage],
    system_prompt: Optional[str] = None,
) -> List[ConversationMessage]:
    """Prepend ``system_prompt`` as a system message unless one is present."""
    conversation = list(messages)
    if not system_prompt or not system_prompt.strip():
        return conversation
    if any(m.wire_role == "system" for m in conversation):
        return conversation
    return [ConversationMessage.create(SenderRole.SYSTEM, system_prompt), *conversation]


class LLMService:
    """Facade over credential store, client factory and adapters.

    Parameters
    ----------
    credentials:
        Store consulted when no explicit credential is passed. ``None`` means
        callers always pass credentials explicitly.
    factory:
        Client factory; defaults to the process-wide one.
    validator:
        Credential validator; defaults to one bound to ``factory``.
    """

    def __init__(
        self,
        credentials: Optional[CredentialStore] = None,
        factory: Optional[ClientFactory] = None,
        validator: Optional[CredentialValidator] = None,
    ) -> None:
        self._credentials = credentials
        self._factory = factory or default_factory()
        self._validator = validator or CredentialValidator(self._factory)
        self._logger = get_logger("quorum.service")

    @property
    def factory(self) -> ClientFactory:
        return self._factory

    # ----- Sending -----
    def send_message(
        self,
        messages: Sequence[ConversationMessage],
        provider_id: str,
        credential: Optional[str] = None,
        model: Optional[str] = None,
        settings: Optional[GenerationSettings] = None,
        callbacks: Optional[StreamingCallbacks] = None,
        cancellation_token: Optional[CancellationToken] = None,
        system_prompt: Optional[str] = None,
    ) -> Result[ConversationMessage]:
        """Send ``messages`` to ``provider_id`` and return the reply message."""
        name = (provider_id or "").strip().lower()
        ctx = LogContext(provider=name or None, model=model)
        if not name:
            return self._fail(CoreError(ErrorKind.INVALID_PROVIDER, "no provider selected"), ctx, callbacks)

        key = credential if credential and credential.strip() else self._lookup_credential(name)
        if not key:
            return self._fail(
                CoreError(ErrorKind.MISSING_CREDENTIAL, f"no API key available for {name}", provider=name),
                ctx,
                callbacks,
            )

        try:
            adapter = self._factory.get_client(name)
        except CoreError as exc:
            return self._fail(exc, ctx, callbacks)

        resolved_model = model or adapter.get_default_model()
        ctx.model = resolved_model
        conversation = prepare_messages(messages, system_prompt)
        streaming = callbacks is not None and callbacks.wants_tokens and adapter.supports_streaming()
        normalized_log_event(
            self._logger,
            "service.send",
            ctx,
            phase="start",
            path="stream" if streaming else "blocking",
            messages=len(conversation),
        )
        try:
            result = self._dispatch(
                adapter, conversation, key, resolved_model, settings, callbacks, cancellation_token, streaming
            )
        except Exception as exc:
            error = exc if isinstance(exc, CoreError) else CoreError(ErrorKind.UNKNOWN, str(exc), provider=name)
            return self._fail(error, ctx, callbacks)

        if not result.success:
            # The adapter (or stream driver) already notified the callbacks.
            return self._fail(result.error or CoreError(ErrorKind.UNKNOWN, "failed", provider=name), ctx, None)

        reply = ConversationMessage.create(
            name,
            result.data or "",
            provider_id=name,
            model_id=resolved_model,
            delivery_status="sent",
        )
        normalized_log_event(self._logger, "service.end", ctx, phase="finalize", emitted=True, chars=len(reply.text))
        return Result.ok(reply)

    def send_participant_message(
        self,
        messages: Sequence[ConversationMessage],
        participant: ParticipantConfig,
        credential: Optional[str] = None,
        callbacks: Optional[StreamingCallbacks] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[ConversationMessage]:
        """Send on behalf of a configured participant (provider, model, prompt, settings)."""
        return self.send_message(
            messages,
            participant.provider_id,
            credential=credential,
            model=participant.model,
            settings=participant.settings,
            callbacks=callbacks,
            cancellation_token=cancellation_token,
            system_prompt=participant.system_prompt,
        )

    @staticmethod
    def _dispatch(
        adapter: ProviderAdapter,
        conversation: Sequence[ConversationMessage],
        key: str,
        model: str,
        settings: Optional[GenerationSettings],
        callbacks: Optional[StreamingCallbacks],
        token: Optional[CancellationToken],
        streaming: bool,
    ) -> Result[str]:
        if streaming:
            frames = adapter.stream_message(conversation, key, model, settings, token)
            return drive_stream(frames, callbacks)
        return adapter.send_message(conversation, key, model, settings, callbacks, token)

    def _lookup_credential(self, provider_id: str) -> Optional[str]:
        if self._credentials is None:
            return None
        return self._credentials.get_key(provider_id)

    def _fail(
        self,
        error: CoreError,
        ctx: LogContext,
        callbacks: Optional[StreamingCallbacks],
    ) -> Result[ConversationMessage]:
        offending = ConversationMessage.create(
            ctx.provider or SenderRole.SYSTEM.value,
            explain(error.kind),
            provider_id=ctx.provider,
            model_id=ctx.model,
            delivery_status="error",
            error=error,
        )
        normalized_log_event(
            self._logger,
            "service.error",
            ctx,
            phase="finalize",
            emitted=False,
            error_code=error.kind.value,
            error=error.message,
            level=logging.WARNING,
        )
        if callbacks is not None and callbacks.on_error is not None:
            callbacks.on_error(error)
        return Result.fail(error.with_offending_message(offending))

    # ----- Queries -----
    def _adapter_or_none(self, provider_id: str) -> Optional[ProviderAdapter]:
        try:
            return self._factory.get_client(provider_id)
        except CoreError:
            return None

    def get_available_models(self, provider_id: str) -> List[str]:
        adapter = self._adapter_or_none(provider_id)
        return adapter.get_available_models() if adapter is not None else []

    def get_default_model(self, provider_id: str) -> str:
        adapter = self._adapter_or_none(provider_id)
        return adapter.get_default_model() if adapter is not None else ""

    def supports_streaming(self, provider_id: str) -> bool:
        adapter = self._adapter_or_none(provider_id)
        return adapter.supports_streaming() if adapter is not None else False

    def get_capabilities(self, provider_id: str) -> Optional[CapabilityDescriptor]:
        adapter = self._adapter_or_none(provider_id)
        if adapter is not None:
            return adapter.get_capabilities()
        return get_capabilities(provider_id)

    def get_supported_providers(self) -> List[str]:
        return list(self._factory.supported())

    def validate_credential(self, provider_id: str, credential: Optional[str] = None) -> Result[bool]:
        """Validate ``credential`` (or the stored one) for ``provider_id``."""
        key = credential if credential is not None else self._lookup_credential((provider_id or "").strip().lower())
        return self._validator.validate(provider_id, key)


__all__ = ["LLMService", "prepare_messages"]
