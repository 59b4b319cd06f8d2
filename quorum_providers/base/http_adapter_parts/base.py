"""BaseHttpAdapter: the request algorithm shared by every provider adapter.

Purpose:
- Implement the common send/stream/validate flow once. Concrete adapters only
  describe their wire format (headers, paths, payload shape, where the reply
  text and stream deltas live).

Algorithm (both paths):
1. Empty credential -> ``MISSING_CREDENTIAL``, no network call.
2. Model outside the known list -> ``PROVIDER_ERROR``, no network call.
3. Roles and generation settings are mapped by the subclass payload builder.
4. The request is issued with ``httpx`` as a streamed response. The
   cancellation token is armed before sending: a cancel shuts down the socket
   (even while waiting for headers) and closes the response; the token is also
   polled between body chunks.
5. Non-success status -> JSON error body parsed and classified.
6. Blocking success -> reply text extracted; empty -> ``PROVIDER_ERROR``
   "no response from provider"; safety stops -> ``CONTENT_FILTERED``.
7. Streaming success -> body fed through the ``FrameParser``.

External dependencies:
- ``httpx`` only. Clients come from the shared pool unless one is injected
  (tests inject ``httpx.Client(transport=httpx.MockTransport(...))``).

Timeout strategy:
- None imposed here; see :mod:`quorum_providers.base.timeouts`.

Logging:
- ``chat.start``/``chat.end``/``chat.error`` for the blocking path and
  ``stream.start``/``stream.end``/``stream.error``/``stream.cancelled`` for the
  streaming path, the latter carrying ``time_to_first_token_ms``,
  ``total_duration_ms`` and ``emitted_count``.
"""

from __future__ import annotations

import contextlib
import json
import logging
import time
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import httpx

from ..cancellation import CancellationToken
from ..capabilities import CAPABILITIES, CapabilityDescriptor
from ..dto import DEFAULT_WIRE_NAMES, AdapterParams, GenerationSettings
from ..errors import (
    NO_RESPONSE_MESSAGE,
    CoreError,
    ErrorKind,
    error_from_status,
    to_core_error,
)
from ..http import ConnectionAbort, get_httpx_client, new_httpx_client
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ConversationMessage, StreamFrame
from ..result import Result
from ..streaming import FrameParser, StreamingCallbacks, iter_stream_frames, streaming_supported
from ...config import get_provider_config
from .wire import safe_json


class BaseHttpAdapter:
    """Reusable base class for HTTP provider adapters.

    Subclasses must set ``provider_id`` and implement:
    - ``_auth_headers(credential)``
    - ``_chat_path(model, stream)``
    - ``_build_payload(messages, model, settings, stream)``
    - ``_extract_text(data)`` and ``_extract_delta(obj)``

    They may override ``_content_filter_error``, ``_extract_stream_error``,
    ``_models_path`` and ``stream_sentinel``.
    """

    provider_id: str = ""
    settings_field_map: Mapping[str, str] = DEFAULT_WIRE_NAMES
    stream_sentinel: Optional[str] = "[DONE]"

    def __init__(
        self,
        *,
        http_client: Optional[httpx.Client] = None,
        params: Optional[AdapterParams] = None,
    ) -> None:
        """Initialize the adapter from layered configuration.

        Parameters:
            http_client: Optional client used instead of the shared pool.
            params: Optional overrides for base URL, model list, default model
                and static headers.
        """
        p = params or AdapterParams()
        cfg = get_provider_config(
            self.provider_id,
            overrides={"base_url": p.base_url, "models": p.models, "model": p.default_model},
        )
        self._config: Dict[str, Any] = cfg
        self._base_url: str = str(cfg.get("base_url") or "").rstrip("/")
        self._models: List[str] = list(cfg.get("models") or [])
        self._default_model: str = str(cfg.get("model") or (self._models[0] if self._models else ""))
        self._extra_headers: Dict[str, str] = dict(p.headers)
        self._http_client = http_client
        self._logger = get_logger(f"quorum.{self.provider_id}")

    # ----- Abstract surface -----
    def _auth_headers(self, credential: str) -> Dict[str, str]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _chat_path(self, model: str, stream: bool) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def _build_payload(
        self,
        messages: Sequence[ConversationMessage],
        model: str,
        settings: Optional[GenerationSettings],
        stream: bool,
    ) -> Dict[str, Any]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _extract_text(self, data: Any) -> Optional[str]:  # pragma: no cover - abstract
        raise NotImplementedError

    def _extract_delta(self, obj: Any) -> Optional[str]:  # pragma: no cover - abstract
        raise NotImplementedError

    # ----- Optional hooks -----
    def _content_filter_error(self, data: Any) -> Optional[CoreError]:
        """Return ``CONTENT_FILTERED`` when a blocking reply was a safety stop."""
        return None

    def _extract_stream_error(self, obj: Any) -> Optional[CoreError]:
        """Recognize an in-band error event in a decoded stream frame."""
        return None

    def _models_path(self) -> str:
        return "/models"

    # ----- Contract: metadata -----
    def get_provider_name(self) -> str:
        return self.provider_id

    def get_available_models(self) -> List[str]:
        return list(self._models)

    def get_default_model(self) -> str:
        return self._default_model

    def get_capabilities(self) -> CapabilityDescriptor:
        return CAPABILITIES[self.provider_id]

    def supports_streaming(self) -> bool:
        """Capability flag AND an HTTP client able to open streamed responses."""
        return streaming_supported(self._client(), capability_flag=self.get_capabilities().supports_streaming)

    # ----- Internals -----
    def _client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, purpose=self.provider_id)

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _headers(self, credential: str) -> Dict[str, str]:
        headers = {"content-type": "application/json", "accept": "application/json"}
        headers.update(self._extra_headers)
        headers.update(self._auth_headers(credential))
        return headers

    def _wire_settings(self, settings: Optional[GenerationSettings]) -> Dict[str, Any]:
        return settings.to_wire(self.settings_field_map) if settings is not None else {}

    def _precheck(self, credential: Optional[str], model: Optional[str]) -> Tuple[str, Optional[CoreError]]:
        """Resolve the model and reject requests that must not reach the network."""
        resolved = model or self._default_model
        if not credential or not credential.strip():
            return resolved, CoreError(
                ErrorKind.MISSING_CREDENTIAL,
                f"an API key is required for {self.provider_id}",
                provider=self.provider_id,
            )
        if resolved not in self._models:
            return resolved, CoreError(
                ErrorKind.PROVIDER_ERROR,
                f"model {resolved} is not available for {self.provider_id}",
                provider=self.provider_id,
            )
        return resolved, None

    @contextlib.contextmanager
    def _open_stream(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Dict[str, str],
        token: Optional[CancellationToken],
    ) -> Iterator[httpx.Response]:
        """Open a streamed POST that ``token`` can abort at any point.

        The abort is armed before the request is sent, so a cancel while
        waiting for response headers shuts the socket down instead of waiting
        for the server. Without an injected client the request runs on a
        client of its own; a pooled connection reused from an earlier call
        would not be visible to the trace hook.
        """
        if token is None:
            with self._client().stream("POST", url, json=payload, headers=headers) as response:
                yield response
            return
        abort = ConnectionAbort()
        with contextlib.ExitStack() as stack:
            client = self._http_client
            if client is None:
                client = stack.enter_context(new_httpx_client())
            stack.enter_context(token.registered(abort.abort))
            response = stack.enter_context(
                client.stream("POST", url, json=payload, headers=headers, extensions={"trace": abort.trace})
            )
            stack.enter_context(token.registered(response.close))
            yield response

    def _read_body(self, response: httpx.Response, token: Optional[CancellationToken]) -> bytes:
        chunks: List[bytes] = []
        for chunk in response.iter_bytes():
            if token is not None:
                token.raise_if_cancelled()
            chunks.append(chunk)
        if token is not None:
            token.raise_if_cancelled()
        return b"".join(chunks)

    def _log(self, event: str, ctx: LogContext, *, phase: str, level: int = logging.INFO, **fields: Any) -> None:
        normalized_log_event(self._logger, event, ctx, phase=phase, level=level, **fields)

    # ----- Contract: blocking path -----
    def send_message(
        self,
        messages: Sequence[ConversationMessage],
        credential: str,
        model: Optional[str] = None,
        settings: Optional[GenerationSettings] = None,
        callbacks: Optional[StreamingCallbacks] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Result[str]:
        """Send the conversation and wait for the complete reply.

        Returns ``Result.ok(text)`` or ``Result.fail(CoreError)``; never raises
        for provider failures. ``callbacks.on_complete``/``on_error`` fire once
        when given; ``on_token`` is ignored on this path.
        """
        cb = callbacks or StreamingCallbacks()
        resolved, error = self._precheck(credential, model)
        ctx = LogContext(provider=self.provider_id, model=resolved)
        if error is None:
            self._log("chat.start", ctx, phase="start", messages=len(messages))
            t0 = time.perf_counter()
            try:
                if cancellation_token is not None:
                    cancellation_token.raise_if_cancelled()
                text = self._blocking_call(messages, credential, resolved, settings, cancellation_token)
            except Exception as exc:
                cancelled = cancellation_token is not None and cancellation_token.cancelled
                error = to_core_error(exc, provider=self.provider_id, cancelled=cancelled)
            else:
                latency_ms = (time.perf_counter() - t0) * 1000.0
                self._log("chat.end", ctx, phase="finalize", emitted=True, latency_ms=round(latency_ms, 2))
                if cb.on_complete is not None:
                    cb.on_complete(text)
                return Result.ok(text)
        self._log(
            "chat.error",
            ctx,
            phase="finalize",
            emitted=False,
            error_code=error.kind.value,
            error=error.message,
            level=logging.WARNING,
        )
        if cb.on_error is not None:
            cb.on_error(error)
        return Result.fail(error)

    def _blocking_call(
        self,
        messages: Sequence[ConversationMessage],
        credential: str,
        model: str,
        settings: Optional[GenerationSettings],
        token: Optional[CancellationToken],
    ) -> str:
        payload = self._build_payload(messages, model, settings, stream=False)
        url = self._url(self._chat_path(model, stream=False))
        with self._open_stream(url, payload, self._headers(credential), token) as response:
            body = self._read_body(response, token)
        if not response.is_success:
            raise error_from_status(response.status_code, safe_json(body), provider=self.provider_id)
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise CoreError(
                ErrorKind.PROVIDER_ERROR,
                f"malformed response body: {exc}",
                provider=self.provider_id,
            ) from exc
        filtered = self._content_filter_error(data)
        if filtered is not None:
            raise filtered
        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError):
            text = None
        if not text:
            raise CoreError(ErrorKind.PROVIDER_ERROR, NO_RESPONSE_MESSAGE, provider=self.provider_id)
        return text

    # ----- Contract: streaming path -----
    def stream_message(
        self,
        messages: Sequence[ConversationMessage],
        credential: str,
        model: Optional[str] = None,
        settings: Optional[GenerationSettings] = None,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[StreamFrame]:
        """Stream the reply as token frames followed by one terminal frame.

        The generator is lazy: no request is sent until the first frame is
        pulled, and the body is read only as fast as frames are consumed.
        """
        resolved, error = self._precheck(credential, model)
        ctx = LogContext(provider=self.provider_id, model=resolved)
        if error is not None:
            self._log(
                "stream.error",
                ctx,
                phase="start",
                emitted=False,
                error_code=error.kind.value,
                error=error.message,
                level=logging.WARNING,
            )
            yield StreamFrame.end(error)
            return
        yield from self._stream_frames(messages, credential, resolved, settings, cancellation_token, ctx)

    def _stream_frames(
        self,
        messages: Sequence[ConversationMessage],
        credential: str,
        model: str,
        settings: Optional[GenerationSettings],
        token: Optional[CancellationToken],
        ctx: LogContext,
    ) -> Iterator[StreamFrame]:
        self._log("stream.start", ctx, phase="start", messages=len(messages))
        t0 = time.perf_counter()
        first_token_at: Optional[float] = None
        emitted = 0
        final: Optional[StreamFrame] = None
        try:
            if token is not None:
                token.raise_if_cancelled()
            payload = self._build_payload(messages, model, settings, stream=True)
            url = self._url(self._chat_path(model, stream=True))
            headers = self._headers(credential)
            headers["accept"] = "text/event-stream"
            with self._open_stream(url, payload, headers, token) as response:
                if not response.is_success:
                    body = self._read_body(response, token)
                    final = StreamFrame.end(
                        error_from_status(response.status_code, safe_json(body), provider=self.provider_id)
                    )
                else:
                    parser = FrameParser(
                        self._extract_delta,
                        sentinel=self.stream_sentinel,
                        extract_error=self._extract_stream_error,
                        logger=self._logger,
                        ctx=ctx,
                    )
                    for frame in iter_stream_frames(
                        response.iter_bytes(), parser, token, provider=self.provider_id
                    ):
                        if frame.done:
                            final = frame
                            break
                        if first_token_at is None:
                            first_token_at = time.perf_counter()
                        emitted += 1
                        yield frame
        except Exception as exc:
            cancelled = token is not None and token.cancelled
            final = StreamFrame.end(to_core_error(exc, provider=self.provider_id, cancelled=cancelled))

        if final is None:
            final = StreamFrame.end()
        if final.error is None and emitted == 0:
            final = StreamFrame.end(CoreError(ErrorKind.PROVIDER_ERROR, NO_RESPONSE_MESSAGE, provider=self.provider_id))
        self._log_stream_end(ctx, final, t0, first_token_at, emitted, token)
        yield final

    def _log_stream_end(
        self,
        ctx: LogContext,
        final: StreamFrame,
        t0: float,
        first_token_at: Optional[float],
        emitted: int,
        token: Optional[CancellationToken],
    ) -> None:
        now = time.perf_counter()
        metrics = {
            "time_to_first_token_ms": round((first_token_at - t0) * 1000.0, 2) if first_token_at else None,
            "total_duration_ms": round((now - t0) * 1000.0, 2),
            "emitted_count": emitted,
        }
        if final.error is None:
            self._log("stream.end", ctx, phase="finalize", emitted=emitted > 0, metrics=metrics)
            return
        event = "stream.cancelled" if token is not None and token.cancelled else "stream.error"
        self._log(
            event,
            ctx,
            phase="finalize",
            emitted=emitted > 0,
            error_code=final.error.kind.value,
            error=final.error.message,
            metrics=metrics,
            level=logging.WARNING,
        )

    # ----- Contract: credential probe -----
    def validate_credential(self, credential: str) -> bool:
        """Probe the model-listing endpoint with ``credential``.

        Returns True on any success status, False on an error status or an
        empty credential (no network call). Network failures raise ``CoreError``.
        """
        if not credential or not credential.strip():
            return False
        ctx = LogContext(provider=self.provider_id)
        try:
            response = self._client().get(self._url(self._models_path()), headers=self._headers(credential))
        except httpx.HTTPError as exc:
            error = to_core_error(exc, provider=self.provider_id)
            self._log(
                "credential.validate",
                ctx,
                phase="finalize",
                error_code=error.kind.value,
                error=error.message,
                level=logging.WARNING,
            )
            raise error from exc
        self._log("credential.validate", ctx, phase="finalize", status=response.status_code)
        return response.is_success


__all__ = ["BaseHttpAdapter"]
