"""GenerativeModel: Gemini REST collaborator built on ``httpx``.

Purpose:
    Implements the :class:`ContentGenerator` contract against the public
    Generative Language REST API. Buffered calls POST ``:generateContent``;
    streaming calls POST ``:streamGenerateContent?alt=sse`` and hand the raw
    byte stream to :func:`process_stream`.

External dependencies:
    - ``httpx.AsyncClient`` obtained from the shared pool
      (:func:`get_httpx_client`) unless a client is injected.

Timeout strategy:
    - Timeouts come from :func:`get_timeout_config` through the pooled
      client. Injected clients keep their own timeouts.

Error handling:
    - Non-2xx responses become :class:`GenAIError` with a code from
      :func:`classify_exception`, the HTTP status and the service message.
    - Transport failures are wrapped the same way and chained.
    - No retries are applied; ``GenAIError.retryable`` tells callers whether
      a retry is reasonable.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Sequence

import httpx

from ..base.errors import RETRYABLE_CODES, GenAIError, classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Content, GenerateContentResponse, GenerateContentResult
from ..base.streaming import GenerateContentStreamResult, StreamCallbacks, process_stream
from ..chat import ChatSession
from ..config import get_client_config
from ..config.defaults import (
    GENAI_API_KEY_HEADER,
    GENAI_CLIENT_HEADER,
    HTTP_PURPOSE_GENERATE,
    HTTP_PURPOSE_STREAM,
)
from .helpers import (
    SystemInstruction,
    build_request_body,
    contents_list,
    error_from_response,
    merge_options,
)

REQUEST_OPTION_KEYS = frozenset(
    {"generation_config", "safety_settings", "system_instruction", "tools", "tool_config"}
)


class GenerativeModel:
    """Gemini model bound to one model name and one set of request defaults.

    Instances are safe to share between chat sessions; they hold no
    per-conversation state.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        generation_config: Optional[Mapping[str, Any]] = None,
        safety_settings: Optional[Sequence[Mapping[str, Any]]] = None,
        system_instruction: Optional[SystemInstruction] = None,
        tools: Optional[Sequence[Mapping[str, Any]]] = None,
        tool_config: Optional[Mapping[str, Any]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Resolve configuration and store request defaults.

        Args:
            model: Model name, with or without the ``models/`` prefix. Falls
                back to ``GENAI_MODEL`` or the built-in default.
            api_key: Service API key. Falls back to ``GEMINI_API_KEY`` or
                ``GOOGLE_API_KEY``.
            base_url: Service root URL.
            api_version: API version path segment, e.g. ``v1beta``.
            generation_config, safety_settings, system_instruction, tools,
            tool_config: Defaults applied to every request; per-call options
                override them.
            http_client: Optional injected ``httpx.AsyncClient``.
        """
        cfg = get_client_config(
            {
                "model": model,
                "api_key": api_key,
                "base_url": base_url,
                "api_version": api_version,
            }
        )
        name = str(cfg["model"])
        self._model = name[len("models/"):] if name.startswith("models/") else name
        self._api_key: Optional[str] = cfg.get("api_key")
        self._base_url = str(cfg["base_url"]).rstrip("/")
        self._api_version = str(cfg["api_version"]).strip("/")
        self._defaults: Dict[str, Any] = {
            "generation_config": generation_config if generation_config is not None else cfg.get("generation_config"),
            "safety_settings": safety_settings if safety_settings is not None else cfg.get("safety_settings"),
            "system_instruction": system_instruction,
            "tools": tools,
            "tool_config": tool_config,
        }
        self._http_client = http_client
        self._logger = get_logger("genai.gemini")

    @property
    def model_name(self) -> str:
        return self._model

    def __repr__(self) -> str:
        return f"GenerativeModel(model_name={self._model!r})"

    # Request plumbing -----------------------------------------------------
    def _url(self, method: str) -> str:
        return f"{self._base_url}/{self._api_version}/models/{self._model}:{method}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "x-goog-api-client": GENAI_CLIENT_HEADER}
        if self._api_key:
            headers[GENAI_API_KEY_HEADER] = self._api_key
        return headers

    def _client(self, purpose: str) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._base_url, purpose=purpose)

    def _body(self, contents: Sequence[Any], options: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = set(options) - REQUEST_OPTION_KEYS
        if unknown:
            raise TypeError(f"unexpected request option(s): {', '.join(sorted(unknown))}")
        merged = merge_options(self._defaults, options)
        return build_request_body(contents_list(contents), **merged)

    def _wrap_transport_error(self, exc: httpx.HTTPError) -> GenAIError:
        code = classify_exception(exc)
        return GenAIError(
            code=code,
            message=str(exc) or type(exc).__name__,
            model=self._model,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )

    def _log_error(self, ctx: LogContext, err: GenAIError) -> None:
        normalized_log_event(
            self._logger,
            "gemini.request.error",
            ctx,
            phase="finalize",
            error_code=err.code.value,
            emitted=False,
            status=err.status,
            error=err.message,
            level=logging.WARNING,
        )

    # ContentGenerator -----------------------------------------------------
    async def generate_content(self, contents: List[Content], **options: Any) -> GenerateContentResult:
        """POST ``:generateContent`` and return the parsed response."""
        body = self._body(contents, options)
        ctx = LogContext(model=self._model, extra={"streaming": False})
        normalized_log_event(self._logger, "gemini.request.start", ctx, phase="start", turns=len(contents))
        try:
            response = await self._client(HTTP_PURPOSE_GENERATE).post(
                self._url("generateContent"), json=body, headers=self._headers()
            )
        except httpx.HTTPError as exc:
            err = self._wrap_transport_error(exc)
            self._log_error(ctx, err)
            raise err from exc
        if response.is_error:
            err = error_from_response(response, self._model)
            self._log_error(ctx, err)
            raise err
        parsed = GenerateContentResponse.model_validate(response.json())
        normalized_log_event(
            self._logger,
            "gemini.request.end",
            ctx,
            phase="finalize",
            emitted=True,
            status=response.status_code,
            tokens=parsed.usage_metadata.to_wire() if parsed.usage_metadata else None,
        )
        return GenerateContentResult(response=parsed)

    async def generate_content_stream(
        self,
        contents: List[Content],
        callbacks: Optional[StreamCallbacks] = None,
        **options: Any,
    ) -> GenerateContentStreamResult:
        """POST ``:streamGenerateContent?alt=sse`` and return once headers arrive.

        The HTTP response stays open until the returned stream is drained,
        fails, or is closed.
        """
        body = self._body(contents, options)
        ctx = LogContext(model=self._model, extra={"streaming": True})
        normalized_log_event(self._logger, "gemini.request.start", ctx, phase="start", turns=len(contents))
        client = self._client(HTTP_PURPOSE_STREAM)
        request = client.build_request(
            "POST",
            self._url("streamGenerateContent"),
            params={"alt": "sse"},
            json=body,
            headers=self._headers(),
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as exc:
            err = self._wrap_transport_error(exc)
            self._log_error(ctx, err)
            raise err from exc
        if response.is_error:
            try:
                await response.aread()
            finally:
                await response.aclose()
            err = error_from_response(response, self._model)
            self._log_error(ctx, err)
            raise err

        async def body_bytes() -> AsyncIterator[bytes]:
            try:
                async for chunk in response.aiter_bytes():
                    yield chunk
            finally:
                await response.aclose()

        return process_stream(body_bytes(), callbacks, model=self._model)

    # Chat -----------------------------------------------------------------
    def start_chat(
        self,
        history: Optional[Sequence[Any]] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
    ) -> ChatSession:
        """Return a new :class:`ChatSession` backed by this model."""
        return ChatSession(self, history, request_options=request_options)


__all__ = ["GenerativeModel", "REQUEST_OPTION_KEYS"]
