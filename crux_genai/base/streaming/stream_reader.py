"""Stream reader: raw SSE bytes to validated, aggregated response fragments.

``process_stream`` wraps a transport byte stream in a :class:`ContentStream`
and returns it inside a :class:`GenerateContentStreamResult`. The stream is a
single-pass async iterator of decoded fragments. Alongside it, the result
exposes a deferred aggregate (``await result.response``) built from the same
fragments.

Lifecycle of one fragment:
    1. decode the SSE record (``MalformedChunkError`` on failure)
    2. validate the envelope (``BlockedPromptError`` when the prompt was
       blocked, ``GenAIError`` for an in-band service error,
       ``MalformedChunkError`` when no candidates are present)
    3. ``callbacks.on_chunk(fragment)``
    4. merge into the running aggregate
    5. yield to the consumer

Every exit path settles the stream exactly once and then notifies settle
listeners synchronously. Listeners run on success, on failure, on an empty
stream and on ``aclose()``.
"""
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, AsyncIterable, Awaitable, Callable, List, Optional, Union

from ..errors import (
    BlockedPromptError,
    EmptyStreamError,
    ErrorCode,
    GenAIError,
    MalformedChunkError,
    RETRYABLE_CODES,
    StreamClosedError,
    code_for_status,
)
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import GenerateContentResponse, format_block_error_message
from .aggregation import ResponseAggregator, has_candidate_envelope
from .callbacks import StreamCallbacks
from .sse import decode_fragment, iter_sse_payloads
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage

SettleListener = Callable[[Optional[GenerateContentResponse], Optional[BaseException]], None]


def _service_error(fragment: GenerateContentResponse, model: Optional[str]) -> Optional[GenAIError]:
    """Return the in-band ``{"error": {...}}`` payload as a GenAIError, if any."""
    payload = (fragment.model_extra or {}).get("error")
    if not isinstance(payload, dict):
        return None
    status = payload.get("code")
    code = code_for_status(status if isinstance(status, int) else None)
    return GenAIError(
        code=code,
        message=str(payload.get("message") or payload.get("status") or "service error"),
        model=model,
        status=status if isinstance(status, int) else None,
        retryable=code in RETRYABLE_CODES,
        response=fragment,
    )


def validate_fragment(fragment: GenerateContentResponse, model: Optional[str] = None) -> None:
    """Reject fragments that cannot contribute to a response."""
    service_error = _service_error(fragment, model)
    if service_error is not None:
        raise service_error
    if fragment.prompt_blocked:
        message = format_block_error_message(fragment) or f"Prompt was blocked due to {fragment.prompt_feedback.block_reason}"
        raise BlockedPromptError(message, model=model, response=fragment)
    if not has_candidate_envelope(fragment):
        raise MalformedChunkError("response fragment has no candidates", model=model, response=fragment)


class ContentStream:
    """Single-pass async iterator over the fragments of one response stream.

    Iterating yields each validated fragment once. ``await response()``
    drains whatever the caller has not consumed and returns the aggregate, or
    raises the error that terminated the stream.
    """

    def __init__(
        self,
        byte_stream: AsyncIterable[Union[bytes, str]],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        model: Optional[str] = None,
    ) -> None:
        self._byte_stream = byte_stream
        self._records = iter_sse_payloads(byte_stream)
        self._callbacks = callbacks or StreamCallbacks()
        self._model = model
        self._aggregator = ResponseAggregator()
        self._pull_lock = asyncio.Lock()
        self._listeners: List[SettleListener] = []
        self._settled = False
        self._result: Optional[GenerateContentResponse] = None
        self._error: Optional[BaseException] = None
        self._t0 = time.perf_counter()
        self._ctx = LogContext(model=model)
        self._logger = get_logger("genai.stream")
        self.metrics = StreamMetrics()

    # Iteration ----------------------------------------------------------
    def __aiter__(self) -> "ContentStream":
        return self

    async def __anext__(self) -> GenerateContentResponse:
        async with self._pull_lock:
            return await self._pull()

    async def _pull(self) -> GenerateContentResponse:
        if self._settled:
            raise StopAsyncIteration
        try:
            payload = await self._records.__anext__()
        except StopAsyncIteration:
            self._finish()
            raise
        except BaseException as exc:
            await self._abort(exc)
            raise
        try:
            fragment = decode_fragment(payload)
            validate_fragment(fragment, self._model)
            if self._callbacks.on_chunk is not None:
                self._callbacks.on_chunk(fragment)
            self._aggregator.add(fragment)
        except BaseException as exc:
            await self._abort(exc)
            raise
        self._record_emit()
        return fragment

    def _record_emit(self) -> None:
        self.metrics.emitted += 1
        if self.metrics.time_to_first_chunk_ms is None:
            self.metrics.time_to_first_chunk_ms = (time.perf_counter() - self._t0) * 1000.0
        normalized_log_event(
            self._logger,
            "stream.reader.chunk",
            self._ctx,
            phase="stream",
            emitted=True,
            emitted_count=self.metrics.emitted,
            level=logging.DEBUG,
        )

    def _finish(self) -> None:
        if self._aggregator.count == 0:
            self._settle(None, EmptyStreamError("stream ended without any response fragments", model=self._model))
            return
        response = self._aggregator.result()
        if self._callbacks.on_complete is not None:
            try:
                self._callbacks.on_complete(response)
            except BaseException as exc:
                self._settle(None, exc)
                raise
        self._settle(response, None)

    async def _abort(self, exc: BaseException) -> None:
        await self._close_source()
        self._settle(None, exc)

    async def _close_source(self) -> None:
        with suppress(Exception):
            await self._records.aclose()
        aclose = getattr(self._byte_stream, "aclose", None)
        if aclose is not None:
            with suppress(Exception):
                await aclose()

    # Settlement ---------------------------------------------------------
    def _settle(self, result: Optional[GenerateContentResponse], error: Optional[BaseException]) -> None:
        if self._settled:
            return
        self._settled = True
        self._result = result
        self._error = error
        self.metrics.total_duration_ms = (time.perf_counter() - self._t0) * 1000.0
        if result is not None:
            apply_token_usage(self.metrics, result.usage_metadata)
        finalize_stream(logger=self._logger, ctx=self._ctx, metrics=self.metrics, error=error)
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener(result, error)

    def add_settle_listener(self, listener: SettleListener) -> None:
        """Register ``listener(result, error)`` to run once the stream settles.

        Listeners run synchronously, in registration order, at the moment the
        stream settles. A listener added after settlement runs immediately.
        """
        if self._settled:
            listener(self._result, self._error)
            return
        self._listeners.append(listener)

    @property
    def settled(self) -> bool:
        """Whether the stream has finished, failed, or been closed."""
        return self._settled

    # Deferred aggregate -------------------------------------------------
    async def response(self) -> GenerateContentResponse:
        """Drain unconsumed fragments and return the aggregated response.

        Raises the error that terminated the stream: ``EmptyStreamError``,
        ``MalformedChunkError``, ``BlockedPromptError``, ``StreamClosedError``,
        a callback exception, or a transport failure.
        """
        async with self._pull_lock:
            while not self._settled:
                try:
                    await self._pull()
                except StopAsyncIteration:
                    break
                except BaseException:
                    if not self._settled:
                        raise
                    break
        if self._error is not None:
            raise self._error
        if self._result is None:
            raise GenAIError(
                code=ErrorCode.UNKNOWN,
                message="stream settled without a response or an error",
                model=self._model,
            )
        return self._result

    # Closing ------------------------------------------------------------
    async def aclose(self) -> None:
        """Close the transport and settle a pending stream as closed."""
        if self._settled:
            return
        await self._close_source()
        self._settle(None, StreamClosedError("stream closed before it was exhausted", model=self._model))

    async def __aenter__(self) -> "ContentStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


@dataclass
class GenerateContentStreamResult:
    """Live chunk sequence plus a deferred aggregate over the same transport."""

    stream: ContentStream

    @property
    def response(self) -> Awaitable[GenerateContentResponse]:
        """Awaitable aggregate; draining happens on await."""
        return self.stream.response()


def process_stream(
    byte_stream: AsyncIterable[Union[bytes, str]],
    callbacks: Optional[StreamCallbacks] = None,
    *,
    model: Optional[str] = None,
) -> GenerateContentStreamResult:
    """Wrap an SSE byte stream into a streaming result."""
    return GenerateContentStreamResult(stream=ContentStream(byte_stream, callbacks, model=model))


__all__ = [
    "ContentStream",
    "GenerateContentStreamResult",
    "SettleListener",
    "process_stream",
    "validate_fragment",
]
