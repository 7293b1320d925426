"""ChatSession: multi-turn conversation over a model collaborator.

The session owns the transcript and a send gate (``asyncio.Lock``). Sends
are served one at a time in call order, so every send reads a transcript
that already includes the turns of the sends before it.

Gate ownership:
- ``send_message`` holds the gate for the whole call (scoped ``async with``).
- ``send_message_stream`` acquires the gate and hands its release to the
  stream: the gate opens when the stream settles (drained, failed, or
  closed), not when the call returns. A caller that abandons a stream without
  draining or closing it keeps the session blocked.

Transcript updates happen only after validation succeeds: the user turn, then
the model turn. A failed stream rolls back the user turn it added, so roles
keep alternating.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..base.errors import BlockedResponseError, classify_exception
from ..base.interfaces import ContentGenerator
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Content, GenerateContentResponse, GenerateContentResult, format_block_error_message
from ..base.streaming import GenerateContentStreamResult, StreamCallbacks
from .helpers import MessageLike, format_new_content, is_valid_response, validate_chat_history


def _as_model_turn(content: Content) -> Content:
    turn = content.model_copy(deep=True)
    turn.role = "model"
    return turn


class ChatSession:
    """Conversation with a model that keeps history across turns."""

    def __init__(
        self,
        model: ContentGenerator,
        history: Optional[Sequence[Union[Content, Mapping[str, Any]]]] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Create a session.

        Args:
            model: Collaborator that performs generation. Shared read-only;
                one model may back many sessions.
            history: Initial transcript. Copied; validated on the first send.
            request_options: Default keyword options forwarded to every call;
                per-call options win on conflict.
        """
        self._model = model
        self._history: List[Content] = [
            c.model_copy(deep=True) if isinstance(c, Content) else Content.model_validate(c) for c in (history or [])
        ]
        self._request_options: Dict[str, Any] = dict(request_options or {})
        self._gate = asyncio.Lock()
        self._session_id = uuid.uuid4().hex[:12]
        self._logger = get_logger("genai.chat")

    @property
    def model(self) -> ContentGenerator:
        return self._model

    @property
    def history_length(self) -> int:
        return len(self._history)

    def get_history(self) -> List[Content]:
        """Return a deep copy of the transcript."""
        return [c.model_copy(deep=True) for c in self._history]

    # Internals ------------------------------------------------------------
    def _log_context(self, streaming: bool) -> LogContext:
        return LogContext(
            model=getattr(self._model, "model_name", None),
            session_id=self._session_id,
            extra={"turns": len(self._history), "streaming": streaming},
        )

    def _log_failure(self, ctx: LogContext, exc: BaseException) -> None:
        normalized_log_event(
            self._logger,
            "chat.send.error",
            ctx,
            phase="finalize",
            error_code=classify_exception(exc).value,
            emitted=False,
            error=str(exc),
            level=logging.WARNING,
        )

    def _prepare(self, message: MessageLike) -> tuple[Content, List[Content]]:
        """Build the new user turn and the request snapshot, validating both."""
        new_content = format_new_content(message)
        candidate = [*self._history, new_content]
        validate_chat_history(candidate)
        return new_content, [c.model_copy(deep=True) for c in candidate]

    def _options(self, per_call: Mapping[str, Any]) -> Dict[str, Any]:
        return {**self._request_options, **per_call}

    # Public API -----------------------------------------------------------
    async def send_message(self, message: MessageLike, **request_options: Any) -> GenerateContentResult:
        """Send a message and record it together with the model's reply.

        Raises:
            InvalidHistoryError: the message or transcript failed validation.
            BlockedResponseError: the service returned no usable candidate.
            Exception: collaborator failures propagate unchanged.
        """
        async with self._gate:
            ctx = self._log_context(streaming=False)
            try:
                new_content, contents = self._prepare(message)
                normalized_log_event(self._logger, "chat.send.start", ctx, phase="start")
                result = await self._model.generate_content(contents, **self._options(request_options))
                response = result.response
                if not is_valid_response(response):
                    raise BlockedResponseError(
                        format_block_error_message(response) or "Response has no usable candidate",
                        model=ctx.model,
                        response=response,
                    )
            except BaseException as exc:
                self._log_failure(ctx, exc)
                raise
            self._history.append(new_content)
            self._history.append(_as_model_turn(response.candidates[0].content))
            normalized_log_event(
                self._logger,
                "chat.send.end",
                ctx,
                phase="finalize",
                emitted=True,
                history_length=len(self._history),
            )
            return result

    async def send_message_stream(
        self,
        message: MessageLike,
        callbacks: Optional[StreamCallbacks] = None,
        **request_options: Any,
    ) -> GenerateContentStreamResult:
        """Send a message and stream the reply.

        The user turn is recorded once the stream handle is returned. The model
        turn is recorded when the stream settles with a usable response; any
        other outcome removes the user turn again. Later sends wait until this
        stream settles.
        """
        await self._gate.acquire()
        ctx = self._log_context(streaming=True)
        try:
            new_content, contents = self._prepare(message)
            normalized_log_event(self._logger, "chat.send.start", ctx, phase="start")
            result = await self._model.generate_content_stream(
                contents, callbacks, **self._options(request_options)
            )
            self._history.append(new_content)
        except BaseException as exc:
            self._gate.release()
            self._log_failure(ctx, exc)
            raise

        def on_settled(response: Optional[GenerateContentResponse], error: Optional[BaseException]) -> None:
            try:
                if error is None and response is not None and not is_valid_response(response):
                    error = BlockedResponseError(
                        format_block_error_message(response) or "Response has no usable candidate",
                        model=ctx.model,
                        response=response,
                    )
                if error is not None:
                    if self._history and self._history[-1] is new_content:
                        self._history.pop()
                    self._log_failure(ctx, error)
                    return
                self._history.append(_as_model_turn(response.candidates[0].content))
                normalized_log_event(
                    self._logger,
                    "chat.send.end",
                    ctx,
                    phase="finalize",
                    emitted=True,
                    history_length=len(self._history),
                )
            finally:
                self._gate.release()

        result.stream.add_settle_listener(on_settled)
        return result


__all__ = ["ChatSession"]
