"""
Concrete error conditions raised by the chat and streaming core.

Each subclass pins its :class:`ErrorCode` so callers can catch by type while
logging and analytics keep working off ``code``.
"""
from __future__ import annotations

from typing import Any, Optional

from .error_code import ErrorCode
from .genai_error import GenAIError


class _FixedCodeError(GenAIError):
    """Base for errors whose code is implied by the class."""

    fixed_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        model: Optional[str] = None,
        response: Optional[Any] = None,
        raw: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            code=self.fixed_code,
            message=message,
            model=model,
            response=response,
            raw=raw,
        )


class InvalidHistoryError(_FixedCodeError):
    """Local validation of the conversation failed; nothing was sent."""

    fixed_code = ErrorCode.INVALID_HISTORY


class BlockedPromptError(_FixedCodeError):
    """The service reported that the prompt itself was blocked."""

    fixed_code = ErrorCode.BLOCKED_PROMPT


class BlockedResponseError(_FixedCodeError):
    """The service returned no usable candidate for the request."""

    fixed_code = ErrorCode.BLOCKED_RESPONSE


class MalformedChunkError(_FixedCodeError):
    """A stream record could not be decoded into a response fragment."""

    fixed_code = ErrorCode.MALFORMED_CHUNK


class EmptyStreamError(_FixedCodeError):
    """The stream ended before any fragment was received."""

    fixed_code = ErrorCode.EMPTY_STREAM


class StreamClosedError(_FixedCodeError):
    """The stream was closed by the caller before it was exhausted."""

    fixed_code = ErrorCode.STREAM_CLOSED


__all__ = [
    "InvalidHistoryError",
    "BlockedPromptError",
    "BlockedResponseError",
    "MalformedChunkError",
    "EmptyStreamError",
    "StreamClosedError",
]
