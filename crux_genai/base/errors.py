"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``crux_genai.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.genai_error import GenAIError
from .errors_parts.conditions import (
    BlockedPromptError,
    BlockedResponseError,
    EmptyStreamError,
    InvalidHistoryError,
    MalformedChunkError,
    StreamClosedError,
)
from .errors_parts.classification import RETRYABLE_CODES, classify_exception, code_for_status

__all__ = [
    "ErrorCode",
    "GenAIError",
    "InvalidHistoryError",
    "BlockedPromptError",
    "BlockedResponseError",
    "MalformedChunkError",
    "EmptyStreamError",
    "StreamClosedError",
    "RETRYABLE_CODES",
    "classify_exception",
    "code_for_status",
]
