"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `crux_genai.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .genai_error import GenAIError
from .conditions import (
    BlockedPromptError,
    BlockedResponseError,
    EmptyStreamError,
    InvalidHistoryError,
    MalformedChunkError,
    StreamClosedError,
)
from .classification import RETRYABLE_CODES, classify_exception, code_for_status

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
