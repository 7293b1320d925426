"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the chat session, the stream
reader and the HTTP model client. Values are lowercase snake_case and are
considered a stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    # Conversation / content conditions
    INVALID_HISTORY = "invalid_history"
    BLOCKED_PROMPT = "blocked_prompt"
    BLOCKED_RESPONSE = "blocked_response"
    MALFORMED_CHUNK = "malformed_chunk"
    EMPTY_STREAM = "empty_stream"
    STREAM_CLOSED = "stream_closed"

    # Transport conditions
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
