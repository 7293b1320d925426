"""Chat package: multi-turn sessions and transcript helpers."""

from .helpers import (
    VALID_PARTS_PER_ROLE,
    format_new_content,
    is_valid_response,
    validate_chat_history,
)
from .session import ChatSession

__all__ = [
    "ChatSession",
    "VALID_PARTS_PER_ROLE",
    "format_new_content",
    "is_valid_response",
    "validate_chat_history",
]
