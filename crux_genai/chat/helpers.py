"""Chat helpers: new-turn normalization, history validation, response checks.

Pure functions over ``Content`` values; no session state.
"""
from __future__ import annotations

from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Sequence, Union

from pydantic import ValidationError

from ..base.errors import InvalidHistoryError
from ..base.models import POSSIBLE_ROLES, Content, GenerateContentResponse, Part

PartLike = Union[str, Part, Mapping[str, Any]]
MessageLike = Union[PartLike, Sequence[PartLike]]

VALID_PARTS_PER_ROLE: Dict[str, FrozenSet[str]] = {
    "user": frozenset({"text", "inline_data", "file_data", "function_response"}),
    "model": frozenset({"text", "function_call", "executable_code", "code_execution_result"}),
}


def _to_part(item: PartLike) -> Part:
    if isinstance(item, Part):
        return item.model_copy(deep=True)
    if isinstance(item, str):
        return Part(text=item)
    if isinstance(item, Mapping):
        try:
            return Part.model_validate(item)
        except ValidationError as exc:
            raise InvalidHistoryError(f"Invalid part in message: {exc.errors()[0]['msg']}", raw=exc) from exc
    raise InvalidHistoryError(f"Unsupported message part type: {type(item).__name__}")


def format_new_content(message: MessageLike) -> Content:
    """Normalize a caller message into a new ``user`` turn.

    Accepts a string, a :class:`Part`, a part mapping, or a list of those.
    Function responses are sent back as a ``user`` turn so the transcript
    keeps alternating.

    Raises:
        InvalidHistoryError: the message is empty, holds an invalid part, or
            mixes function responses with other kinds of part.
    """
    items: Iterable[PartLike]
    if isinstance(message, (str, Part, Mapping)):
        items = [message]
    else:
        items = message
    parts: List[Part] = [_to_part(item) for item in items]
    if not parts:
        raise InvalidHistoryError("No content is provided for sending chat message.")
    function_parts = [p for p in parts if p.function_response is not None]
    if function_parts and len(function_parts) != len(parts):
        raise InvalidHistoryError(
            "Within a single message, FunctionResponse cannot be mixed with other type of part "
            "in the request for sending chat message."
        )
    return Content(role="user", parts=parts)


def validate_chat_history(history: Sequence[Content]) -> None:
    """Check that ``history`` is a well-formed transcript.

    Rules: every role is ``user`` or ``model``; the first turn is ``user``;
    roles strictly alternate; every turn has at least one part; and each
    role only carries the part kinds it may send.

    Raises:
        InvalidHistoryError: describing the first violation found.
    """
    previous_role = None
    for position, content in enumerate(history):
        role = content.role
        if role not in POSSIBLE_ROLES:
            raise InvalidHistoryError(
                f"Each item should include role field. Got {role} but valid roles are: {list(POSSIBLE_ROLES)}"
            )
        if previous_role is None and role != "user":
            raise InvalidHistoryError(f"First content should be with role 'user', got {role}")
        if previous_role == role:
            raise InvalidHistoryError(
                f"Roles must alternate between 'user' and 'model'; turn {position} repeats '{role}'"
            )
        if not content.parts:
            raise InvalidHistoryError("Each Content should have at least one part")
        allowed = VALID_PARTS_PER_ROLE[role]
        for part in content.parts:
            if part.kind not in allowed:
                raise InvalidHistoryError(f"Content with role '{role}' can't contain '{part.kind}' part")
        previous_role = role


def is_valid_response(response: GenerateContentResponse) -> bool:
    """True when the first candidate carries content fit for the transcript."""
    if not response.candidates:
        return False
    content = response.candidates[0].content
    if content is None or not content.parts:
        return False
    return all(part.text != "" for part in content.parts)


__all__ = [
    "PartLike",
    "MessageLike",
    "VALID_PARTS_PER_ROLE",
    "format_new_content",
    "validate_chat_history",
    "is_valid_response",
]
