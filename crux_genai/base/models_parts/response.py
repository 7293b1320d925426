"""
GenerateContentResponse model and response helpers.

The same model represents a complete buffered response, a single stream
fragment, and the aggregate of a stream's fragments.
"""
from __future__ import annotations

from typing import List, Optional

from ..errors import BlockedResponseError
from .candidate import Candidate, SafetyRating
from .part import FunctionCall
from .wire import WireModel


class PromptFeedback(WireModel):
    """Service verdict on the prompt itself."""

    block_reason: Optional[str] = None
    block_reason_message: Optional[str] = None
    safety_ratings: Optional[List[SafetyRating]] = None


class UsageMetadata(WireModel):
    prompt_token_count: Optional[int] = None
    candidates_token_count: Optional[int] = None
    total_token_count: Optional[int] = None
    cached_content_token_count: Optional[int] = None
    thoughts_token_count: Optional[int] = None


class GenerateContentResponse(WireModel):
    """Response payload from ``generateContent`` / ``streamGenerateContent``.

    Helper methods mirror what callers usually want from a response:
    ``text()`` for the first candidate's answer text and ``function_calls()``
    for its structured calls. Both raise :class:`BlockedResponseError` when
    the service withheld the content.
    """

    candidates: Optional[List[Candidate]] = None
    prompt_feedback: Optional[PromptFeedback] = None
    usage_metadata: Optional[UsageMetadata] = None
    model_version: Optional[str] = None
    response_id: Optional[str] = None

    @property
    def prompt_blocked(self) -> bool:
        return bool(self.prompt_feedback and self.prompt_feedback.block_reason)

    def _first_usable_candidate(self, what: str) -> Optional[Candidate]:
        if self.candidates:
            first = self.candidates[0]
            if first.had_bad_finish_reason:
                raise BlockedResponseError(format_block_error_message(self), response=self)
            return first
        if self.prompt_feedback:
            raise BlockedResponseError(
                f"{what} not available. {format_block_error_message(self)}",
                response=self,
            )
        return None

    def text(self) -> str:
        """Return the first candidate's answer text ("" when there is none)."""
        candidate = self._first_usable_candidate("Text")
        if candidate is None or candidate.content is None:
            return ""
        return candidate.content.text()

    def function_calls(self) -> List[FunctionCall]:
        """Return the function calls carried by the first candidate."""
        candidate = self._first_usable_candidate("Function call")
        if candidate is None or candidate.content is None:
            return []
        return [p.function_call for p in candidate.content.parts if p.function_call is not None]


def format_block_error_message(response: GenerateContentResponse) -> str:
    """Describe why ``response`` carries no usable content."""
    message = ""
    if not response.candidates and response.prompt_feedback:
        message += "Response was blocked"
        if response.prompt_feedback.block_reason:
            message += f" due to {response.prompt_feedback.block_reason}"
        if response.prompt_feedback.block_reason_message:
            message += f": {response.prompt_feedback.block_reason_message}"
    elif response.candidates:
        first = response.candidates[0]
        if first.had_bad_finish_reason:
            message += f"Candidate was blocked due to {first.finish_reason}"
            if first.finish_message:
                message += f": {first.finish_message}"
    return message


__all__ = [
    "PromptFeedback",
    "UsageMetadata",
    "GenerateContentResponse",
    "format_block_error_message",
]
