"""Response aggregation for streamed fragments.

Merges the fragments of one stream into a single ``GenerateContentResponse``:

- Candidates are merged by position; each fragment enumerates candidates
  from index 0.
- Within a candidate, an incoming plain-text part is appended to the
  accumulated last part when that is plain text too; any other part is
  appended as a separate part.
- Candidate metadata (finish reason/message, safety ratings, citation and
  grounding metadata) and response metadata (usage, prompt feedback, model
  version) come from the last fragment that supplied them.

Inputs are never mutated; parts are copied into the aggregate.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..errors import MalformedChunkError
from ..models import Candidate, Content, GenerateContentResponse, PromptFeedback, UsageMetadata

_CANDIDATE_METADATA_FIELDS = (
    "finish_reason",
    "finish_message",
    "safety_ratings",
    "citation_metadata",
    "grounding_metadata",
)


def has_candidate_envelope(fragment: GenerateContentResponse) -> bool:
    """True when a fragment carries candidates or response-level metadata."""
    return bool(fragment.candidates) or fragment.usage_metadata is not None or fragment.prompt_feedback is not None


class ResponseAggregator:
    """Running merge of stream fragments."""

    def __init__(self) -> None:
        self._candidates: List[Candidate] = []
        self._prompt_feedback: Optional[PromptFeedback] = None
        self._usage_metadata: Optional[UsageMetadata] = None
        self._model_version: Optional[str] = None
        self._response_id: Optional[str] = None
        self.count = 0

    def add(self, fragment: GenerateContentResponse) -> None:
        """Merge one fragment into the running aggregate.

        Raises:
            MalformedChunkError: the fragment has no candidate envelope.
        """
        if not has_candidate_envelope(fragment):
            raise MalformedChunkError("response fragment has no candidates", response=fragment)
        for position, incoming in enumerate(fragment.candidates or ()):
            if position == len(self._candidates):
                self._candidates.append(Candidate(index=position))
            self._merge_candidate(self._candidates[position], incoming)
        if fragment.prompt_feedback is not None:
            self._prompt_feedback = fragment.prompt_feedback.model_copy(deep=True)
        if fragment.usage_metadata is not None:
            self._usage_metadata = fragment.usage_metadata.model_copy(deep=True)
        if fragment.model_version is not None:
            self._model_version = fragment.model_version
        if fragment.response_id is not None:
            self._response_id = fragment.response_id
        self.count += 1

    @staticmethod
    def _merge_candidate(target: Candidate, incoming: Candidate) -> None:
        for name in _CANDIDATE_METADATA_FIELDS:
            value = getattr(incoming, name)
            if value is not None:
                setattr(target, name, _copy(value))
        if incoming.content is None:
            return
        if target.content is None:
            target.content = Content(role=incoming.content.role or "model", parts=[])
        parts = target.content.parts
        for part in incoming.content.parts:
            if part.is_plain_text and parts and parts[-1].is_plain_text:
                parts[-1].text += part.text
            else:
                parts.append(part.model_copy(deep=True))

    def result(self) -> GenerateContentResponse:
        """Return a snapshot of the aggregate built so far."""
        return GenerateContentResponse(
            candidates=[c.model_copy(deep=True) for c in self._candidates] or None,
            prompt_feedback=self._prompt_feedback,
            usage_metadata=self._usage_metadata,
            model_version=self._model_version,
            response_id=self._response_id,
        )


def _copy(value):
    if isinstance(value, list):
        return [_copy(v) for v in value]
    if isinstance(value, dict):
        return {k: _copy(v) for k, v in value.items()}
    if hasattr(value, "model_copy"):
        return value.model_copy(deep=True)
    return value


def aggregate_responses(fragments: Iterable[GenerateContentResponse]) -> GenerateContentResponse:
    """Merge a finite sequence of fragments into one response."""
    aggregator = ResponseAggregator()
    for fragment in fragments:
        aggregator.add(fragment)
    return aggregator.result()


__all__ = ["ResponseAggregator", "aggregate_responses", "has_candidate_envelope"]
