"""
Candidate model and its safety metadata.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .content import Content
from .wire import WireModel

# Finish reasons that mean the candidate text was withheld.
BAD_FINISH_REASONS = frozenset({"RECITATION", "SAFETY", "LANGUAGE", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"})


class SafetyRating(WireModel):
    category: str
    probability: str
    blocked: Optional[bool] = None


class Candidate(WireModel):
    """One generated alternative within a response."""

    index: Optional[int] = None
    content: Optional[Content] = None
    finish_reason: Optional[str] = None
    finish_message: Optional[str] = None
    safety_ratings: Optional[List[SafetyRating]] = None
    citation_metadata: Optional[Dict[str, Any]] = None
    grounding_metadata: Optional[Dict[str, Any]] = None

    @property
    def had_bad_finish_reason(self) -> bool:
        return self.finish_reason in BAD_FINISH_REASONS


__all__ = ["SafetyRating", "Candidate", "BAD_FINISH_REASONS"]
