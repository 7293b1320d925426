"""
Content model: one turn of a conversation.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .part import Part
from .wire import WireModel

Role = Literal["user", "model"]
POSSIBLE_ROLES = ("user", "model")


class Content(WireModel):
    """A turn attributed to ``user`` or ``model`` holding ordered parts.

    ``role`` stays optional because candidate content returned by the service
    may omit it; history validation rejects turns without a valid role.
    """

    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)

    def text(self) -> str:
        """Concatenate the answer text parts of this turn."""
        return "".join(p.text for p in self.parts if p.is_plain_text)


__all__ = ["Content", "Role", "POSSIBLE_ROLES"]
