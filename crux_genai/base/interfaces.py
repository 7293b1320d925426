"""ContentGenerator Protocol (single-class module).

Defines the model collaborator contract consumed by :class:`ChatSession`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol, runtime_checkable

from .models import Content, GenerateContentResult
from .streaming import GenerateContentStreamResult, StreamCallbacks


@runtime_checkable
class ContentGenerator(Protocol):
    """Anything that can turn a list of turns into generated content.

    Implementations own request construction and transport. They receive a
    fresh list of turns on every call and must not keep a reference to it.
    """

    @property
    def model_name(self) -> str:
        """Model identifier used for logging, e.g. ``"gemini-2.0-flash"``."""
        ...

    async def generate_content(self, contents: List[Content], **options: Any) -> GenerateContentResult:
        """Return one complete buffered response."""
        ...

    async def generate_content_stream(
        self,
        contents: List[Content],
        callbacks: Optional[StreamCallbacks] = None,
        **options: Any,
    ) -> GenerateContentStreamResult:
        """Return once the response has started; chunks arrive lazily."""
        ...


__all__ = ["ContentGenerator"]
