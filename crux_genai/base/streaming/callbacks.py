"""Caller-supplied hooks invoked while a stream drains."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..models import GenerateContentResponse


@dataclass
class StreamCallbacks:
    """Optional per-chunk and per-completion hooks.

    Fields:
      on_chunk: called with each validated fragment, in arrival order, before
        it is merged into the aggregate. Exceptions abort the stream.
      on_complete: called once with the finalized aggregate, after the last
        fragment and before the deferred response resolves. Not called when
        the stream fails or ends empty.
    """

    on_chunk: Optional[Callable[[GenerateContentResponse], None]] = None
    on_complete: Optional[Callable[[GenerateContentResponse], None]] = None


__all__ = ["StreamCallbacks"]
