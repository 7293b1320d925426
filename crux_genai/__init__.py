"""crux_genai package

Async client library for generative content services.

Purpose:
    Provide a small, stable API for multi-turn chat over a generative model:
    a :class:`ChatSession` that serializes sends and keeps a validated
    transcript, a stream reader that turns SSE bytes into response fragments,
    and a response aggregator that merges fragments into one response.

Public API (re-exported):
    - Version: ``__version__``
    - Chat: :class:`ChatSession`
    - Collaborators: :class:`GenerativeModel`, :class:`MockModel`,
      :class:`ContentGenerator`
    - Streaming: :func:`process_stream`, :func:`aggregate_responses`,
      :class:`StreamCallbacks`
    - Models: :class:`Content`, :class:`Part`,
      :class:`GenerateContentResponse`
    - Exceptions: :class:`GenAIError` and its subclasses, :class:`ErrorCode`
"""

from .base.errors import (
    BlockedPromptError,
    BlockedResponseError,
    EmptyStreamError,
    ErrorCode,
    GenAIError,
    InvalidHistoryError,
    MalformedChunkError,
    StreamClosedError,
)
from .base.interfaces import ContentGenerator
from .base.logging import configure_logger
from .base.models import Content, GenerateContentResponse, GenerateContentResult, Part
from .base.streaming import (
    GenerateContentStreamResult,
    StreamCallbacks,
    aggregate_responses,
    process_stream,
)
from .chat import ChatSession
from .gemini import GenerativeModel
from .mock import MockModel

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatSession",
    "GenerativeModel",
    "MockModel",
    "ContentGenerator",
    "process_stream",
    "aggregate_responses",
    "StreamCallbacks",
    "GenerateContentStreamResult",
    "Content",
    "Part",
    "GenerateContentResponse",
    "GenerateContentResult",
    "configure_logger",
    "ErrorCode",
    "GenAIError",
    "InvalidHistoryError",
    "BlockedPromptError",
    "BlockedResponseError",
    "MalformedChunkError",
    "EmptyStreamError",
    "StreamClosedError",
]
