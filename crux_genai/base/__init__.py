"""
Base package

Exports the service-agnostic building blocks used by the chat layer and the
model collaborators:
- Errors: normalized taxonomy and classification
- Models: pydantic wire payloads
- Streaming: SSE framing, stream reader and response aggregation
- Interfaces: the model collaborator contract
"""

from .errors import (
    BlockedPromptError,
    BlockedResponseError,
    EmptyStreamError,
    ErrorCode,
    GenAIError,
    InvalidHistoryError,
    MalformedChunkError,
    StreamClosedError,
    classify_exception,
    code_for_status,
)
from .logging import LogContext, configure_logger, get_logger, log_event, normalized_log_event
from .models import (
    Candidate,
    Content,
    GenerateContentResponse,
    GenerateContentResult,
    Part,
    PromptFeedback,
    UsageMetadata,
)
from .streaming import (
    ContentStream,
    GenerateContentStreamResult,
    ResponseAggregator,
    StreamCallbacks,
    StreamMetrics,
    aggregate_responses,
    process_stream,
)
from .interfaces import ContentGenerator
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "BlockedPromptError",
    "BlockedResponseError",
    "EmptyStreamError",
    "ErrorCode",
    "GenAIError",
    "InvalidHistoryError",
    "MalformedChunkError",
    "StreamClosedError",
    "classify_exception",
    "code_for_status",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
    "normalized_log_event",
    "Candidate",
    "Content",
    "GenerateContentResponse",
    "GenerateContentResult",
    "Part",
    "PromptFeedback",
    "UsageMetadata",
    "ContentStream",
    "GenerateContentStreamResult",
    "ResponseAggregator",
    "StreamCallbacks",
    "StreamMetrics",
    "aggregate_responses",
    "process_stream",
    "ContentGenerator",
    "TimeoutConfig",
    "get_timeout_config",
]
