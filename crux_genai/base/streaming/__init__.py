"""Streaming package for the client.

Exposes SSE framing, the response aggregator, the stream reader and stream
metrics under a single namespace.
"""

from .aggregation import ResponseAggregator, aggregate_responses
from .callbacks import StreamCallbacks
from .sse import decode_fragment, iter_sse_payloads
from .stream_reader import ContentStream, GenerateContentStreamResult, process_stream, validate_fragment
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage

__all__ = [
    "ResponseAggregator",
    "aggregate_responses",
    "StreamCallbacks",
    "decode_fragment",
    "iter_sse_payloads",
    "ContentStream",
    "GenerateContentStreamResult",
    "process_stream",
    "validate_fragment",
    "finalize_stream",
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]
