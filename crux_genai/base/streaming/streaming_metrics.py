"""Streaming metrics data structures.

Isolated within the streaming package to keep the reader loop small.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Dict, Any

from ..models import UsageMetadata


@dataclass
class StreamMetrics:
    """Collected metrics for a single stream.

    Fields:
      emitted: number of fragments handed to the consumer.
      time_to_first_chunk_ms: latency from stream creation to first fragment.
      total_duration_ms: latency from stream creation to settlement.
      prompt_tokens / completion_tokens / total_tokens: from the last
        ``usage_metadata`` the service reported.
    """

    emitted: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    tokens: Optional[Dict[str, Any]] = None


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping."""
    derived_total = total
    if derived_total is None and (prompt is not None and completion is not None):
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_token_usage(metrics: StreamMetrics, usage: Optional[UsageMetadata]) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    if usage is None:
        return
    tokens = build_token_usage(usage.prompt_token_count, usage.candidates_token_count, usage.total_token_count)
    metrics.prompt_tokens = tokens["prompt"]
    metrics.completion_tokens = tokens["completion"]
    metrics.total_tokens = tokens["total"]
    metrics.tokens = tokens


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]
