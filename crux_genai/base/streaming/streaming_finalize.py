"""Finalize stream helper.

Emits the consolidated terminal log line for a stream once it settles.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import classify_exception
from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error: Optional[BaseException] = None,
) -> None:
    """Log ``stream.reader.end`` or ``stream.reader.error`` with metrics."""
    error_code = classify_exception(error).value if error is not None else None
    normalized_log_event(
        logger,
        "stream.reader.end" if error is None else "stream.reader.error",
        ctx,
        phase="finalize",
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        emitted_count=metrics.emitted,
        time_to_first_chunk_ms=metrics.time_to_first_chunk_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=str(error) if error is not None else None,
        level=logging.INFO if error is None else logging.WARNING,
    )


__all__ = ["finalize_stream"]
