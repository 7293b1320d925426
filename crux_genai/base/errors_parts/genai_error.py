"""
Structured error exception type.

Wraps transport failures and content-level refusals with a normalized
`ErrorCode` for consistent handling and structured logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class GenAIError(Exception):
    """Represents a structured client error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        model: Optional model name associated with the failure.
        status: HTTP status code when the failure came from the service.
        retryable: Hint for upstream retry logic (not authoritative).
        response: Offending response payload, surfaced verbatim when the
            service refused to generate.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    model: Optional[str] = None
    status: Optional[int] = None
    retryable: bool = False
    response: Optional[Any] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining model, code, and message."""
        return f"{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["GenAIError"]
