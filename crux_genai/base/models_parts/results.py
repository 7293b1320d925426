"""
Buffered result wrapper returned by non-streaming generation.
"""
from __future__ import annotations

from dataclasses import dataclass

from .response import GenerateContentResponse


@dataclass
class GenerateContentResult:
    """Wraps one finalized response."""

    response: GenerateContentResponse


__all__ = ["GenerateContentResult"]
