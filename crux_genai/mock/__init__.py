"""Mock collaborator package exposing deterministic scripted responses."""

from .client import MockModel, sse_record, text_response, text_stream

__all__ = ["MockModel", "sse_record", "text_response", "text_stream"]
