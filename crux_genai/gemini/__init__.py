"""Gemini REST collaborator package."""

from .client import GenerativeModel
from .helpers import build_request_body, error_from_response

__all__ = ["GenerativeModel", "build_request_body", "error_from_response"]
