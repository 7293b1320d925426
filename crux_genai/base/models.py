"""
Wire models public surface.

This module re-exports the implementations under
``crux_genai.base.models_parts`` to keep a stable import path.
"""

from .models_parts.part import (
    PART_KINDS,
    Blob,
    CodeExecutionResult,
    ExecutableCode,
    FileData,
    FunctionCall,
    FunctionResponse,
    Part,
)
from .models_parts.content import POSSIBLE_ROLES, Content, Role
from .models_parts.candidate import BAD_FINISH_REASONS, Candidate, SafetyRating
from .models_parts.response import (
    GenerateContentResponse,
    PromptFeedback,
    UsageMetadata,
    format_block_error_message,
)
from .models_parts.results import GenerateContentResult

__all__ = [
    "PART_KINDS",
    "Blob",
    "CodeExecutionResult",
    "ExecutableCode",
    "FileData",
    "FunctionCall",
    "FunctionResponse",
    "Part",
    "POSSIBLE_ROLES",
    "Content",
    "Role",
    "BAD_FINISH_REASONS",
    "Candidate",
    "SafetyRating",
    "GenerateContentResponse",
    "PromptFeedback",
    "UsageMetadata",
    "format_block_error_message",
    "GenerateContentResult",
]
