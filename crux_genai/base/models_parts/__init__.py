"""Wire model parts package (one concern per module)."""

from .wire import WireModel
from .part import (
    PART_KINDS,
    Blob,
    CodeExecutionResult,
    ExecutableCode,
    FileData,
    FunctionCall,
    FunctionResponse,
    Part,
)
from .content import POSSIBLE_ROLES, Content, Role
from .candidate import BAD_FINISH_REASONS, Candidate, SafetyRating
from .response import (
    GenerateContentResponse,
    PromptFeedback,
    UsageMetadata,
    format_block_error_message,
)
from .results import GenerateContentResult

__all__ = [
    "WireModel",
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
