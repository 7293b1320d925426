"""
Part model: one atomic content unit inside a turn.

A part is a tagged union. Exactly one of the payload fields below is
populated; ``thought`` is a flag that may accompany ``text``.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import model_validator

from .wire import WireModel


class Blob(WireModel):
    """Inline binary payload (base64 encoded) with its MIME type."""

    mime_type: str
    data: str


class FileData(WireModel):
    """Reference to previously uploaded file content."""

    mime_type: Optional[str] = None
    file_uri: str


class FunctionCall(WireModel):
    """Structured function call predicted by the model."""

    name: str
    args: Optional[Dict[str, Any]] = None


class FunctionResponse(WireModel):
    """Result of a function call, sent back to the model."""

    name: str
    response: Dict[str, Any]


class ExecutableCode(WireModel):
    language: Optional[str] = None
    code: str


class CodeExecutionResult(WireModel):
    outcome: Optional[str] = None
    output: Optional[str] = None


PART_KINDS: Tuple[str, ...] = (
    "text",
    "inline_data",
    "file_data",
    "function_call",
    "function_response",
    "executable_code",
    "code_execution_result",
)


class Part(WireModel):
    """A single piece of turn content.

    Attributes:
        text: Plain text.
        inline_data: Inline binary blob.
        file_data: Uploaded file reference.
        function_call: Model-issued function call.
        function_response: Caller-supplied function result.
        executable_code: Code generated by the model for execution.
        code_execution_result: Outcome of executing ``executable_code``.
        thought: Marks a text part as model reasoning rather than answer text.

    Raises:
        pydantic.ValidationError: When zero or several payload fields are set.
    """

    text: Optional[str] = None
    inline_data: Optional[Blob] = None
    file_data: Optional[FileData] = None
    function_call: Optional[FunctionCall] = None
    function_response: Optional[FunctionResponse] = None
    executable_code: Optional[ExecutableCode] = None
    code_execution_result: Optional[CodeExecutionResult] = None
    thought: Optional[bool] = None

    @model_validator(mode="after")
    def _exactly_one_payload(self) -> "Part":
        populated = [k for k in PART_KINDS if getattr(self, k) is not None]
        if len(populated) != 1:
            raise ValueError(
                f"part must populate exactly one of {', '.join(PART_KINDS)}; got {populated or 'none'}"
            )
        return self

    @property
    def kind(self) -> str:
        """Name of the populated payload field."""
        return next(k for k in PART_KINDS if getattr(self, k) is not None)

    @property
    def is_plain_text(self) -> bool:
        """True for answer text (a text part not flagged as a thought)."""
        return self.text is not None and not self.thought


__all__ = [
    "Blob",
    "FileData",
    "FunctionCall",
    "FunctionResponse",
    "ExecutableCode",
    "CodeExecutionResult",
    "PART_KINDS",
    "Part",
]
