"""Request and error helpers for the Gemini HTTP client.

Purpose:
    Keep payload construction and HTTP error translation out of the client
    class so both can be tested without a transport.

External dependencies:
    - ``httpx`` response objects for status and body inspection.
    - ``pydantic`` alias generator for camelCase request keys.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import httpx
from pydantic.alias_generators import to_camel

from ..base.errors import RETRYABLE_CODES, GenAIError, classify_exception
from ..base.models import Content, Part

SystemInstruction = Union[str, Content, Mapping[str, Any]]


def _camelize(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_camel(k) if "_" in k else k: v for k, v in mapping.items()}


def _system_instruction_payload(value: SystemInstruction) -> Dict[str, Any]:
    if isinstance(value, str):
        return Content(parts=[Part(text=value)]).to_wire()
    if isinstance(value, Content):
        return value.to_wire()
    return Content.model_validate(value).to_wire()


def build_request_body(
    contents: Sequence[Content],
    *,
    generation_config: Optional[Mapping[str, Any]] = None,
    safety_settings: Optional[Sequence[Mapping[str, Any]]] = None,
    system_instruction: Optional[SystemInstruction] = None,
    tools: Optional[Sequence[Mapping[str, Any]]] = None,
    tool_config: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Return the camelCase JSON body for ``generateContent``.

    Only ``contents`` is always present; optional sections are omitted when
    unset.
    """
    body: Dict[str, Any] = {"contents": [c.to_wire() for c in contents]}
    if generation_config:
        body["generationConfig"] = _camelize(generation_config)
    if safety_settings:
        body["safetySettings"] = [_camelize(s) for s in safety_settings]
    if system_instruction:
        body["systemInstruction"] = _system_instruction_payload(system_instruction)
    if tools:
        body["tools"] = [_camelize(t) for t in tools]
    if tool_config:
        body["toolConfig"] = _camelize(tool_config)
    return body


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` from a service error body, else the raw text."""
    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        return text.strip() or response.reason_phrase
    if isinstance(data, list) and data:
        data = data[0]
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        if message:
            return str(message)
    return text.strip() or response.reason_phrase


def error_from_response(response: httpx.Response, model: Optional[str]) -> GenAIError:
    """Translate a non-2xx ``httpx.Response`` into a :class:`GenAIError`.

    The body must already be read (``await response.aread()`` for streams).
    """
    exc = httpx.HTTPStatusError(
        f"HTTP {response.status_code}", request=response.request, response=response
    )
    code = classify_exception(exc)
    return GenAIError(
        code=code,
        message=f"[{response.status_code} {response.reason_phrase}] {_error_message(response)}",
        model=model,
        status=response.status_code,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


def merge_options(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge per-call options over client defaults, skipping ``None`` values."""
    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


def contents_list(contents: Sequence[Union[Content, Mapping[str, Any]]]) -> List[Content]:
    return [c if isinstance(c, Content) else Content.model_validate(c) for c in contents]


__all__ = [
    "SystemInstruction",
    "build_request_body",
    "error_from_response",
    "merge_options",
    "contents_list",
]
