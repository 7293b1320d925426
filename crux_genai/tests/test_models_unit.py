"""Wire model parsing, serialization and response helpers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from crux_genai.base.errors import BlockedResponseError
from crux_genai.base.models import Content, GenerateContentResponse, Part, format_block_error_message


def test_part_requires_exactly_one_payload():
    with pytest.raises(ValidationError):
        Part()
    with pytest.raises(ValidationError):
        Part.model_validate({"text": "a", "functionCall": {"name": "f"}})
    assert Part.model_validate({"functionCall": {"name": "f", "args": {"x": 1}}}).kind == "function_call"


def test_round_trip_keeps_camel_case_and_unknown_fields():
    raw = {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": "hi", "futureField": 1}]},
                "finishReason": "STOP",
                "avgLogprobs": -0.1,
            }
        ],
        "usageMetadata": {"promptTokenCount": 2, "totalTokenCount": 3},
    }
    response = GenerateContentResponse.model_validate(raw)
    assert response.usage_metadata.prompt_token_count == 2
    assert response.to_wire() == raw


def test_text_and_function_calls():
    response = GenerateContentResponse.model_validate(
        {
            "candidates": [
                {
                    "content": {
                        "role": "model",
                        "parts": [
                            {"text": "plan", "thought": True},
                            {"text": "answer"},
                            {"functionCall": {"name": "lookup", "args": {"q": "x"}}},
                        ],
                    }
                }
            ]
        }
    )
    assert response.text() == "answer"
    assert [c.name for c in response.function_calls()] == ["lookup"]


def test_blocked_prompt_text_raises():
    response = GenerateContentResponse.model_validate(
        {"promptFeedback": {"blockReason": "SAFETY", "blockReasonMessage": "unsafe"}}
    )
    assert response.prompt_blocked
    assert format_block_error_message(response) == "Response was blocked due to SAFETY: unsafe"
    with pytest.raises(BlockedResponseError):
        response.text()


def test_bad_finish_reason_raises():
    response = GenerateContentResponse.model_validate({"candidates": [{"finishReason": "RECITATION"}]})
    assert format_block_error_message(response) == "Candidate was blocked due to RECITATION"
    with pytest.raises(BlockedResponseError):
        response.function_calls()


def test_empty_response_text_is_empty_string():
    assert GenerateContentResponse().text() == ""


def test_content_text_joins_plain_parts():
    content = Content(role="model", parts=[Part(text="a"), Part(text="b")])
    assert content.text() == "ab"
