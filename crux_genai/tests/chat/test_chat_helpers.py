"""Transcript helpers: message normalization, history validation, response checks."""

from __future__ import annotations

import pytest

from crux_genai.base.errors import InvalidHistoryError
from crux_genai.base.models import Content, GenerateContentResponse, Part
from crux_genai.chat import format_new_content, is_valid_response, validate_chat_history


def _turn(role: str, text: str = "x") -> Content:
    return Content(role=role, parts=[Part(text=text)])


class TestFormatNewContent:
    """Normalization of caller messages into a user turn."""

    def test_string_becomes_single_text_part(self):
        content = format_new_content("hello")
        assert content.role == "user"
        assert [p.text for p in content.parts] == ["hello"]

    def test_mixed_list_of_strings_parts_and_mappings(self):
        content = format_new_content(
            ["a", Part(text="b"), {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}]
        )
        assert [p.kind for p in content.parts] == ["text", "text", "inline_data"]

    def test_part_inputs_are_copied(self):
        part = Part(text="orig")
        content = format_new_content(part)
        content.parts[0].text = "changed"
        assert part.text == "orig"

    def test_empty_message_rejected(self):
        with pytest.raises(InvalidHistoryError):
            format_new_content([])

    def test_invalid_part_mapping_rejected(self):
        with pytest.raises(InvalidHistoryError):
            format_new_content({"text": "a", "functionCall": {"name": "f"}})

    def test_function_response_cannot_mix_with_text(self):
        with pytest.raises(InvalidHistoryError):
            format_new_content(["a", {"functionResponse": {"name": "f", "response": {"ok": True}}}])

    def test_function_responses_alone_are_accepted(self):
        content = format_new_content({"functionResponse": {"name": "f", "response": {"ok": True}}})
        assert content.role == "user"
        assert content.parts[0].kind == "function_response"

    def test_unsupported_type_rejected(self):
        with pytest.raises(InvalidHistoryError):
            format_new_content([42])  # type: ignore[list-item]


class TestValidateChatHistory:
    """Role alternation and per-role part rules."""

    def test_alternating_history_passes(self):
        validate_chat_history([_turn("user"), _turn("model"), _turn("user")])

    def test_empty_history_passes(self):
        validate_chat_history([])

    def test_first_turn_must_be_user(self):
        with pytest.raises(InvalidHistoryError):
            validate_chat_history([_turn("model")])

    def test_repeated_role_rejected(self):
        with pytest.raises(InvalidHistoryError):
            validate_chat_history([_turn("user"), _turn("user")])

    def test_unknown_role_rejected(self):
        with pytest.raises(InvalidHistoryError):
            validate_chat_history([_turn("system")])

    def test_turn_without_parts_rejected(self):
        with pytest.raises(InvalidHistoryError):
            validate_chat_history([Content(role="user", parts=[])])

    def test_user_cannot_send_function_call(self):
        bad = Content(role="user", parts=[Part.model_validate({"functionCall": {"name": "f"}})])
        with pytest.raises(InvalidHistoryError):
            validate_chat_history([bad])

    def test_model_cannot_send_function_response(self):
        bad = Content(role="model", parts=[Part.model_validate({"functionResponse": {"name": "f", "response": {}}})])
        with pytest.raises(InvalidHistoryError):
            validate_chat_history([_turn("user"), bad])


class TestIsValidResponse:
    """Predicate deciding whether a reply may enter the transcript."""

    def test_candidate_with_text_is_valid(self):
        response = GenerateContentResponse.model_validate(
            {"candidates": [{"content": {"role": "model", "parts": [{"text": "hi"}]}}]}
        )
        assert is_valid_response(response)

    def test_no_candidates_is_invalid(self):
        response = GenerateContentResponse.model_validate({"promptFeedback": {"blockReason": "SAFETY"}})
        assert not is_valid_response(response)

    def test_candidate_without_content_is_invalid(self):
        response = GenerateContentResponse.model_validate({"candidates": [{"finishReason": "SAFETY"}]})
        assert not is_valid_response(response)

    def test_empty_text_part_is_invalid(self):
        response = GenerateContentResponse.model_validate(
            {"candidates": [{"content": {"role": "model", "parts": [{"text": ""}]}}]}
        )
        assert not is_valid_response(response)
