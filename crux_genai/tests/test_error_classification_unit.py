from __future__ import annotations

import asyncio
import types

import httpx

from crux_genai.base.errors import (
    BlockedPromptError,
    EmptyStreamError,
    ErrorCode,
    GenAIError,
    InvalidHistoryError,
    RETRYABLE_CODES,
    classify_exception,
    code_for_status,
)


def test_classify_genai_error_passthrough():
    e = GenAIError(code=ErrorCode.AUTH, message="nope", model="x")
    assert classify_exception(e) is ErrorCode.AUTH  # nosec B101 - assert is appropriate in unit tests


def test_fixed_code_subclasses():
    assert classify_exception(InvalidHistoryError("bad")) is ErrorCode.INVALID_HISTORY  # nosec B101
    assert classify_exception(EmptyStreamError("none")) is ErrorCode.EMPTY_STREAM  # nosec B101
    err = BlockedPromptError("blocked", model="m")
    assert isinstance(err, GenAIError)  # nosec B101
    assert str(err) == "m blocked_prompt: blocked"  # nosec B101


def test_classify_http_status_mapping():
    e1 = types.SimpleNamespace(status_code=404)
    assert classify_exception(e1) is ErrorCode.NOT_FOUND  # nosec B101
    e2 = types.SimpleNamespace(response=types.SimpleNamespace(status_code=503))
    assert classify_exception(e2) is ErrorCode.UNAVAILABLE  # nosec B101
    request = httpx.Request("POST", "https://service.invalid/v1beta/models/m:generateContent")
    e3 = httpx.HTTPStatusError("429", request=request, response=httpx.Response(429, request=request))
    assert classify_exception(e3) is ErrorCode.RATE_LIMIT  # nosec B101


def test_classify_transport_and_timeouts():
    request = httpx.Request("GET", "https://service.invalid")
    assert classify_exception(httpx.ReadTimeout("slow", request=request)) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(asyncio.TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused", request=request)) is ErrorCode.TRANSIENT  # nosec B101


def test_classify_heuristics():
    assert classify_exception(Exception("rate limit exceeded")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(Exception("timed out waiting")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(Exception("API key not valid")) is ErrorCode.AUTH  # nosec B101
    assert classify_exception(Exception("random")) is ErrorCode.UNKNOWN  # nosec B101


def test_retryable_codes():
    assert ErrorCode.RATE_LIMIT in RETRYABLE_CODES  # nosec B101
    assert ErrorCode.AUTH not in RETRYABLE_CODES  # nosec B101


def test_code_for_status():
    assert code_for_status(429) is ErrorCode.RATE_LIMIT  # nosec B101
    assert code_for_status(503) is ErrorCode.UNAVAILABLE  # nosec B101
    assert code_for_status(418) is ErrorCode.UNKNOWN  # nosec B101
    assert code_for_status(None) is ErrorCode.UNKNOWN  # nosec B101
