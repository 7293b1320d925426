"""GenerativeModel against an in-process ``httpx.MockTransport``."""

from __future__ import annotations

import asyncio
import json
from typing import Callable, List

import httpx
import pytest

from crux_genai.base.errors import ErrorCode, GenAIError
from crux_genai.base.models import Content, Part
from crux_genai.base.streaming import StreamCallbacks
from crux_genai.gemini import GenerativeModel, build_request_body
from crux_genai.mock import sse_record, text_response

Handler = Callable[[httpx.Request], httpx.Response]


def _run_with(handler: Handler, body: Callable, **model_kwargs):
    """Run ``body(model)`` with a GenerativeModel wired to ``handler``."""

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            model = GenerativeModel(
                model_kwargs.pop("model", "gemini-test"),
                api_key=model_kwargs.pop("api_key", "k-123"),
                http_client=client,
                **model_kwargs,
            )
            return await body(model)

    return asyncio.run(run())


def _user(text: str) -> List[Content]:
    return [Content(role="user", parts=[Part(text=text)])]


def test_generate_content_posts_camel_case_body():
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=text_response("hello back"))

    async def body(model):
        return await model.generate_content(_user("hello"), generation_config={"max_output_tokens": 64})

    result = _run_with(handler, body, system_instruction="be brief", safety_settings=[{"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_NONE"}])
    assert result.response.text() == "hello back"
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-test:generateContent"
    assert request.headers["x-goog-api-key"] == "k-123"
    payload = json.loads(request.content)
    assert payload["contents"] == [{"role": "user", "parts": [{"text": "hello"}]}]
    assert payload["generationConfig"] == {"maxOutputTokens": 64}
    assert payload["systemInstruction"] == {"parts": [{"text": "be brief"}]}
    assert payload["safetySettings"][0]["threshold"] == "BLOCK_NONE"


def test_http_error_maps_to_genai_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}})

    async def body(model):
        with pytest.raises(GenAIError) as excinfo:
            await model.generate_content(_user("hi"))
        return excinfo.value

    err = _run_with(handler, body)
    assert err.code is ErrorCode.RATE_LIMIT
    assert err.status == 429
    assert err.retryable is True
    assert "Quota exceeded" in err.message
    assert err.model == "gemini-test"


def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def body(model):
        with pytest.raises(GenAIError) as excinfo:
            await model.generate_content(_user("hi"))
        return excinfo.value

    err = _run_with(handler, body)
    assert err.code is ErrorCode.TRANSIENT
    assert isinstance(err.__cause__, httpx.ConnectError)


def test_stream_uses_sse_endpoint_and_aggregates():
    seen: List[httpx.Request] = []
    chunks: List[str] = []
    stream_body = b"".join(
        [
            sse_record(text_response("Hel", finish_reason=None)),
            sse_record(text_response("lo")),
        ]
    )

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=stream_body, headers={"content-type": "text/event-stream"})

    async def body(model):
        result = await model.generate_content_stream(
            _user("hi"), StreamCallbacks(on_chunk=lambda f: chunks.append(f.text()))
        )
        return await result.response

    response = _run_with(handler, body)
    assert response.text() == "Hello"
    assert chunks == ["Hel", "lo"]
    assert seen[0].url.path == "/v1beta/models/gemini-test:streamGenerateContent"
    assert seen[0].url.params["alt"] == "sse"


def test_stream_http_error_raises_before_handle():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": "Invalid argument"}})

    async def body(model):
        with pytest.raises(GenAIError) as excinfo:
            await model.generate_content_stream(_user("hi"))
        return excinfo.value

    err = _run_with(handler, body)
    assert err.code is ErrorCode.VALIDATION
    assert err.status == 400
    assert err.retryable is False


def test_unknown_request_option_rejected():
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - never reached
        return httpx.Response(200, json=text_response("x"))

    async def body(model):
        with pytest.raises(TypeError):
            await model.generate_content(_user("hi"), temperature=0.3)

    _run_with(handler, body)


def test_start_chat_round_trips_history():
    bodies: List[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=text_response(f"reply {len(bodies)}"))

    async def body(model):
        chat = model.start_chat()
        await chat.send_message("one")
        await chat.send_message("two")
        return chat

    chat = _run_with(handler, body)
    assert [len(b["contents"]) for b in bodies] == [1, 3]
    assert bodies[1]["contents"][1] == {"role": "model", "parts": [{"text": "reply 1"}]}
    assert chat.history_length == 4


def test_configuration_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GENAI_MODEL", "models/gemini-env")
    model = GenerativeModel()
    assert model.model_name == "gemini-env"
    assert model._headers()["x-goog-api-key"] == "env-key"
    assert model._url("generateContent") == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-env:generateContent"
    )


def test_build_request_body_omits_unset_sections():
    body = build_request_body(_user("hi"), tools=[{"function_declarations": [{"name": "f"}]}])
    assert set(body) == {"contents", "tools"}
    assert body["tools"] == [{"functionDeclarations": [{"name": "f"}]}]
