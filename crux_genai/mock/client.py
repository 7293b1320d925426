"""Deterministic mock collaborator for offline use and tests.

Purpose
-------
Implement the :class:`ContentGenerator` contract without any network
traffic. Buffered calls pop the next scripted response; streaming calls pop
the next scripted chunk list, encode it as SSE bytes and feed it through the
real :func:`process_stream` pipeline, so chat and streaming behavior is
exercised end to end.

Script entries
--------------
* buffered: a :class:`GenerateContentResponse`, a response mapping, or an
  exception instance to raise.
* streaming: a list whose items are response mappings or models (encoded as
  one SSE record each), raw ``bytes``/``str`` passed through untouched, or an
  exception instance raised by the byte stream at that point. An exception
  instance in place of the whole list is raised by the call itself.

Every call records a deep copy of the ``contents`` it received in
:attr:`MockModel.calls`, plus its options in :attr:`MockModel.call_options`.
"""

from __future__ import annotations

import asyncio
import json
from collections import deque
from typing import Any, AsyncIterator, Deque, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Content, GenerateContentResponse, GenerateContentResult
from ..base.streaming import GenerateContentStreamResult, StreamCallbacks, process_stream

ScriptedResponse = Union[GenerateContentResponse, Mapping[str, Any], BaseException]
ScriptedChunk = Union[GenerateContentResponse, Mapping[str, Any], bytes, str, BaseException]
ScriptedStream = Union[Sequence[ScriptedChunk], BaseException]


def text_response(text: str, *, finish_reason: Optional[str] = "STOP", role: str = "model") -> Dict[str, Any]:
    """Return a minimal single-candidate response mapping carrying ``text``."""
    candidate: Dict[str, Any] = {"content": {"role": role, "parts": [{"text": text}]}}
    if finish_reason:
        candidate["finishReason"] = finish_reason
    return {"candidates": [candidate]}


def sse_record(payload: Union[GenerateContentResponse, Mapping[str, Any]]) -> bytes:
    """Encode one fragment as an SSE ``data:`` record."""
    if isinstance(payload, GenerateContentResponse):
        data = json.dumps(payload.to_wire())
    else:
        data = json.dumps(dict(payload))
    return f"data: {data}\r\n\r\n".encode("utf-8")


def text_stream(text: str, chunk_size: int = 16) -> List[Dict[str, Any]]:
    """Split ``text`` into response fragments for deterministic streaming."""
    if not text:
        return []
    pieces = [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]
    fragments = [text_response(p, finish_reason=None) for p in pieces]
    fragments[-1]["candidates"][0]["finishReason"] = "STOP"
    return fragments


class MockModel:
    """Collaborator that replays scripted responses instead of calling a service."""

    def __init__(
        self,
        responses: Optional[Iterable[ScriptedResponse]] = None,
        stream_chunks: Optional[Iterable[ScriptedStream]] = None,
        *,
        model_name: str = "mock-model",
        delay: float = 0.0,
    ) -> None:
        """Create a mock with scripted outputs.

        Parameters
        ----------
        responses: Iterable[ScriptedResponse] | None
            Replies for ``generate_content`` in call order.
        stream_chunks: Iterable[ScriptedStream] | None
            Chunk scripts for ``generate_content_stream`` in call order.
        model_name: str, default ``"mock-model"``
            Name reported through ``model_name`` and in logs.
        delay: float, default ``0.0``
            Seconds to await before answering, so tests can interleave calls.
        """
        self._responses: Deque[ScriptedResponse] = deque(responses or [])
        self._streams: Deque[ScriptedStream] = deque(stream_chunks or [])
        self._model_name = model_name
        self._delay = delay
        self._logger = get_logger("genai.mock")
        self.calls: List[List[Content]] = []
        self.call_options: List[Dict[str, Any]] = []

    @property
    def model_name(self) -> str:
        return self._model_name

    def _record(self, contents: Sequence[Content], options: Mapping[str, Any]) -> None:
        self.calls.append([c.model_copy(deep=True) for c in contents])
        self.call_options.append(dict(options))
        ctx = LogContext(model=self._model_name, extra={"call": len(self.calls)})
        normalized_log_event(self._logger, "mock.call", ctx, phase="start", turns=len(contents))

    async def generate_content(self, contents: List[Content], **options: Any) -> GenerateContentResult:
        self._record(contents, options)
        await asyncio.sleep(self._delay)
        if not self._responses:
            raise RuntimeError("MockModel has no scripted response left")
        entry = self._responses.popleft()
        if isinstance(entry, BaseException):
            raise entry
        if isinstance(entry, GenerateContentResponse):
            response = entry.model_copy(deep=True)
        else:
            response = GenerateContentResponse.model_validate(entry)
        return GenerateContentResult(response=response)

    async def generate_content_stream(
        self,
        contents: List[Content],
        callbacks: Optional[StreamCallbacks] = None,
        **options: Any,
    ) -> GenerateContentStreamResult:
        self._record(contents, options)
        await asyncio.sleep(self._delay)
        if not self._streams:
            raise RuntimeError("MockModel has no scripted stream left")
        script = self._streams.popleft()
        if isinstance(script, BaseException):
            raise script
        return process_stream(_replay(list(script)), callbacks, model=self._model_name)


async def _replay(script: List[ScriptedChunk]) -> AsyncIterator[bytes]:
    for item in script:
        await asyncio.sleep(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, bytes):
            yield item
        elif isinstance(item, str):
            yield item.encode("utf-8")
        else:
            yield sse_record(item)


__all__ = ["MockModel", "text_response", "text_stream", "sse_record"]
