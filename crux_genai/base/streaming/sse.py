"""Server-Sent Events framing for ``streamGenerateContent?alt=sse``.

Records are separated by a blank line (``\\n\\n``, ``\\r\\r`` or
``\\r\\n\\r\\n``). Lines inside a record end in ``\\r\\n``, ``\\r`` or ``\\n``
only; other Unicode line boundaries are payload text. The ``data:`` lines of a
record form its JSON payload. ``event:``, ``id:`` and ``retry:`` fields and
``:`` comment lines are ignored; any other line makes the record malformed.
Bytes are decoded incrementally so a multibyte character may straddle two
network chunks.
"""
from __future__ import annotations

import codecs
import re
from typing import AsyncIterable, AsyncIterator, Optional, Union

from pydantic import ValidationError

from ..errors import MalformedChunkError
from ..models import GenerateContentResponse

_RECORD_BOUNDARY = re.compile(r"\r\n\r\n|\n\n|\r\r")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_IGNORED_FIELDS = frozenset({"event", "id", "retry"})


def _record_data(record: str) -> Optional[str]:
    """Return the joined ``data:`` payload of one record.

    ``None`` means the record carries only comments or ignored fields.
    """
    data_lines = []
    for line in _LINE_BREAK.split(record):
        if not line.strip() or line.startswith(":"):
            continue
        field, sep, value = line.partition(":")
        if field == "data":
            data_lines.append(value[1:] if value.startswith(" ") else value)
        elif not (sep and field in _IGNORED_FIELDS):
            raise MalformedChunkError(f'Failed to parse stream: "{record}"')
    if not data_lines:
        return None
    return "\n".join(data_lines)


async def iter_sse_payloads(byte_stream: AsyncIterable[Union[bytes, str]]) -> AsyncIterator[str]:
    """Yield the data payload of each complete SSE record.

    Raises:
        MalformedChunkError: a record does not frame as SSE, or non-blank
            text remains after the transport ends.
    """
    decoder = codecs.getincrementaldecoder("utf-8")()
    buffer = ""
    async for chunk in byte_stream:
        buffer += decoder.decode(chunk) if isinstance(chunk, (bytes, bytearray)) else chunk
        while True:
            match = _RECORD_BOUNDARY.search(buffer)
            if match is None:
                break
            record, buffer = buffer[: match.start()], buffer[match.end():]
            payload = _record_data(record)
            if payload is not None:
                yield payload
    buffer += decoder.decode(b"", final=True)
    if buffer.strip():
        raise MalformedChunkError("Failed to parse stream")


def decode_fragment(payload: str) -> GenerateContentResponse:
    """Decode one record payload into a response fragment.

    Raises:
        MalformedChunkError: the payload is not a JSON object of the
            expected shape.
    """
    try:
        return GenerateContentResponse.model_validate_json(payload)
    except ValidationError as exc:
        raise MalformedChunkError(f'Error parsing JSON response: "{payload}"', raw=exc) from exc


__all__ = ["iter_sse_payloads", "decode_fragment"]
