"""Pytest configuration for the crux_genai test suite.

Keeps tests hermetic: service and config environment variables are cleared
for every test, and structured log lines from the ``genai`` logger can be
captured without touching stderr handlers.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from crux_genai.base.logging import BASE_LOGGER_NAME, get_logger

_ISOLATED_ENV = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GENAI_MODEL",
    "GENAI_BASE_URL",
    "GENAI_API_VERSION",
    "GENAI_CONFIG_FILE",
    "GENAI_LOG_LEVEL",
    "GENAI_TIMEOUT_CONNECT_SECONDS",
    "GENAI_TIMEOUT_READ_SECONDS",
    "GENAI_TIMEOUT_HTTP_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove configuration variables the developer machine may define."""

    for name in _ISOLATED_ENV:
        monkeypatch.delenv(name, raising=False)


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    def events(self) -> List[Dict[str, Any]]:
        """Return the JSON payloads of captured records, in order."""
        out = []
        for record in self.records:
            try:
                out.append(json.loads(record.getMessage()))
            except ValueError:
                continue
        return out


@pytest.fixture()
def log_capture() -> Iterator[_ListHandler]:
    """Attach a list handler to the shared ``genai`` logger.

    The base logger does not propagate to root, so the handler is installed
    on it directly.
    """

    base = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    base.addHandler(handler)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
