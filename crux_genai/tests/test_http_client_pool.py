"""Unit tests for the shared httpx client pool and timeout configuration.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base_url yields different instances.
- Timeouts come from environment variables with positive-value validation.
"""
from __future__ import annotations

import asyncio

import httpx

from crux_genai.base.http import aclose_all_clients, get_httpx_client
from crux_genai.base.timeouts import TimeoutConfig, get_timeout_config


def setup_function(_):
    asyncio.run(aclose_all_clients())


def teardown_function(_):
    asyncio.run(aclose_all_clients())


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://api.example.com", purpose="generate")
    c2 = get_httpx_client("https://api.example.com", purpose="generate")
    assert c1 is c2, "Expected pooled client instances to be identical for same key"
    assert isinstance(c1, httpx.AsyncClient)


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="generate")
    c2 = get_httpx_client("https://api.example.com", purpose="stream")
    assert c1 is not c2, "Different purposes should not share the same client instance"


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://api.example.com", purpose="generate")
    c2 = get_httpx_client("https://api.other.com", purpose="generate")
    assert c1 is not c2, "Different base URLs should not share the same client instance"


def test_closed_clients_are_replaced():
    c1 = get_httpx_client("https://api.example.com", purpose="generate")
    asyncio.run(aclose_all_clients())
    assert c1.is_closed
    c2 = get_httpx_client("https://api.example.com", purpose="generate")
    assert c2 is not c1


def test_timeout_defaults_and_env_overrides(monkeypatch):
    assert get_timeout_config() == TimeoutConfig()
    monkeypatch.setenv("GENAI_TIMEOUT_READ_SECONDS", "5")
    monkeypatch.setenv("GENAI_TIMEOUT_CONNECT_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.read_timeout_seconds == 5.0
    assert cfg.connect_timeout_seconds == 10.0
    timeout = cfg.to_httpx()
    assert timeout.read == 5.0
    assert timeout.connect == 10.0
    assert timeout.write == 30.0
