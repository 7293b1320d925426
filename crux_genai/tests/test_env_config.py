"""API key lookup and layered client configuration."""

from __future__ import annotations

import json

from crux_genai.config import DEFAULTS, get_client_config
from crux_genai.config.env import API_KEY_ENV_CANDIDATES, is_placeholder, resolve_api_key


def test_candidates_put_canonical_name_first():
    assert API_KEY_ENV_CANDIDATES[0] == "GEMINI_API_KEY"
    assert "GOOGLE_API_KEY" in API_KEY_ENV_CANDIDATES


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("example-key")
    assert is_placeholder("<your key>")
    assert not is_placeholder("AIzaRealLookingValue")
    assert not is_placeholder(None)


def test_resolve_api_key_prefers_canonical(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "canon")
    monkeypatch.setenv("GOOGLE_API_KEY", "alias")
    assert resolve_api_key() == ("canon", "GEMINI_API_KEY")


def test_resolve_api_key_falls_back_to_alias_and_skips_placeholders(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "changeme")
    monkeypatch.setenv("GOOGLE_API_KEY", " alias-value ")
    assert resolve_api_key() == ("alias-value", "GOOGLE_API_KEY")


def test_resolve_api_key_unset():
    assert resolve_api_key() == (None, None)


def test_defaults_when_nothing_configured():
    cfg = get_client_config()
    assert cfg == DEFAULTS
    assert "api_key" not in cfg


def test_merge_order_file_then_env_then_overrides(tmp_path, monkeypatch):
    cfg_file = tmp_path / "genai.yaml"
    cfg_file.write_text(
        "model: from-file\napi_version: v1\ngeneration_config:\n  temperature: 0.2\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(cfg_file))
    monkeypatch.setenv("GENAI_API_VERSION", "v1alpha")
    monkeypatch.setenv("GEMINI_API_KEY", "secret")

    cfg = get_client_config({"model": "from-code", "base_url": None})
    assert cfg["model"] == "from-code"
    assert cfg["api_version"] == "v1alpha"
    assert cfg["base_url"] == DEFAULTS["base_url"]
    assert cfg["generation_config"] == {"temperature": 0.2}
    assert cfg["api_key"] == "secret"


def test_json_config_file(tmp_path, monkeypatch):
    cfg_file = tmp_path / "genai.json"
    cfg_file.write_text(json.dumps({"base_url": "http://localhost:9999"}), encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(cfg_file))
    assert get_client_config()["base_url"] == "http://localhost:9999"


def test_missing_or_non_mapping_config_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(tmp_path / "absent.yaml"))
    assert get_client_config() == DEFAULTS
    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(listing))
    assert get_client_config() == DEFAULTS
