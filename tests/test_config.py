from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from sentient_proxy.common import config
from sentient_proxy.common.config import DEFAULT_ROUTES, get_settings, load_route_config


def test_repo_route_config_matches_defaults() -> None:
    routes = load_route_config()
    assert routes["ai_response"]["model"] == "llama3-8b-8192"
    assert routes["text_to_speech"]["voices"]["male"] == DEFAULT_ROUTES["text_to_speech"]["voices"]["male"]


def test_yaml_overrides_single_keys(tmp_path: Path) -> None:
    cfg = tmp_path / "routes.yaml"
    cfg.write_text("routes:\n  chat:\n    model: llama3-70b-8192\n", encoding="utf-8")
    routes = load_route_config(str(cfg))
    assert routes["chat"]["model"] == "llama3-70b-8192"
    assert routes["chat"]["temperature"] == 0.3
    assert routes["generate"] == DEFAULT_ROUTES["generate"]


def test_missing_config_falls_back_to_defaults(tmp_path: Path) -> None:
    routes = load_route_config(str(tmp_path / "absent.yaml"))
    assert routes == DEFAULT_ROUTES
    routes["chat"]["model"] = "mutated"
    assert DEFAULT_ROUTES["chat"]["model"] == "llama-3.3-70b-versatile"


def test_unparseable_config_falls_back_to_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    cfg = tmp_path / "routes.yaml"
    cfg.write_text("routes: [unclosed\n", encoding="utf-8")
    assert load_route_config(str(cfg)) == DEFAULT_ROUTES
    assert "Failed to read route config" in caplog.text


def test_settings_accept_legacy_key_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ANTHROPIC_API_KEY")
    monkeypatch.setenv("CLAUDE_API_KEY", "claude-key")
    monkeypatch.delenv("ELEVENLABS_API_KEY")
    monkeypatch.setenv("elevenlabs_api_key", "lower-key")
    settings = get_settings()
    assert settings.anthropic_api_key == "claude-key"
    assert settings.elevenlabs_api_key == "lower-key"


def test_bad_timeout_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPSTREAM_TIMEOUT_S", "soon")
    assert get_settings().upstream_timeout_s == 60.0


def test_cors_origins_split(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:3000, https://example.org")
    assert get_settings().cors_origins == ("http://localhost:3000", "https://example.org")


def test_nested_override_keeps_sibling_keys(tmp_path: Path) -> None:
    cfg = tmp_path / "routes.yaml"
    cfg.write_text("routes:\n  text_to_speech:\n    voices:\n      male: NEWMALE\n", encoding="utf-8")
    tts = load_route_config(str(cfg))["text_to_speech"]
    assert tts["voices"] == {"male": "NEWMALE", "female": "aEO01A4wXwd1O8GPgGlF"}
    assert tts["stability"] == 0.5
    assert DEFAULT_ROUTES["text_to_speech"]["voices"]["male"] == "LruHrtVF6PSyGItzMNHS"


def test_route_config_is_parsed_once_per_file_version(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = tmp_path / "routes.yaml"
    cfg.write_text("routes:\n  chat:\n    model: cached-model\n", encoding="utf-8")
    reads = []
    real_load_cfg = config.load_cfg

    def counting_load_cfg(path: str) -> dict:
        reads.append(path)
        return real_load_cfg(path)

    monkeypatch.setattr(config, "load_cfg", counting_load_cfg)
    first = load_route_config(str(cfg))
    second = load_route_config(str(cfg))
    assert len(reads) == 1
    assert first == second
    first["chat"]["model"] = "mutated"
    assert load_route_config(str(cfg))["chat"]["model"] == "cached-model"

    cfg.write_text("routes:\n  chat:\n    model: edited-model\n", encoding="utf-8")
    os.utime(cfg, (time.time() + 5, time.time() + 5))
    assert load_route_config(str(cfg))["chat"]["model"] == "edited-model"
    assert len(reads) == 2
