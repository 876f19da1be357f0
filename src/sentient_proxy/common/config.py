"""Process configuration: provider credentials, endpoints and per-route defaults."""
from __future__ import annotations

import copy
import functools
import logging
import os
from dataclasses import dataclass
from typing import Any

import yaml

LOGGER = logging.getLogger("sentient.proxy.config")

# Per-route model and sampling defaults. configs/routes.yaml overrides these key by key.
DEFAULT_ROUTES: dict[str, dict[str, Any]] = {
    "transcribe": {"model": "llama3-8b-8192"},
    "ai_response": {"model": "llama3-8b-8192", "max_tokens": 150, "temperature": 0.7},
    "generate_text": {"model": "mixtral-8x7b-32768", "max_tokens": 1024, "temperature": 0.7},
    "groq_completion": {"model": "mixtral-8x7b-32768", "max_tokens": 1024, "temperature": 0.7},
    "completion": {"model": "gpt-3.5-turbo", "max_tokens": 2000, "temperature": 0.7},
    "chat": {"model": "llama-3.3-70b-versatile", "max_tokens": 2000, "temperature": 0.3, "top_p": 0.95},
    "generate": {"model": "llama-3.3-70b-versatile", "max_tokens": 2000, "temperature": 0.3},
    "enhance_prompt": {"model": "claude-3-haiku-20240307", "max_tokens": 100},
    "generate_flowchart": {"model": "claude-3-haiku-20240307", "max_tokens": 1000},
    "fix_mermaid_code": {"model": "claude-3-haiku-20240307", "max_tokens": 1000},
    "describe_image": {"model": "gpt-4-vision-preview", "max_tokens": 300},
    "text_to_speech": {
        "model": "eleven_monolingual_v1",
        "stability": 0.5,
        "similarity_boost": 0.75,
        "voices": {"male": "LruHrtVF6PSyGItzMNHS", "female": "aEO01A4wXwd1O8GPgGlF"},
    },
}


def _getenv_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        LOGGER.warning("Ignoring non-numeric %s; using %s", key, default)
        return default


def _first_env(*keys: str) -> str | None:
    for key in keys:
        val = os.getenv(key)
        if val:
            return val
    return None


@dataclass(frozen=True)
class Settings:
    groq_api_key: str | None
    openai_api_key: str | None
    anthropic_api_key: str | None
    elevenlabs_api_key: str | None
    groq_base_url: str
    openai_base_url: str
    anthropic_base_url: str
    elevenlabs_base_url: str
    upstream_timeout_s: float
    routes_config: str
    cors_origins: tuple[str, ...]


def get_settings() -> Settings:
    """Read settings from the environment. Called per request so key changes apply immediately."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        groq_api_key=_first_env("GROQ_API_KEY"),
        openai_api_key=_first_env("OPENAI_API_KEY"),
        anthropic_api_key=_first_env("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
        elevenlabs_api_key=_first_env("ELEVENLABS_API_KEY", "elevenlabs_api_key"),
        groq_base_url=os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        anthropic_base_url=os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1"),
        elevenlabs_base_url=os.getenv("ELEVENLABS_BASE_URL", "https://api.elevenlabs.io/v1"),
        upstream_timeout_s=_getenv_float("UPSTREAM_TIMEOUT_S", 60.0),
        routes_config=os.getenv("ROUTES_CONFIG", "configs/routes.yaml"),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )


def load_cfg(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@functools.lru_cache(maxsize=8)
def _read_overrides(path: str, mtime: float) -> dict[str, Any]:
    # Keyed on mtime so an edited file is picked up without a restart
    return load_cfg(path).get("routes", {}) or {}


def merge_params(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge overrides into base in place; nested maps merge key by key."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_params(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def load_route_config(path: str | None = None) -> dict[str, dict[str, Any]]:
    """
    Merge the YAML route overrides onto the built-in defaults.

    The parsed file is cached per (path, mtime), so a request only costs a stat.

    Args:
        path: YAML file path. Defaults to Settings.routes_config.

    Returns:
        Mapping of route name to its model/sampling parameters.
    """
    path = path or get_settings().routes_config
    routes = copy.deepcopy(DEFAULT_ROUTES)
    try:
        mtime = os.stat(path).st_mtime
    except FileNotFoundError:
        return routes
    try:
        overrides = _read_overrides(path, mtime)
    except (OSError, yaml.YAMLError) as e:
        LOGGER.warning("Failed to read route config %s: %s", path, e)
        return routes
    for name, params in overrides.items():
        merge_params(routes.setdefault(name, {}), params or {})
    return routes


def route_params(name: str) -> dict[str, Any]:
    return load_route_config()[name]
