from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

ROOT = Path(__file__).resolve().parent.parent

_KEYS = (
    "GROQ_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "CLAUDE_API_KEY",
    "ELEVENLABS_API_KEY",
    "elevenlabs_api_key",
)


@pytest.fixture(autouse=True)
def set_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ROUTES_CONFIG", str(ROOT / "configs" / "routes.yaml"))
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
    monkeypatch.setenv("ELEVENLABS_API_KEY", "xi-test")


class Upstream:
    """Records requests sent through a patched httpx client."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def upstream(monkeypatch: pytest.MonkeyPatch) -> Callable[[Callable[[httpx.Request], httpx.Response]], Upstream]:
    """Route every provider call through httpx.MockTransport instead of the network."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> Upstream:
        recorder = Upstream(handler)

        def fake_make_client(timeout: float | None = None) -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(recorder))

        monkeypatch.setattr("sentient_proxy.providers.transport.make_client", fake_make_client)
        return recorder

    return install


def chat_body(content: str | None) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": content}, "index": 0}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def sse_body(*chunks: str, trailing: tuple[str, ...] = ()) -> str:
    """Server-sent event body; chunks in ``trailing`` come after [DONE]."""
    def event(text: str) -> str:
        return "data: " + json.dumps({"choices": [{"delta": {"content": text}, "index": 0}]})

    lines = [event(c) for c in chunks] + ["data: [DONE]"] + [event(c) for c in trailing]
    return "\n\n".join(lines) + "\n\n"
