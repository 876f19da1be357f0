from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import chat_body, sse_body
from sentient_proxy.common.config import get_settings
from sentient_proxy.errors import MissingCredential, UpstreamResponseError
from sentient_proxy.providers.anthropic import ClaudeProvider
from sentient_proxy.providers.elevenlabs import ElevenLabsClient
from sentient_proxy.providers.openai_compat import ChatProvider, groq_provider, openai_provider


async def _collect(provider: ChatProvider) -> list[str]:
    return [c async for c in provider.stream([{"role": "user", "content": "hi"}], model="m")]


def test_complete_reports_usage(upstream) -> None:
    recorder = upstream(lambda request: httpx.Response(200, json=chat_body("Hello test")))
    provider = ChatProvider("groq", "https://example.test/v1/", "k")
    out = asyncio.run(provider.complete([{"role": "user", "content": "hi"}], model="m", temperature=0.2))
    assert out.text == "Hello test"
    assert out.prompt_tokens == 10
    assert out.completion_tokens == 5
    assert str(recorder.requests[0].url) == "https://example.test/v1/chat/completions"
    sent = recorder.json()
    assert sent["temperature"] == 0.2
    assert "max_tokens" not in sent
    assert sent["stream"] is False


def test_complete_without_choices_raises(upstream) -> None:
    upstream(lambda request: httpx.Response(200, json={"choices": []}))
    provider = ChatProvider("openai", "https://example.test/v1", "k")
    with pytest.raises(UpstreamResponseError):
        asyncio.run(provider.complete([{"role": "user", "content": "hi"}], model="m"))


def test_stream_skips_comments_and_empty_deltas(upstream) -> None:
    body = ": keep-alive\n\n" + 'data: {"choices": [{"delta": {"role": "assistant"}}]}\n\n' + sse_body("a", "b", "c")
    upstream(lambda request: httpx.Response(200, text=body))
    provider = ChatProvider("groq", "https://example.test/v1", "k")
    assert asyncio.run(_collect(provider)) == ["a", "b", "c"]


def test_stream_raises_on_http_error(upstream) -> None:
    upstream(lambda request: httpx.Response(429, text="rate limited"))
    provider = ChatProvider("groq", "https://example.test/v1", "k")
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_collect(provider))


def test_provider_factories_require_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GROQ_API_KEY")
    monkeypatch.delenv("OPENAI_API_KEY")
    with pytest.raises(MissingCredential):
        groq_provider(get_settings())
    with pytest.raises(MissingCredential) as exc:
        openai_provider(get_settings())
    assert exc.value.envelope() == {"error": "OPENAI_API_KEY is not set"}


def test_claude_returns_first_text_block(upstream) -> None:
    recorder = upstream(
        lambda request: httpx.Response(
            200,
            json={
                "content": [{"type": "text", "text": "Create a flowchart of x"}],
                "usage": {"input_tokens": 7, "output_tokens": 3},
            },
        )
    )
    provider = ClaudeProvider("https://example.test/v1", "k")
    out = asyncio.run(provider.complete(system="sys", prompt="p", model="claude", max_tokens=10))
    assert out.text == "Create a flowchart of x"
    assert out.prompt_tokens == 7
    assert recorder.requests[0].headers["anthropic-version"] == "2023-06-01"
    assert recorder.json()["system"] == "sys"


def test_claude_without_text_raises(upstream) -> None:
    upstream(lambda request: httpx.Response(200, json={"content": []}))
    provider = ClaudeProvider("https://example.test/v1", "k")
    with pytest.raises(UpstreamResponseError):
        asyncio.run(provider.complete(system="sys", prompt="p", model="claude", max_tokens=10))


def test_elevenlabs_synthesize_sends_voice_settings(upstream) -> None:
    recorder = upstream(lambda request: httpx.Response(200, content=b"mp3"))
    client = ElevenLabsClient("https://example.test/v1", "xi")
    audio = asyncio.run(
        client.synthesize("hi", voice_id="v1", model_id="eleven_monolingual_v1", stability=0.5, similarity_boost=0.75)
    )
    assert audio == b"mp3"
    assert recorder.json()["voice_settings"] == {"stability": 0.5, "similarity_boost": 0.75}


def test_elevenlabs_voices_must_be_a_list(upstream) -> None:
    upstream(lambda request: httpx.Response(200, json={"voices": None}))
    client = ElevenLabsClient("https://example.test/v1", "xi")
    with pytest.raises(UpstreamResponseError):
        asyncio.run(client.list_voices())
