"""Adapter for OpenAI-compatible chat-completions APIs (Groq, OpenAI).

Both providers share the same wire format:
- POST {base_url}/chat/completions with {"model", "messages", ...}
- non-streamed bodies carry choices[0].message.content
- streamed bodies are server-sent events whose data lines carry
  choices[0].delta.content and end with "data: [DONE]"
"""
from __future__ import annotations

import json
import logging
import time
from collections.abc import AsyncIterator
from typing import Any

from sentient_proxy.common.config import Settings
from sentient_proxy.common.schema import Completion
from sentient_proxy.errors import MissingCredential, UpstreamResponseError
from sentient_proxy.providers import transport

LOGGER = logging.getLogger("sentient.proxy.providers.openai_compat")

Message = dict[str, Any]


def _delta_text(data: str) -> str:
    """Pull the text delta out of one SSE data payload."""
    event = json.loads(data)
    choices = event.get("choices") or []
    if not choices:
        return ""
    delta = choices[0].get("delta") or {}
    return delta.get("content") or ""


class ChatProvider:
    """One OpenAI-compatible endpoint plus its credential."""

    def __init__(self, name: str, base_url: str, api_key: str) -> None:
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    @property
    def url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _payload(
        self,
        messages: list[Message],
        model: str,
        temperature: float | None,
        max_tokens: int | None,
        top_p: float | None,
        stream: bool,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"model": model, "messages": messages, "stream": stream}
        # Unset sampling knobs are left to the provider's defaults
        for key, value in (("temperature", temperature), ("max_tokens", max_tokens), ("top_p", top_p)):
            if value is not None:
                payload[key] = value
        return payload

    async def complete(
        self,
        messages: list[Message],
        model: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> Completion:
        payload = self._payload(messages, model, temperature, max_tokens, top_p, stream=False)
        start = time.time()
        async with transport.make_client() as client:
            r = await client.post(self.url, headers=transport.bearer(self.api_key), json=payload)
            r.raise_for_status()
            data = r.json()
        latency = int((time.time() - start) * 1000)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamResponseError(f"{self.name} returned no choices") from e
        usage = data.get("usage") or {}
        LOGGER.debug("%s %s completed in %sms", self.name, model, latency)
        return Completion(
            text=content or "",
            model=model,
            latency_ms=latency,
            prompt_tokens=usage.get("prompt_tokens"),
            completion_tokens=usage.get("completion_tokens"),
        )

    async def stream(
        self,
        messages: list[Message],
        model: str,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> AsyncIterator[str]:
        """Yield text deltas as the provider produces them."""
        payload = self._payload(messages, model, temperature, max_tokens, top_p, stream=True)
        async with transport.make_client() as client:
            async with client.stream(
                "POST", self.url, headers=transport.bearer(self.api_key), json=payload
            ) as r:
                r.raise_for_status()
                async for line in r.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    data = line[len("data:"):].strip()
                    if data == "[DONE]":
                        break
                    text = _delta_text(data)
                    if text:
                        yield text


def groq_provider(settings: Settings) -> ChatProvider:
    if not settings.groq_api_key:
        raise MissingCredential("GROQ_API_KEY")
    return ChatProvider("groq", settings.groq_base_url, settings.groq_api_key)


def openai_provider(settings: Settings) -> ChatProvider:
    if not settings.openai_api_key:
        raise MissingCredential("OPENAI_API_KEY")
    return ChatProvider("openai", settings.openai_base_url, settings.openai_api_key)
