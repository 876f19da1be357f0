"""Adapter for the Anthropic Messages API."""
from __future__ import annotations

import time

from sentient_proxy.common.config import Settings
from sentient_proxy.common.schema import Completion
from sentient_proxy.errors import MissingCredential, UpstreamResponseError
from sentient_proxy.providers import transport

API_VERSION = "2023-06-01"


class ClaudeProvider:
    def __init__(self, base_url: str, api_key: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    async def complete(self, system: str, prompt: str, model: str, max_tokens: int) -> Completion:
        """
        Send one user turn with a system prompt and return the first text block.

        Args:
            system: System prompt.
            prompt: User message.
            model: Claude model id.
            max_tokens: Output cap; required by the API.
        """
        headers = {"x-api-key": self.api_key, "anthropic-version": API_VERSION}
        payload = {
            "model": model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": [{"role": "user", "content": prompt}],
        }
        start = time.time()
        async with transport.make_client() as client:
            r = await client.post(f"{self.base_url}/messages", headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()
        latency = int((time.time() - start) * 1000)

        blocks = [b for b in data.get("content") or [] if b.get("type") == "text"]
        if not blocks:
            raise UpstreamResponseError("anthropic returned no text content")
        usage = data.get("usage") or {}
        return Completion(
            text=blocks[0].get("text", ""),
            model=model,
            latency_ms=latency,
            prompt_tokens=usage.get("input_tokens"),
            completion_tokens=usage.get("output_tokens"),
        )


def claude_provider(settings: Settings) -> ClaudeProvider:
    if not settings.anthropic_api_key:
        raise MissingCredential("ANTHROPIC_API_KEY")
    return ClaudeProvider(settings.anthropic_base_url, settings.anthropic_api_key)
