"""Adapter for the ElevenLabs voice-synthesis API."""
from __future__ import annotations

import logging
from typing import Any

from sentient_proxy.common.config import Settings
from sentient_proxy.errors import MissingCredential, UpstreamResponseError
from sentient_proxy.providers import transport

LOGGER = logging.getLogger("sentient.proxy.providers.elevenlabs")


class ElevenLabsClient:
    def __init__(self, base_url: str, api_key: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    @property
    def headers(self) -> dict[str, str]:
        return {"xi-api-key": self.api_key}

    async def list_voices(self) -> list[dict[str, Any]]:
        async with transport.make_client() as client:
            r = await client.get(f"{self.base_url}/voices", headers=self.headers)
            r.raise_for_status()
            data = r.json()
        voices = data.get("voices")
        if not isinstance(voices, list):
            raise UpstreamResponseError("elevenlabs returned no voice list")
        return voices

    async def synthesize(
        self,
        text: str,
        voice_id: str,
        model_id: str,
        stability: float,
        similarity_boost: float,
    ) -> bytes:
        """Render text to audio with one voice and return the raw audio bytes."""
        payload = {
            "text": text,
            "model_id": model_id,
            "voice_settings": {"stability": stability, "similarity_boost": similarity_boost},
        }
        async with transport.make_client() as client:
            r = await client.post(
                f"{self.base_url}/text-to-speech/{voice_id}", headers=self.headers, json=payload
            )
            r.raise_for_status()
            audio = r.content
        if not audio:
            raise UpstreamResponseError("elevenlabs returned empty audio")
        LOGGER.info("Synthesized %s bytes with voice %s", len(audio), voice_id)
        return audio


def elevenlabs_client(settings: Settings) -> ElevenLabsClient:
    if not settings.elevenlabs_api_key:
        raise MissingCredential("ELEVENLABS_API_KEY")
    return ElevenLabsClient(settings.elevenlabs_base_url, settings.elevenlabs_api_key)
