"""Voice synthesis routes backed by ElevenLabs."""
from __future__ import annotations

import base64

from fastapi import APIRouter

from sentient_proxy.common.config import get_settings, route_params
from sentient_proxy.common.schema import SpeechIn, SpeechOut, VoicesOut
from sentient_proxy.providers.elevenlabs import elevenlabs_client
from sentient_proxy.serve.handlers import relay

router = APIRouter(prefix="/api", tags=["voice"])


@router.get("/elevenlabs-voices", response_model=VoicesOut)
async def elevenlabs_voices() -> VoicesOut:
    client = elevenlabs_client(get_settings())
    voices = await relay(client.list_voices(), route="elevenlabs-voices", failure="Failed to fetch voices")
    return VoicesOut(voices=voices)


@router.post("/text-to-speech", response_model=SpeechOut)
async def text_to_speech(body: SpeechIn) -> SpeechOut:
    client = elevenlabs_client(get_settings())
    params = route_params("text_to_speech")
    voice_id = params["voices"][body.voice_type]
    audio = await relay(
        client.synthesize(
            body.text,
            voice_id=voice_id,
            model_id=params["model"],
            stability=params["stability"],
            similarity_boost=params["similarity_boost"],
        ),
        route="text-to-speech",
        failure="Voice synthesis failed",
    )
    return SpeechOut(
        audio_base64=base64.b64encode(audio).decode("ascii"),
        voice_type=body.voice_type,
        voice_id=voice_id,
    )
