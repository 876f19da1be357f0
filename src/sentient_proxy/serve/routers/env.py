"""Credential presence checks used by the front-ends before enabling features."""
from __future__ import annotations

import logging

from fastapi import APIRouter

from sentient_proxy.common.config import get_settings
from sentient_proxy.common.schema import EnvStatusOut, VoiceEnvOut

LOGGER = logging.getLogger("sentient.proxy.routes.env")

router = APIRouter(prefix="/api", tags=["env"])


@router.get("/check-env", response_model=EnvStatusOut)
def check_env() -> EnvStatusOut:
    is_ready = bool(get_settings().openai_api_key)
    if not is_ready:
        LOGGER.warning("OPENAI_API_KEY is not set in the environment.")
    return EnvStatusOut(is_ready=is_ready)


@router.get("/check-voice-env", response_model=VoiceEnvOut)
def check_voice_env() -> VoiceEnvOut:
    # Only presence and length; never any part of the key itself
    key = get_settings().elevenlabs_api_key or ""
    return VoiceEnvOut(has_eleven_labs_key=bool(key), key_length=len(key))
