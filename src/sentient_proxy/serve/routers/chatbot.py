"""Voice chatbot routes: transcript and free-form input answered by Groq."""
from __future__ import annotations

import logging

from fastapi import APIRouter

from sentient_proxy.common.config import get_settings, route_params
from sentient_proxy.common.schema import InputIn, ResponseOut, TranscriptIn
from sentient_proxy.common.templates import AI_RESPONSE_SYSTEM, TRANSCRIBE_SYSTEM, clip_input
from sentient_proxy.errors import InvalidRequest, UpstreamFailure
from sentient_proxy.providers.openai_compat import groq_provider
from sentient_proxy.serve.handlers import relay, sampling

LOGGER = logging.getLogger("sentient.proxy.routes.chatbot")

router = APIRouter(prefix="/api", tags=["chatbot"])


@router.post("/transcribe", response_model=ResponseOut)
async def transcribe(body: TranscriptIn) -> ResponseOut:
    provider = groq_provider(get_settings())
    messages = [
        {"role": "system", "content": TRANSCRIBE_SYSTEM},
        {"role": "user", "content": body.transcript},
    ]
    completion = await relay(
        provider.complete(messages, **sampling(route_params("transcribe"))),
        route="transcribe",
        failure="Failed to process transcript",
    )
    return ResponseOut(response=completion.text)


@router.post("/ai-response", response_model=ResponseOut)
async def ai_response(body: InputIn) -> ResponseOut:
    text = clip_input(body.input)
    if not text:
        raise InvalidRequest("input is required")

    provider = groq_provider(get_settings())
    messages = [
        {"role": "system", "content": AI_RESPONSE_SYSTEM},
        {"role": "user", "content": text},
    ]
    completion = await relay(
        provider.complete(messages, **sampling(route_params("ai_response"))),
        route="ai-response",
        failure="Failed to generate response",
    )
    if not completion.text:
        LOGGER.error("ai-response: %s returned an empty completion", completion.model)
        raise UpstreamFailure("Failed to generate response")
    return ResponseOut(response=completion.text)
