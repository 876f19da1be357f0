"""Creative writer routes: text editing via Groq, streamed rewriting via OpenAI."""
from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from sentient_proxy.common.config import get_settings, route_params
from sentient_proxy.common.schema import CompletionIn, GenerateTextIn, GroqCompletionIn, ResultOut
from sentient_proxy.common.templates import (
    CREATIVE_SYSTEM,
    CREATIVE_USER,
    EDITOR_SYSTEM,
    GENERATE_TEXT_USER,
    GROQ_COMPLETION_USER,
    render_prompt,
)
from sentient_proxy.providers.openai_compat import groq_provider, openai_provider
from sentient_proxy.serve.handlers import relay, relay_stream, sampling

LOGGER = logging.getLogger("sentient.proxy.routes.writer")

router = APIRouter(prefix="/api", tags=["writer"])

_FAILURE = "An error occurred while processing your request"


@router.post("/generate-text", response_model=ResultOut)
async def generate_text(body: GenerateTextIn) -> ResultOut:
    provider = groq_provider(get_settings())
    messages = [
        {"role": "system", "content": EDITOR_SYSTEM},
        {"role": "user", "content": render_prompt(GENERATE_TEXT_USER, prompt=body.prompt, text=body.text)},
    ]
    LOGGER.info("generate-text: text_length=%s", len(body.text))
    completion = await relay(
        provider.complete(
            messages,
            **sampling(
                route_params("generate_text"),
                temperature=body.temperature,
                max_tokens=body.max_tokens,
            ),
        ),
        route="generate-text",
        failure=_FAILURE,
    )
    LOGGER.info("generate-text: result_length=%s", len(completion.text))
    return ResultOut(result=completion.text)


@router.post("/groq-completion", response_model=ResultOut)
async def groq_completion(body: GroqCompletionIn) -> ResultOut:
    provider = groq_provider(get_settings())
    messages = [
        {"role": "system", "content": body.custom_instructions or EDITOR_SYSTEM},
        {"role": "user", "content": render_prompt(GROQ_COMPLETION_USER, text=body.text)},
    ]
    completion = await relay(
        provider.complete(
            messages,
            **sampling(
                route_params("groq_completion"),
                model=body.model,
                temperature=body.temperature,
                max_tokens=body.max_tokens,
            ),
        ),
        route="groq-completion",
        failure=_FAILURE,
    )
    return ResultOut(result=completion.text)


@router.post("/completion")
async def completion(body: CompletionIn) -> StreamingResponse:
    provider = openai_provider(get_settings())
    messages = [
        {"role": "system", "content": CREATIVE_SYSTEM},
        {
            "role": "user",
            "content": render_prompt(CREATIVE_USER, text=body.text.strip(), prompt=body.prompt.strip()),
        },
    ]
    chunks = provider.stream(messages, **sampling(route_params("completion"), model=body.model))
    return await relay_stream(chunks, route="completion", failure="Internal server error")
