"""Code editor routes. Both stream Groq output straight into the editor pane."""
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from sentient_proxy.common.config import get_settings, route_params
from sentient_proxy.common.schema import ChatIn, CodeGenerateIn
from sentient_proxy.common.templates import (
    CODE_CHAT_SYSTEM,
    CODE_GENERATE_SYSTEM,
    CODE_GENERATE_USER,
    render_prompt,
)
from sentient_proxy.providers.openai_compat import groq_provider
from sentient_proxy.serve.handlers import relay_stream, sampling

router = APIRouter(prefix="/api", tags=["code-editor"])


@router.post("/chat")
async def chat(body: ChatIn) -> StreamingResponse:
    provider = groq_provider(get_settings())
    messages = [{"role": "system", "content": CODE_CHAT_SYSTEM}]
    messages += [m.model_dump() for m in body.messages]
    chunks = provider.stream(messages, **sampling(route_params("chat")))
    return await relay_stream(chunks, route="chat", failure="Internal Server Error")


@router.post("/generate")
async def generate(body: CodeGenerateIn) -> StreamingResponse:
    provider = groq_provider(get_settings())
    messages = [
        {"role": "system", "content": render_prompt(CODE_GENERATE_SYSTEM, language=body.language)},
        {
            "role": "user",
            "content": render_prompt(CODE_GENERATE_USER, current_code=body.current_code, prompt=body.prompt),
        },
    ]
    chunks = provider.stream(messages, **sampling(route_params("generate")))
    return await relay_stream(chunks, route="generate", failure="Internal Server Error")
