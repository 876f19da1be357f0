"""Image description collector: alt text and OCR from an uploaded image."""
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from sentient_proxy.common.config import get_settings, route_params
from sentient_proxy.common.schema import ImageIn
from sentient_proxy.common.templates import DESCRIBE_IMAGE_INSTRUCTION
from sentient_proxy.errors import InvalidRequest
from sentient_proxy.providers.openai_compat import openai_provider
from sentient_proxy.serve.handlers import relay_stream, sampling

router = APIRouter(prefix="/api", tags=["vision"])

# Roughly 4.5MB of image once base64-encoded
MAX_IMAGE_DATA_URL = 6_464_471


@router.post("/describe-image")
async def describe_image(body: ImageIn) -> StreamingResponse:
    if len(body.prompt) > MAX_IMAGE_DATA_URL:
        raise InvalidRequest("Image too large, maximum file size is 4.5MB.")

    provider = openai_provider(get_settings())
    messages = [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": DESCRIBE_IMAGE_INSTRUCTION},
                {"type": "image_url", "image_url": {"url": body.prompt}},
            ],
        }
    ]
    chunks = provider.stream(messages, **sampling(route_params("describe_image")))
    return await relay_stream(
        chunks,
        route="describe-image",
        failure="Error processing image. Please try again later.",
    )
