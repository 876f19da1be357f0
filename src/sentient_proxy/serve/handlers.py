"""Generic proxy handler: one upstream call, failures mapped to error envelopes.

Routes build the provider request and hand the pending call (or stream) to
``relay`` / ``relay_stream``. Anything raised by the upstream call or by
response parsing is logged here and replaced with a generic
``UpstreamFailure``, so provider internals never reach the client.
"""
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator, Awaitable
from typing import Any, TypeVar

from fastapi.responses import StreamingResponse

from sentient_proxy.errors import ProxyError, UpstreamFailure

LOGGER = logging.getLogger("sentient.proxy.handlers")

T = TypeVar("T")

TEXT_STREAM = "text/plain; charset=utf-8"

_SAMPLING_KEYS = ("model", "temperature", "max_tokens", "top_p")


def sampling(params: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """
    Pick model/sampling arguments from route params, letting request values win.

    Args:
        params: Route defaults from the route config.
        overrides: Per-request values; None means "use the default".
    """
    merged = {k: params[k] for k in _SAMPLING_KEYS if params.get(k) is not None}
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged


async def relay(call: Awaitable[T], route: str, failure: str) -> T:
    """
    Await a single upstream call.

    Args:
        call: Pending provider call.
        route: Route name for server logs.
        failure: Client-visible message if the call fails.
    """
    try:
        return await call
    except ProxyError:
        raise
    except Exception as e:
        LOGGER.error("%s: upstream call failed: %s: %s", route, type(e).__name__, e)
        raise UpstreamFailure(failure) from e


async def relay_stream(
    chunks: AsyncGenerator[str, None],
    route: str,
    failure: str,
    media_type: str = TEXT_STREAM,
) -> StreamingResponse:
    """
    Forward an upstream text stream to the response body.

    The first chunk is pulled before the response starts, so connect-time
    failures still produce a 500 envelope. Later failures end the body early.
    """
    try:
        first: str | None = await anext(chunks)
    except StopAsyncIteration:
        first = None
    except Exception as e:
        LOGGER.error("%s: upstream stream failed: %s: %s", route, type(e).__name__, e)
        raise UpstreamFailure(failure) from e

    async def body() -> AsyncGenerator[str, None]:
        try:
            if first is not None:
                yield first
                async for chunk in chunks:
                    yield chunk
        except Exception as e:
            LOGGER.error("%s: stream aborted mid-response: %s: %s", route, type(e).__name__, e)
        finally:
            await chunks.aclose()

    return StreamingResponse(body(), media_type=media_type)
