"""FastAPI proxy between the prototype front-ends and hosted LLM/speech providers.

Endpoints:
- GET  /health
- POST /api/transcribe        { "transcript": "..." }
- POST /api/ai-response       { "input": "..." }
- POST /api/generate-text     { "prompt", "text", "temperature"?, "maxTokens"? }
- POST /api/groq-completion   { "text", "temperature"?, "model"?, "maxTokens"?, "customInstructions"? }
- POST /api/completion        { "text", "prompt", "model"? }               (text stream)
- POST /api/chat              { "messages": [...] }                        (text stream)
- POST /api/generate          { "prompt", "language"?, "currentCode"? }    (text stream)
- POST /api/enhance-prompt    { "input": "..." }
- POST /api/generate-flowchart { "input": "..." }
- POST /api/fix-mermaid-code  { "code": "graph TD ..." }
- POST /api/describe-image    { "prompt": "data:image/..." }               (text stream)
- POST /api/text-to-speech    { "text", "voiceType"? }
- GET  /api/elevenlabs-voices
- GET  /api/check-env
- GET  /api/check-voice-env
"""
from __future__ import annotations
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sentient_proxy import __version__
from sentient_proxy.common.config import get_settings, load_route_config
from sentient_proxy.common.logging_setup import setup_logging
from sentient_proxy.errors import ProxyError
from sentient_proxy.serve.routers import chatbot, code_editor, env, flowchart, vision, voice, writer

LOGGER = logging.getLogger("sentient.proxy.app")
setup_logging()

_KEY_NAMES = {
    "GROQ_API_KEY": "groq_api_key",
    "OPENAI_API_KEY": "openai_api_key",
    "ANTHROPIC_API_KEY": "anthropic_api_key",
    "ELEVENLABS_API_KEY": "elevenlabs_api_key",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Warn about missing credentials and route config; requests still fail per route."""
    settings = get_settings()
    missing = [name for name, attr in _KEY_NAMES.items() if not getattr(settings, attr)]
    if missing:
        LOGGER.warning("Provider keys not set: %s; dependent routes will return 500", ", ".join(missing))
    if not os.path.exists(settings.routes_config):
        LOGGER.warning("Route config %s not found; using built-in defaults", settings.routes_config)
    else:
        routes = load_route_config(settings.routes_config)
        LOGGER.info("Loaded %d route configs from %s", len(routes), settings.routes_config)
    yield


def _validation_envelope(errors: list[dict[str, Any]]) -> dict[str, str]:
    parts = []
    for err in errors:
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid')}")
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    if field and first.get("type") in ("missing", "string_too_short", "too_short"):
        message = f"{field} is required"
    else:
        message = "Invalid request"
    return {"error": message, "details": "; ".join(parts)}


def create_app() -> FastAPI:
    app = FastAPI(title="Sentient prototype proxy", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_settings().cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.envelope())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        LOGGER.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=_validation_envelope(list(exc.errors())))

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    for module in (chatbot, writer, code_editor, flowchart, vision, voice, env):
        app.include_router(module.router)
    return app


app = create_app()


def main() -> None:
    """Entry point for the CLI command."""
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_config=None,
    )

if __name__ == "__main__":
    main()
