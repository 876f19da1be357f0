"""Flowchart generator routes: prompt enhancement and Mermaid generation via Claude."""
from __future__ import annotations

import logging

from fastapi import APIRouter

from sentient_proxy.common.config import get_settings, route_params
from sentient_proxy.common.schema import (
    EnhancedPromptOut,
    FlowchartOut,
    InputIn,
    MermaidFixOut,
    MermaidIn,
)
from sentient_proxy.common.templates import (
    ENHANCE_SYSTEM,
    ENHANCE_USER,
    FLOWCHART_SYSTEM,
    FLOWCHART_USER,
    MERMAID_FIX_SYSTEM,
    MERMAID_FIX_USER,
    cap_description,
    detect_orientation,
    finish_flowchart_prompt,
    has_graph_declaration,
    render_prompt,
    strip_code_fences,
)
from sentient_proxy.errors import InvalidRequest, UpstreamFailure
from sentient_proxy.providers.anthropic import claude_provider
from sentient_proxy.serve.handlers import relay

LOGGER = logging.getLogger("sentient.proxy.routes.flowchart")

router = APIRouter(prefix="/api", tags=["flowchart"])

_DIRECTIONS = {"TD": "top-down", "LR": "left-to-right"}


@router.post("/enhance-prompt", response_model=EnhancedPromptOut)
async def enhance_prompt(body: InputIn) -> EnhancedPromptOut:
    """Rewrite a rough description into a flowchart prompt of at most 30 words."""
    provider = claude_provider(get_settings())
    params = route_params("enhance_prompt")
    completion = await relay(
        provider.complete(
            system=ENHANCE_SYSTEM,
            prompt=render_prompt(ENHANCE_USER, input=body.input),
            model=params["model"],
            max_tokens=params["max_tokens"],
        ),
        route="enhance-prompt",
        failure="Failed to enhance prompt",
    )
    return EnhancedPromptOut(enhanced_prompt=finish_flowchart_prompt(completion.text))


@router.post("/generate-flowchart", response_model=FlowchartOut)
async def generate_flowchart(body: InputIn) -> FlowchartOut:
    """
    Turn a description into Mermaid flowchart source with a single Claude call.

    The description is capped at 2,000 characters. Timeline-like descriptions
    are drawn left-to-right, everything else top-down. The answer is relayed
    with code fences stripped; it is not validated or retried.
    """
    description = cap_description(body.input)
    orientation = detect_orientation(description)
    provider = claude_provider(get_settings())
    params = route_params("generate_flowchart")
    completion = await relay(
        provider.complete(
            system=FLOWCHART_SYSTEM,
            prompt=render_prompt(
                FLOWCHART_USER,
                input=description,
                orientation=orientation,
                direction=_DIRECTIONS[orientation],
            ),
            model=params["model"],
            max_tokens=params["max_tokens"],
        ),
        route="generate-flowchart",
        failure="Failed to generate flowchart",
    )
    code = strip_code_fences(completion.text)
    if not code:
        LOGGER.error("generate-flowchart: %s returned no Mermaid code", completion.model)
        raise UpstreamFailure("Failed to generate flowchart")
    return FlowchartOut(mermaid_code=code)


@router.post("/fix-mermaid-code", response_model=MermaidFixOut)
async def fix_mermaid_code(body: MermaidIn) -> MermaidFixOut:
    """Ask Claude once to correct Mermaid source that starts with a valid graph declaration."""
    code = strip_code_fences(body.code)
    if not has_graph_declaration(code):
        raise InvalidRequest(
            "Invalid Mermaid code: Must start with 'graph' or 'flowchart' "
            "followed by a valid direction (TB, TD, BT, RL, LR)"
        )

    provider = claude_provider(get_settings())
    params = route_params("fix_mermaid_code")
    completion = await relay(
        provider.complete(
            system=MERMAID_FIX_SYSTEM,
            prompt=render_prompt(MERMAID_FIX_USER, code=code),
            model=params["model"],
            max_tokens=params["max_tokens"],
        ),
        route="fix-mermaid-code",
        failure="Failed to fix Mermaid code",
    )
    fixed = strip_code_fences(completion.text)
    if not fixed:
        LOGGER.error("fix-mermaid-code: %s returned no Mermaid code", completion.model)
        raise UpstreamFailure("Failed to fix Mermaid code")
    was_fixed = fixed != code
    return MermaidFixOut(
        fixed_code=fixed,
        was_fixed=was_fixed,
        message="Mermaid code was fixed" if was_fixed else "Code was already valid",
    )
