"""Shared HTTP client factory for provider adapters."""
from __future__ import annotations

import httpx

from sentient_proxy.common.config import get_settings


def make_client(timeout: float | None = None) -> httpx.AsyncClient:
    """
    Build a fresh async client for one upstream call.

    Args:
        timeout: Seconds before the call is abandoned. Defaults to UPSTREAM_TIMEOUT_S.
    """
    if timeout is None:
        timeout = get_settings().upstream_timeout_s
    return httpx.AsyncClient(timeout=timeout)


def bearer(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}
