"""Wrapper de httpx.

- Estandariza timeouts y headers para todas las llamadas a la API.
- En tests se sustituye el transporte de red con `transport=httpx.MockTransport(...)`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la API (JSON, UA, timeout)."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
