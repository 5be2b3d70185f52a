"""Transporte GraphQL sobre httpx.

Petición:
- POST `{"query": "<documento>"}` al endpoint configurado.
- Autenticación con el query param `subscription-key`.

Respuesta:
- `{"data": {...}}` -> se devuelve `data` (o `{}` si falta).
- status != 200, cuerpo no JSON o `errors` en el sobre -> `TransportError`
  con la query original adjunta. Sin reintentos.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.errors import TransportError
from core.interfaces.transport import GraphQLTransport

logger = logging.getLogger(__name__)


class HttpGraphQLTransport(GraphQLTransport):
    """Ejecuta documentos GraphQL contra la API de contenido."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    def _params(self) -> dict[str, str]:
        key = self._settings.subscription_key
        if key is None:
            return {}
        return {"subscription-key": key.get_secret_value()}

    async def execute(self, query: str) -> dict[str, Any]:
        try:
            payload = json.dumps({"query": query}, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise TransportError(f"Failed to encode GraphQL payload: {exc}") from exc

        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.post(
                    self._settings.api_url,
                    content=payload.encode("utf-8"),
                    params=self._params(),
                )
        except httpx.HTTPError as exc:
            raise TransportError(f"GraphQL request failed: {exc}", query=query) from exc

        logger.debug("GraphQL response: HTTP %s (%d bytes)", response.status_code, len(response.content))
        body = response.text

        if response.status_code != 200:
            raise TransportError(
                f"HTTP request failed with status code: {response.status_code}",
                query=query,
                status_code=response.status_code,
                detail=_error_detail(body),
            )

        try:
            result = json.loads(body)
        except ValueError as exc:
            raise TransportError(
                f"Failed to decode API response: {exc}",
                status_code=response.status_code,
            ) from exc

        if not isinstance(result, dict):
            raise TransportError(
                "Unexpected GraphQL response envelope",
                query=query,
                status_code=response.status_code,
                detail=body,
            )

        if result.get("errors") is not None:
            raise TransportError(
                "GraphQL errors",
                query=query,
                status_code=response.status_code,
                detail=json.dumps(result["errors"], ensure_ascii=False),
            )

        data = result.get("data")
        return data if isinstance(data, dict) else {}


def _error_detail(body: str) -> str:
    """El array `errors` embebido si existe; si no, el cuerpo tal cual."""

    try:
        parsed = json.loads(body)
    except ValueError:
        return body
    if isinstance(parsed, dict) and parsed.get("errors") is not None:
        return json.dumps(parsed["errors"], ensure_ascii=False)
    return body
