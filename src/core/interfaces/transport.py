"""Contrato del transporte GraphQL.

Cualquier objeto con `execute` asíncrono sirve: el adaptador httpx en
producción, un doble en los tests.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GraphQLTransport(Protocol):
    """Envía un documento GraphQL y devuelve el objeto `data` de la respuesta.

    Reglas:
    - `execute` es asíncrono porque hace I/O (HTTP).
    - Los fallos HTTP/GraphQL se lanzan como `core.errors.TransportError`.
    """

    async def execute(self, query: str) -> dict[str, Any]:
        ...
