"""Taxonomía de errores del cliente.

Reglas:
- Los errores de validación se lanzan antes de tocar la red y nunca se reintentan.
- El transporte no reintenta: propaga `TransportError` con la query original.
"""

from __future__ import annotations


class ContentApiError(Exception):
    """Error base de todo lo que lanza el cliente."""


class ValidationError(ContentApiError, ValueError):
    """El input del llamante viola una precondición (idioma, query vacía, etc.)."""


class EmptySelectionError(ValidationError):
    """La selección de campos está vacía."""

    def __init__(self, message: str = "Fields cannot be empty") -> None:
        super().__init__(message)


class CycleDetectedError(ContentApiError):
    """La cadena de padres de una taxonomía contiene un ciclo."""

    def __init__(self, term_id: int) -> None:
        super().__init__(f"Cycle detected in taxonomy parent chain at term id {term_id}")
        self.term_id = term_id


class TransportError(ContentApiError):
    """Fallo HTTP/GraphQL devuelto por el transporte.

    `query` se adjunta para diagnóstico; `status_code` es None cuando el fallo
    no llegó a producir una respuesta HTTP.
    """

    def __init__(
        self,
        message: str,
        *,
        query: str | None = None,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        text = message
        if detail:
            text += f"\nResponse: {detail}"
        if query:
            text += f"\nQuery: {query}"
        super().__init__(text)
        self.query = query
        self.status_code = status_code
        self.detail = detail


class ExportError(ContentApiError):
    """El resultado no se puede volcar a JSON (p.ej. anidamiento excesivo)."""
