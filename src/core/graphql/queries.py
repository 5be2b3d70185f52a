"""Construcción de documentos GraphQL por operación.

Forma de cada documento:

    query {
        <operación>(<argumentos>) {
            <selección>
        }
    }

Sin argumentos resueltos, la operación se emite sin paréntesis
(`taxonomies {`); la API distingue ambas formas. Toda validación ocurre
antes de serializar nada.
"""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Iterable, Mapping
from typing import Any

from core.domain.language import Language
from core.errors import ValidationError
from core.graphql.arguments import (
    build_filter,
    build_filter_with_language,
    build_sort,
    filter_clause,
    quote,
)
from core.graphql.selection import build_selection

logger = logging.getLogger(__name__)

SelectionInput = Any
FilterInput = Mapping[str, Any] | None
SortInput = Mapping[str, Any] | None


def build_operation(name: str, selection: SelectionInput, arguments: Iterable[str] = ()) -> str:
    """Envuelve la operación `name` con sus argumentos no vacíos y la selección."""

    fields = build_selection(selection)
    args = [arg for arg in arguments if arg]
    head = f"{name}({', '.join(args)})" if args else name
    body = textwrap.indent(fields, " " * 8)
    document = f"query {{\n    {head} {{\n{body}\n    }}\n}}"
    logger.debug("Assembled %s query (%d chars, %d argument clauses)", name, len(document), len(args))
    return document


def list_query(
    operation: str,
    selection: SelectionInput,
    filter: FilterInput = None,
    sort_by: SortInput = None,
) -> str:
    """Listado de `places`, `events` o `guides`.

    El filtro usa la serialización genérica; `lang` viaja como string aquí.
    """

    return build_operation(
        operation,
        selection,
        [filter_clause(build_filter(filter)), build_sort(sort_by)],
    )


def by_id_query(operation: str, id: int, lang: str | Language, selection: SelectionInput) -> str:
    """`placeById`, `eventById` o `guideById` con `filter: { id: N, lang: xx }`."""

    try:
        entity_id = int(id)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid id: {id!r}") from exc
    lang_value = lang.value if isinstance(lang, Language) else str(lang).strip().lower()
    return build_operation(
        operation,
        selection,
        [filter_clause(f"id: {entity_id}, lang: {lang_value}")],
    )


def search_query(
    selection: SelectionInput,
    filter: FilterInput,
    sort_by: SortInput = None,
) -> str:
    """Búsqueda de texto libre; `filter["query"]` es obligatorio."""

    filter = dict(filter or {})
    text = filter.get("query")
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Search query cannot be empty")

    filter_str = build_filter_with_language(filter)
    return build_operation(
        "search",
        selection,
        [filter_clause(filter_str), build_sort(sort_by)],
    )


def taxonomies_query(selection: SelectionInput, filter: FilterInput = None) -> str:
    filter_str = build_filter_with_language(filter)
    return build_operation("taxonomies", selection, [filter_clause(filter_str)])


def taxonomy_terms_query(
    taxonomy_name: str,
    selection: SelectionInput,
    filter: FilterInput = None,
) -> str:
    """Términos de una taxonomía; el filtro va antes de `taxonomyName`."""

    if not taxonomy_name or not str(taxonomy_name).strip():
        raise ValidationError("Taxonomy name cannot be empty")

    filter_str = build_filter_with_language(filter)
    return build_operation(
        "taxonomy",
        selection,
        [filter_clause(filter_str), f"taxonomyName: {quote(taxonomy_name)}"],
    )
