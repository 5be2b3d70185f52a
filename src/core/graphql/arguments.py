"""Serialización de argumentos GraphQL (filtros y orden).

Reglas de filtro, en orden de prioridad por entrada:
1. texto            -> `name: "value"` (escapado como string JSON/GraphQL)
2. lista `coords`   -> `name: [57.7, 11.97]` (floats)
3. otra lista       -> `name: [1, 2, 3]` (enteros)
4. resto            -> literal sin comillas (`true`, `null`, números)

El idioma es un enum en la API: `lang` se extrae del filtro, se valida y se
añade sin comillas al final.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from core.domain.language import Language
from core.errors import ValidationError

COORDS_KEY = "coords"
LANG_KEY = "lang"


def quote(text: str) -> str:
    """String GraphQL entre comillas, con escapes."""

    return json.dumps(str(text), ensure_ascii=False)


def format_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _format_list(name: str, values: list[Any] | tuple[Any, ...]) -> str:
    try:
        if name == COORDS_KEY:
            items = [repr(float(v)) for v in values]
        else:
            items = [str(int(v)) for v in values]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid value in filter list '{name}': {exc}") from exc
    return f"{name}: [{', '.join(items)}]"


def build_filter(filter: Mapping[str, Any] | None) -> str:
    """Serializa el filtro como argumentos GraphQL separados por comas."""

    if not filter:
        return ""
    args: list[str] = []
    for name, value in filter.items():
        if isinstance(value, str):
            args.append(f"{name}: {quote(value)}")
        elif isinstance(value, (list, tuple)):
            args.append(_format_list(name, value))
        else:
            args.append(f"{name}: {format_literal(value)}")
    return ", ".join(args)


def split_language(filter: Mapping[str, Any] | None) -> tuple[dict[str, Any], Language | None]:
    """Separa y valida `lang` del resto del filtro (sin mutar el original)."""

    rest = dict(filter or {})
    if LANG_KEY not in rest:
        return rest, None
    return rest, Language.parse(rest.pop(LANG_KEY))


def build_filter_with_language(filter: Mapping[str, Any] | None) -> str:
    """Como `build_filter`, pero con `lang` como enum sin comillas al final."""

    rest, language = split_language(filter)
    filter_str = build_filter(rest)
    if language is None:
        return filter_str
    lang_clause = f"{LANG_KEY}: {language.value}"
    return f"{filter_str}, {lang_clause}" if filter_str else lang_clause


def filter_clause(filter_str: str) -> str:
    return f"filter: {{ {filter_str} }}" if filter_str else ""


def _as_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def build_sort(sort: Mapping[str, Any] | None) -> str:
    """Serializa `{fields, orders}` como cláusula `sortBy`.

    Si falta cualquiera de los dos, el orden se omite (string vacío).
    """

    if not sort:
        return ""
    fields = sort.get("fields")
    orders = sort.get("orders")
    if not fields or not orders:
        return ""

    fields_str = ", ".join(quote(field) for field in _as_list(fields))
    orders_str = ", ".join(_as_list(orders))
    return f"sortBy: {{ fields: [{fields_str}], orders: [{orders_str}] }}"
