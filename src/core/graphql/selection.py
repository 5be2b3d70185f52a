"""Selección de campos GraphQL.

Una selección llega de dos formas:
- `RawSelection`: texto GraphQL ya formateado, se usa tal cual.
- `TreeSelection`: mapping ordenado `campo -> hoja | sub-selección`.

Formato del árbol:
- hoja: un string; se emite ese string en su propia línea.
- sub-selección: un mapping, o una lista de hojas y mappings; se emite
  `campo {` / hijos indentados / `}`.

El orden de inserción se respeta siempre (ni se reordena ni se deduplica).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from core.errors import EmptySelectionError, ValidationError

INDENT = "    "


@dataclass(frozen=True)
class RawSelection:
    text: str


@dataclass(frozen=True)
class TreeSelection:
    fields: Mapping[str, Any] | list[Any] | tuple[Any, ...]


Selection = RawSelection | TreeSelection


def as_selection(value: Selection | str | Mapping[str, Any] | list[Any] | tuple[Any, ...]) -> Selection:
    """Eleva un string o un mapping/lista plano a `Selection`."""

    if isinstance(value, (RawSelection, TreeSelection)):
        return value
    if isinstance(value, str):
        return RawSelection(value)
    if isinstance(value, (Mapping, list, tuple)):
        return TreeSelection(value)
    raise ValidationError(f"Unsupported field selection type: {type(value).__name__}")


def build_selection(value: Selection | str | Mapping[str, Any] | list[Any] | tuple[Any, ...]) -> str:
    """Devuelve el texto del selection set.

    Lanza `EmptySelectionError` si la selección (o una sub-selección) está vacía.
    """

    selection = as_selection(value)
    if isinstance(selection, RawSelection):
        if not selection.text.strip():
            raise EmptySelectionError()
        return selection.text

    entries = _entries(selection.fields)
    if not entries:
        raise EmptySelectionError()
    return _render(entries, 0)


def selection_from_paths(paths: Iterable[str]) -> TreeSelection:
    """Construye un árbol a partir de rutas con puntos (`location.lat`)."""

    root: dict[str, Any] = {}
    for path in paths:
        parts = [part.strip() for part in path.split(".") if part.strip()]
        if not parts:
            continue
        node = root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        leaf = parts[-1]
        if not isinstance(node.get(leaf), dict):
            node[leaf] = leaf
    return TreeSelection(root)


def _entries(value: Mapping[str, Any] | list[Any] | tuple[Any, ...]) -> list[tuple[str, Any]]:
    if isinstance(value, Mapping):
        return [(str(key), item) for key, item in value.items()]

    entries: list[tuple[str, Any]] = []
    for item in value:
        if isinstance(item, str):
            entries.append((item, item))
        elif isinstance(item, Mapping):
            entries.extend((str(key), child) for key, child in item.items())
        else:
            raise ValidationError(f"Unsupported field selection entry: {item!r}")
    return entries


def _render(entries: list[tuple[str, Any]], level: int) -> str:
    indent = INDENT * level
    lines: list[str] = []
    for key, value in entries:
        if isinstance(value, str):
            lines.append(f"{indent}{value}")
            continue
        if not isinstance(value, (Mapping, list, tuple)):
            raise ValidationError(f"Unsupported value for field '{key}': {value!r}")
        children = _entries(value)
        if not children:
            raise EmptySelectionError(f"Sub-selection for '{key}' cannot be empty")
        nested = _render(children, level + 1)
        lines.append(f"{indent}{key} {{\n{nested}\n{indent}}}")
    return "\n".join(lines)
