"""Exportación JSON de resultados.

Convierte entidades (pydantic), nodos de árbol de taxonomía y listas de
ambos a estructuras JSON planas con formato estable.

Los árboles de taxonomía se convierten con una pila explícita; si el
resultado anidado supera lo que `json` puede codificar, se lanza
`ExportError`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from core.errors import ExportError
from core.services.taxonomy_tree import TaxonomyTreeNode


def _node_to_jsonable(node: TaxonomyTreeNode) -> dict[str, Any]:
    root: dict[str, Any] = {"term": node.term.model_dump(mode="json"), "children": []}
    stack = [(node, root)]
    while stack:
        current, out = stack.pop()
        for child in current.children:
            child_out: dict[str, Any] = {"term": child.term.model_dump(mode="json"), "children": []}
            out["children"].append(child_out)
            stack.append((child, child_out))
    return root


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, TaxonomyTreeNode):
        return _node_to_jsonable(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    return value


def dumps(value: Any) -> str:
    try:
        return json.dumps(to_jsonable(value), ensure_ascii=False, indent=2, sort_keys=True)
    except RecursionError as exc:
        raise ExportError("Result is too deeply nested to export as JSON") from exc


def export_json(*, value: Any, output_path: Path) -> Path:
    """Exporta `value` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps(value) + "\n", encoding="utf-8")
    return output_path
