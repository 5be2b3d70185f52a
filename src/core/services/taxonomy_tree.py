"""Reconstrucción del árbol de una taxonomía.

La API devuelve los términos como una lista plana donde cada término apunta
a su padre por id. Este módulo agrupa los términos por padre y construye el
bosque con una pila explícita (sin recursión sobre datos externos).

Reglas:
- Términos sin padre (o con padre 0) son raíces.
- El orden entre hermanos es el orden de entrada.
- Un término cuyo padre no está en la entrada no es alcanzable y no aparece
  en el resultado.
- Cualquier ciclo en las cadenas de padres lanza `CycleDetectedError`.
- Los ids repetidos se ignoran (gana el primero): cada id aparece como mucho
  una vez en el bosque.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from core.domain.models import TaxonomyTerm
from core.errors import CycleDetectedError

logger = logging.getLogger(__name__)

ROOT_KEY = 0


@dataclass(frozen=True)
class TaxonomyTreeNode:
    term: TaxonomyTerm
    children: tuple["TaxonomyTreeNode", ...] = ()


@dataclass
class _Frame:
    term: TaxonomyTerm | None
    pending: Iterator[TaxonomyTerm]
    children: list[TaxonomyTreeNode] = field(default_factory=list)


def _parent_key(term: TaxonomyTerm) -> int:
    return term.parent if term.parent is not None else ROOT_KEY


def _check_cycles(terms: list[TaxonomyTerm]) -> None:
    """Recorre cada cadena de padres una sola vez (set de ids visitados)."""

    parent_of: dict[int, int] = {}
    for term in terms:
        parent_of.setdefault(term.id, _parent_key(term))

    acyclic: set[int] = set()
    for start in parent_of:
        path: set[int] = set()
        current = start
        while current in parent_of and current not in acyclic:
            if current in path:
                raise CycleDetectedError(current)
            path.add(current)
            parent = parent_of[current]
            if parent == ROOT_KEY:
                break
            current = parent
        acyclic |= path


def _unique_by_id(terms: list[TaxonomyTerm]) -> list[TaxonomyTerm]:
    """Un término por id (gana el primero), para que cada id se emita una vez."""

    seen: set[int] = set()
    unique: list[TaxonomyTerm] = []
    duplicates: list[int] = []
    for term in terms:
        if term.id in seen:
            duplicates.append(term.id)
            continue
        seen.add(term.id)
        unique.append(term)
    if duplicates:
        logger.debug("Ignoring %d duplicated taxonomy terms: %s", len(duplicates), duplicates)
    return unique


def build_hierarchy(terms: Iterable[TaxonomyTerm]) -> list[TaxonomyTreeNode]:
    """Construye el bosque de términos a partir de la lista plana."""

    terms = _unique_by_id(list(terms))
    _check_cycles(terms)

    buckets: dict[int, list[TaxonomyTerm]] = {}
    for term in terms:
        buckets.setdefault(_parent_key(term), []).append(term)

    known_ids = {term.id for term in terms}
    orphans = [term.id for term in terms if _parent_key(term) not in known_ids | {ROOT_KEY}]
    if orphans:
        logger.debug("Dropping %d taxonomy terms with unknown parent: %s", len(orphans), orphans)

    stack = [_Frame(term=None, pending=iter(buckets.get(ROOT_KEY, ())))]
    on_path: set[int] = set()
    while True:
        frame = stack[-1]
        term = next(frame.pending, None)
        if term is not None:
            if term.id in on_path:
                raise CycleDetectedError(term.id)
            on_path.add(term.id)
            # id 0 es la clave raíz: un término con id 0 no puede tener hijos.
            children = buckets.get(term.id, ()) if term.id != ROOT_KEY else ()
            stack.append(_Frame(term=term, pending=iter(children)))
            continue

        stack.pop()
        if frame.term is None:
            return frame.children
        on_path.discard(frame.term.id)
        stack[-1].children.append(TaxonomyTreeNode(frame.term, tuple(frame.children)))
