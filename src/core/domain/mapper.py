"""Decodificación de JSON crudo al grafo de entidades.

Funciones puras: sin I/O y sin estado compartido. Los defaults por campo viven
en la declaración de cada modelo (`core.domain.models`), así que un único par
de funciones genéricas sirve para todas las entidades.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from core.domain.models import Entity

EntityT = TypeVar("EntityT", bound=Entity)


def decode(model: type[EntityT], raw: Any) -> EntityT:
    """Decodifica `raw` como `model`; cualquier cosa que no sea un objeto cuenta como `{}`."""

    if not isinstance(raw, Mapping):
        raw = {}
    return model.model_validate(dict(raw))


def decode_many(model: type[EntityT], raw: Any) -> list[EntityT]:
    """Decodifica una lista JSON; los elementos que no son objetos se descartan."""

    if not isinstance(raw, (list, tuple)):
        return []
    return [decode(model, item) for item in raw if isinstance(item, Mapping)]
