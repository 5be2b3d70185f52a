"""Sobres de resultado de cada operación.

Cada modelo refleja el objeto que la API devuelve bajo la raíz de la
operación (`places`, `placeById`, `events`...). Usan la misma política
tolerante que las entidades.
"""

from __future__ import annotations

from pydantic import Field

from core.domain.models import ContentItem, Entity, Markers, Related


class PlaceList(Entity):
    items: list[ContentItem] = Field(default_factory=list, alias="places")
    markers: Markers | None = None


class PlaceDetail(Entity):
    place: ContentItem = Field(default_factory=ContentItem)
    events: list[ContentItem] = Field(default_factory=list)
    markers: Markers | None = None
    related: Related | None = None


class EventList(Entity):
    events: list[ContentItem] = Field(default_factory=list)
    markers: Markers | None = None


class EventDetail(Entity):
    event: ContentItem = Field(default_factory=ContentItem)
    markers: Markers | None = None
    related: Related | None = None


class GuideList(Entity):
    guides: list[ContentItem] = Field(default_factory=list)


class SearchResult(Entity):
    results: list[ContentItem] = Field(default_factory=list)
