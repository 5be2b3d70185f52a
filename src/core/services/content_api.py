"""Fachada de la API de contenido.

Cada recurso compone: validación + documento GraphQL (`core.graphql`) ->
transporte -> decodificación tolerante (`core.domain.mapper`). La única
suspensión es `transport.execute`; todo lo demás es puro.

Uso típico:

    api = ContentApi.from_settings()
    places = await api.places.list({"categories": [3], "per_page": 10})
    tree = await api.taxonomy.list("categories", {"lang": "en"}, hierarchical=True)
"""

from __future__ import annotations

from functools import cached_property
from typing import Any

from core.config import AppSettings
from core.domain.language import Language
from core.domain.mapper import decode, decode_many
from core.domain.models import ContentItem, Taxonomy, TaxonomyTerm
from core.domain.results import (
    EventDetail,
    EventList,
    GuideList,
    PlaceDetail,
    PlaceList,
    SearchResult,
)
from core.errors import ValidationError
from core.graphql.queries import (
    by_id_query,
    list_query,
    search_query,
    taxonomies_query,
    taxonomy_terms_query,
)
from core.interfaces.transport import GraphQLTransport
from core.services.taxonomy_tree import TaxonomyTreeNode, build_hierarchy

ITEM_FIELDS: list[Any] = ["id", "type", "title", "excerpt", "link", "lang"]
TAXONOMY_FIELDS: list[Any] = ["name", "description", "value", "types"]
TERM_FIELDS: list[Any] = ["id", "count", "name", "description", "parent"]


def _fields(fields: Any, default: Any) -> Any:
    # Una selección vacía explícita ("" o {}) debe fallar, no caer al default.
    return default if fields is None else fields


class _Resource:
    def __init__(self, transport: GraphQLTransport) -> None:
        self._transport = transport

    async def _fetch(self, query: str, root: str) -> Any:
        data = await self._transport.execute(query)
        return data.get(root)


class PlacesResource(_Resource):
    async def list(
        self,
        filter: dict[str, Any] | None = None,
        sort_by: dict[str, Any] | None = None,
        fields: Any = None,
    ) -> PlaceList:
        """Lista lugares. Filtros: lang, places, categories, areas, tags, distance, coords, per_page, page."""

        query = list_query("places", _fields(fields, {"places": ITEM_FIELDS}), filter, sort_by)
        return decode(PlaceList, await self._fetch(query, "places"))

    async def get_by_id(
        self,
        id: int,
        lang: str | Language = Language.SWEDISH,
        fields: Any = None,
    ) -> PlaceDetail:
        query = by_id_query("placeById", id, lang, _fields(fields, {"place": ITEM_FIELDS}))
        return decode(PlaceDetail, await self._fetch(query, "placeById"))


class EventsResource(_Resource):
    async def list(
        self,
        filter: dict[str, Any] | None = None,
        sort_by: dict[str, Any] | None = None,
        fields: Any = None,
    ) -> EventList:
        """Lista eventos.

        Filtros además de los de lugares: invisible_tags, free, start, end.
        """

        query = list_query("events", _fields(fields, {"events": ITEM_FIELDS}), filter, sort_by)
        return decode(EventList, await self._fetch(query, "events"))

    async def get_by_id(
        self,
        id: int,
        lang: str | Language = Language.SWEDISH,
        fields: Any = None,
    ) -> EventDetail:
        query = by_id_query("eventById", id, lang, _fields(fields, {"event": ITEM_FIELDS}))
        return decode(EventDetail, await self._fetch(query, "eventById"))


class GuidesResource(_Resource):
    async def list(self, filter: dict[str, Any] | None = None, fields: Any = None) -> GuideList:
        query = list_query("guides", _fields(fields, {"guides": ITEM_FIELDS}), filter)
        return decode(GuideList, await self._fetch(query, "guides"))

    async def get_by_id(
        self,
        id: int,
        lang: str | Language = Language.SWEDISH,
        fields: Any = None,
    ) -> ContentItem:
        query = by_id_query("guideById", id, lang, _fields(fields, ITEM_FIELDS))
        return decode(ContentItem, await self._fetch(query, "guideById"))


class SearchResource(_Resource):
    async def query(
        self,
        filter: dict[str, Any],
        sort_by: dict[str, Any] | None = None,
        fields: Any = None,
    ) -> SearchResult:
        """Busca en todo el contenido; `filter["query"]` es obligatorio, `lang` opcional (en/sv)."""

        query = search_query(_fields(fields, {"results": ITEM_FIELDS}), filter, sort_by)
        return decode(SearchResult, await self._fetch(query, "search"))


class TaxonomiesResource(_Resource):
    async def list(self, filter: dict[str, Any] | None = None, fields: Any = None) -> list[Taxonomy]:
        query = taxonomies_query(_fields(fields, TAXONOMY_FIELDS), filter)
        return decode_many(Taxonomy, await self._fetch(query, "taxonomies"))


class TaxonomyResource(_Resource):
    async def list(
        self,
        taxonomy_name: str,
        filter: dict[str, Any] | None = None,
        fields: Any = None,
        hierarchical: bool = False,
    ) -> list[TaxonomyTerm] | list[TaxonomyTreeNode]:
        """Términos de `taxonomy_name`; con `hierarchical=True` devuelve el bosque."""

        query = taxonomy_terms_query(taxonomy_name, _fields(fields, TERM_FIELDS), filter)
        terms = decode_many(TaxonomyTerm, await self._fetch(query, "taxonomy"))
        return build_hierarchy(terms) if hierarchical else terms


class ContentApi:
    """Punto de entrada: recursos creados bajo demanda sobre un mismo transporte."""

    def __init__(self, transport: GraphQLTransport) -> None:
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "ContentApi":
        from adapters.graphql_transport import HttpGraphQLTransport  # noqa: PLC0415

        return cls(HttpGraphQLTransport(settings or AppSettings()))

    async def query(self, query: str) -> dict[str, Any]:
        """Ejecuta un documento GraphQL completo tal cual."""

        if not query or not query.strip():
            raise ValidationError("Query cannot be empty")
        return await self._transport.execute(query)

    @cached_property
    def places(self) -> PlacesResource:
        return PlacesResource(self._transport)

    @cached_property
    def events(self) -> EventsResource:
        return EventsResource(self._transport)

    @cached_property
    def guides(self) -> GuidesResource:
        return GuidesResource(self._transport)

    @cached_property
    def search(self) -> SearchResource:
        return SearchResource(self._transport)

    @cached_property
    def taxonomies(self) -> TaxonomiesResource:
        return TaxonomiesResource(self._transport)

    @cached_property
    def taxonomy(self) -> TaxonomyResource:
        return TaxonomyResource(self._transport)
