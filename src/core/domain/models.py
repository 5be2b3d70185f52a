"""Modelos del dominio (Pydantic v2).

Entidades inmutables que describen el contenido servido por la API (lugares,
eventos, guías, taxonomías y marcadores GeoJSON).

Política de decodificación tolerante:
- Cada campo declara su clave de origen (`alias`) y su valor por defecto.
- Si el valor falta, es null o tiene una forma inesperada, el campo toma su
  default. Decodificar nunca falla por datos opcionales ausentes.
- Un objeto anidado ausente o malformado se convierte en `None`, nunca en una
  instancia a medio rellenar.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, ValidatorFunctionWrapHandler, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict


class Entity(BaseModel):
    """Base de todas las entidades: congelada y tolerante campo a campo."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except PydanticValidationError:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)


class Image(Entity):
    width: int = 0
    height: int = 0
    source_url: str = ""


class MediaSizes(Entity):
    medium: Image | None = None
    thumbnail: Image | None = None
    large: Image | None = None
    full: Image | None = None


class Media(Entity):
    """Imagen destacada o de galería con sus tamaños renderizados."""

    id: int = 0
    credit: str | None = None
    caption: str | None = None
    alt_text: str | None = None
    media_type: str | None = None
    mime_type: str | None = None
    sizes: MediaSizes | None = None


class Contact(Entity):
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    facebook: str | None = None
    instagram: str | None = None


class Location(Entity):
    """Dirección geocodificada de un lugar.

    `place_id` es el identificador del proveedor de mapas (texto), no el id de
    un lugar de la API.
    """

    address: str | None = None
    lat: float | None = None
    lng: float | None = None
    zoom: int | None = None
    place_id: str | None = None
    name: str | None = None
    street_number: str | None = None
    street_name: str | None = None
    state: str | None = None
    post_code: str | None = None
    country: str | None = None
    country_short: str | None = None


class Translations(Entity):
    """Ids del mismo contenido en cada idioma."""

    sv: int | None = None
    en: int | None = None


class EventDate(Entity):
    """Par de fechas ISO (inicio/fin) de una ocurrencia de evento."""

    start: str | None = None
    end: str | None = None


class CurrentInTime(Entity):
    """Meses y días de la semana en que el contenido es relevante."""

    months: list[int] = Field(default_factory=list)
    weekdays: list[int] = Field(default_factory=list)


class ContentItem(Entity):
    """Registro genérico de lugar, evento o guía."""

    id: int = 0
    date: str | None = None
    modified: str | None = None
    type: str | None = None
    link: str | None = None
    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    category_heading: str | None = None
    categories: list[int] = Field(default_factory=list)
    areas: list[int] = Field(default_factory=list)
    tags: list[int] = Field(default_factory=list)
    invisible_tags: list[int] = Field(default_factory=list)
    lang: str = "sv"
    translations: Translations | None = None
    featured_media: list[Media] = Field(default_factory=list, alias="featuredmedia")
    gallery: list[Media] = Field(default_factory=list)
    contact: Contact | None = None
    location: Location | None = None
    free: bool | None = Field(
        default=None,
        description="Entrada gratuita (solo eventos).",
    )
    dates: list[EventDate] = Field(default_factory=list)
    place_id: int | None = None
    classification: int | None = None
    current_in_time: CurrentInTime | None = Field(default=None, alias="currentInTime")

    @property
    def is_free(self) -> bool | None:
        return self.free


class Related(Entity):
    """Contenido relacionado con un lugar o evento."""

    places: list[ContentItem] = Field(default_factory=list)
    guides: list[ContentItem] = Field(default_factory=list)
    events: list[ContentItem] = Field(default_factory=list)


class Taxonomy(Entity):
    """Esquema de clasificación (categorías, áreas, tags...)."""

    name: str = ""
    description: str | None = None
    value: str | None = None
    types: list[str] = Field(
        default_factory=list,
        description="Tipos de contenido que pueden usar esta taxonomía.",
    )


class TaxonomyTerm(Entity):
    """Un término de una taxonomía; `parent` referencia el id de otro término."""

    id: int = 0
    count: int = 0
    name: str = ""
    description: str | None = None
    parent: int | None = None


class Geometry(Entity):
    """Geometría GeoJSON.

    `latitude`/`longitude` solo existen para geometrías `Point` con un par de
    coordenadas numérico; para cualquier otra forma devuelven None.
    """

    type: str = ""
    coordinates: list[Any] = Field(default_factory=list)

    def _point(self) -> tuple[float, float] | None:
        if self.type != "Point" or len(self.coordinates) < 2:
            return None
        lng, lat = self.coordinates[0], self.coordinates[1]
        for value in (lng, lat):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                return None
        return float(lng), float(lat)

    @property
    def latitude(self) -> float | None:
        point = self._point()
        return point[1] if point else None

    @property
    def longitude(self) -> float | None:
        point = self._point()
        return point[0] if point else None


class Properties(Entity):
    """Propiedades de un marcador en el mapa."""

    name: str = ""
    id: int = 0
    icon: str = ""
    thumbnail: str = ""
    type: str = ""
    slug: str = ""


class Feature(Entity):
    type: str = ""
    geometry: Geometry = Field(default_factory=Geometry)
    properties: Properties = Field(default_factory=Properties)


class Markers(Entity):
    """FeatureCollection GeoJSON con un marcador por contenido."""

    type: str = ""
    features: list[Feature] = Field(default_factory=list)
