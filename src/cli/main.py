"""CLI principal (Typer + Rich).

Comandos:
- `places list|get`, `events list|get`, `guides list|get`
- `search`, `taxonomies`, `taxonomy <nombre> [--tree]`, `query <documento>`
- `doctor run|setup`
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from pathlib import Path
from typing import Any, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from adapters.json_exporter import dumps, export_json
from cli import doctor
from cli.ui_components import (
    build_item_panel,
    build_items_table,
    build_markers_table,
    build_taxonomies_table,
    build_terms_table,
    build_terms_tree,
)
from core.config import AppSettings
from core.domain.language import Language
from core.errors import ContentApiError, ValidationError
from core.graphql.selection import RawSelection, selection_from_paths
from core.services.content_api import ITEM_FIELDS, ContentApi

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Cliente de la API de contenido de Göteborg & Co.")
places_app = typer.Typer(no_args_is_help=True, help="Lugares.")
events_app = typer.Typer(no_args_is_help=True, help="Eventos.")
guides_app = typer.Typer(no_args_is_help=True, help="Guías.")
app.add_typer(places_app, name="places")
app.add_typer(events_app, name="events")
app.add_typer(guides_app, name="guides")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

MARKERS_FIELDS: dict[str, Any] = {
    "type": "type",
    "features": {
        "type": "type",
        "geometry": ["type", "coordinates"],
        "properties": ["id", "name", "slug", "type"],
    },
}

FilterOpt = typer.Option(None, "--filter", "-f", help="Filtro key=value (repetible). Listas separadas por comas.")
FieldOpt = typer.Option(None, "--field", help="Campo con puntos, p.ej. location.lat (repetible).")
FieldsOpt = typer.Option(None, "--fields", help="Selección GraphQL en texto (se usa tal cual).")
SortFieldOpt = typer.Option(None, "--sort-field", help="Campo de orden (repetible).")
SortOrderOpt = typer.Option(None, "--sort-order", help="asc|desc (repetible).")
JsonOpt = typer.Option(False, "--json", help="Imprime el resultado como JSON.")
OutputOpt = typer.Option(None, "--output", "-o", help="Guarda el resultado como JSON en esta ruta.")


def _build_api(settings: AppSettings) -> ContentApi:
    return ContentApi.from_settings(settings)


def _settings() -> AppSettings:
    return AppSettings()


def _fail(exc: ContentApiError) -> typer.Exit:
    _err_console.print(Text.assemble(("Error: ", "bold red"), str(exc)), highlight=False)
    return typer.Exit(code=1)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    try:
        return asyncio.run(coro)
    except ContentApiError as exc:
        raise _fail(exc) from exc


def _parse_scalar(text: str) -> Any:
    lowered = text.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    return text


def parse_filters(pairs: list[str] | None) -> dict[str, Any]:
    """`["tags=1,2", "free=true", "q=x"]` -> `{"tags": [1, 2], "free": True, "q": "x"}`."""

    result: dict[str, Any] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"Filter must be key=value: {pair!r}")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter(f"Filter key cannot be empty: {pair!r}")
        if "," in value:
            result[key] = [_parse_scalar(part.strip()) for part in value.split(",") if part.strip()]
        else:
            result[key] = _parse_scalar(value.strip())
    return result


def _sort(fields: list[str] | None, orders: list[str] | None) -> dict[str, Any] | None:
    if not fields and not orders:
        return None
    return {"fields": fields or [], "orders": orders or []}


def _selection(
    root: str | None,
    paths: list[str] | None,
    raw: str | None,
    *,
    markers: bool = False,
) -> Any:
    """Selección para la CLI: texto crudo, rutas con puntos o los campos por defecto."""

    if raw is not None:
        return RawSelection(raw)
    item_fields: Any = selection_from_paths(paths).fields if paths else ITEM_FIELDS
    if root is None:
        return item_fields
    selection: dict[str, Any] = {root: item_fields}
    if markers:
        selection["markers"] = MARKERS_FIELDS
    return selection


def _emit(value: Any, *, as_json: bool, output: Path | None) -> bool:
    """Vuelca JSON a disco/stdout; devuelve True si ya no hay que pintar tablas."""

    try:
        if output is not None:
            path = export_json(value=value, output_path=output)
            _err_console.print(f"[green]Saved:[/green] {path}")
        if as_json:
            typer.echo(dumps(value))
            return True
    except ContentApiError as exc:
        raise _fail(exc) from exc
    return False


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Logs DEBUG.")) -> None:
    level = "DEBUG" if verbose else _settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


@places_app.command("list")
def places_list(
    filters: Optional[list[str]] = FilterOpt,
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    sort_field: Optional[list[str]] = SortFieldOpt,
    sort_order: Optional[list[str]] = SortOrderOpt,
    markers: bool = typer.Option(False, "--markers", help="Incluye los marcadores GeoJSON."),
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Lista lugares."""

    api = _build_api(_settings())
    result = _run(
        api.places.list(
            parse_filters(filters),
            _sort(sort_field, sort_order),
            _selection("places", field, fields, markers=markers),
        )
    )
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_items_table(result.items, title="Places"))
    if result.markers:
        _console.print(build_markers_table(result.markers))


@places_app.command("get")
def places_get(
    id: int = typer.Argument(..., help="Id del lugar."),
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="sv|en"),
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Muestra un lugar por id."""

    settings = _settings()
    language = _language(lang, settings)
    api = _build_api(settings)
    result = _run(api.places.get_by_id(id, language, _selection("place", field, fields)))
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_item_panel(result.place))
    if result.events:
        _console.print(build_items_table(result.events, title="Events"))


@events_app.command("list")
def events_list(
    filters: Optional[list[str]] = FilterOpt,
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    sort_field: Optional[list[str]] = SortFieldOpt,
    sort_order: Optional[list[str]] = SortOrderOpt,
    markers: bool = typer.Option(False, "--markers", help="Incluye los marcadores GeoJSON."),
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Lista eventos."""

    api = _build_api(_settings())
    result = _run(
        api.events.list(
            parse_filters(filters),
            _sort(sort_field, sort_order),
            _selection("events", field, fields, markers=markers),
        )
    )
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_items_table(result.events, title="Events"))
    if result.markers:
        _console.print(build_markers_table(result.markers))


@events_app.command("get")
def events_get(
    id: int = typer.Argument(..., help="Id del evento."),
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="sv|en"),
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Muestra un evento por id."""

    settings = _settings()
    language = _language(lang, settings)
    api = _build_api(settings)
    result = _run(api.events.get_by_id(id, language, _selection("event", field, fields)))
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_item_panel(result.event))


@guides_app.command("list")
def guides_list(
    filters: Optional[list[str]] = FilterOpt,
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Lista guías."""

    api = _build_api(_settings())
    result = _run(api.guides.list(parse_filters(filters), _selection("guides", field, fields)))
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_items_table(result.guides, title="Guides"))


@guides_app.command("get")
def guides_get(
    id: int = typer.Argument(..., help="Id de la guía."),
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="sv|en"),
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Muestra una guía por id."""

    settings = _settings()
    language = _language(lang, settings)
    api = _build_api(settings)
    result = _run(api.guides.get_by_id(id, language, _selection(None, field, fields)))
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_item_panel(result))


@app.command()
def search(
    text: str = typer.Argument(..., help="Texto a buscar."),
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="sv|en"),
    filters: Optional[list[str]] = FilterOpt,
    field: Optional[list[str]] = FieldOpt,
    fields: Optional[str] = FieldsOpt,
    sort_field: Optional[list[str]] = SortFieldOpt,
    sort_order: Optional[list[str]] = SortOrderOpt,
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Busca en lugares, eventos y guías."""

    filter_map = {"query": text, **parse_filters(filters)}
    if lang:
        filter_map["lang"] = lang
    api = _build_api(_settings())
    result = _run(
        api.search.query(filter_map, _sort(sort_field, sort_order), _selection("results", field, fields))
    )
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_items_table(result.results, title=f"Search: {text}"))


@app.command()
def taxonomies(
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="sv|en"),
    filters: Optional[list[str]] = FilterOpt,
    fields: Optional[str] = FieldsOpt,
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Lista las taxonomías disponibles."""

    filter_map = parse_filters(filters)
    if lang:
        filter_map["lang"] = lang
    api = _build_api(_settings())
    result = _run(api.taxonomies.list(filter_map, RawSelection(fields) if fields is not None else None))
    if _emit(result, as_json=as_json, output=output):
        return
    _console.print(build_taxonomies_table(result))


@app.command()
def taxonomy(
    name: str = typer.Argument(..., help="Nombre de la taxonomía, p.ej. categories."),
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="sv|en"),
    filters: Optional[list[str]] = FilterOpt,
    tree: bool = typer.Option(False, "--tree", help="Muestra los términos como árbol."),
    as_json: bool = JsonOpt,
    output: Optional[Path] = OutputOpt,
) -> None:
    """Lista los términos de una taxonomía."""

    filter_map = parse_filters(filters)
    if lang:
        filter_map["lang"] = lang
    api = _build_api(_settings())
    result = _run(api.taxonomy.list(name, filter_map, hierarchical=tree))
    if _emit(result, as_json=as_json, output=output):
        return
    if tree:
        _console.print(build_terms_tree(result, title=name))
    else:
        _console.print(build_terms_table(result, title=name))


@app.command()
def query(
    document: str = typer.Argument(..., help="Documento GraphQL completo."),
    output: Optional[Path] = OutputOpt,
) -> None:
    """Ejecuta un documento GraphQL tal cual e imprime `data` como JSON."""

    api = _build_api(_settings())
    result = _run(api.query(document))
    _emit(result, as_json=True, output=output)


def _language(value: str | None, settings: AppSettings) -> Language:
    if value is None:
        return settings.default_language
    try:
        return Language.parse(value)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--lang") from exc


def run() -> None:
    app()
