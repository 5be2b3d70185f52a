"""Componentes de UI para CLI (Rich).

Tablas, paneles y árboles reutilizados por los comandos de `cli.main`.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from core.domain.models import ContentItem, Markers, Taxonomy, TaxonomyTerm
from core.services.taxonomy_tree import TaxonomyTreeNode


def print_banner(console: Console) -> None:
    title = Text("GBGCO Content API", style="bold cyan")
    subtitle = Text("Lugares • Eventos • Guías • Taxonomías", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_items_table(items: Iterable[ContentItem], *, title: str = "Content") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type", style="white")
    table.add_column("Title", style="bold")
    table.add_column("Lang", style="green")
    table.add_column("Link", style="magenta")
    for item in items:
        table.add_row(
            str(item.id),
            item.type or "",
            item.title or "",
            item.lang,
            item.link or "",
        )
    return table


def build_item_panel(item: ContentItem) -> Panel:
    """Panel de detalle para un único contenido."""

    body = Text()
    body.append(f"{item.title or '(sin título)'}\n", style="bold")
    if item.excerpt:
        body.append(item.excerpt.strip() + "\n")
    if item.location and (item.location.lat is not None and item.location.lng is not None):
        body.append(f"\nUbicación: {item.location.lat}, {item.location.lng}", style="dim")
        if item.location.address:
            body.append(f" ({item.location.address})", style="dim")
    if item.dates:
        spans = ", ".join(f"{d.start or '?'} → {d.end or '?'}" for d in item.dates)
        body.append(f"\nFechas: {spans}", style="dim")
    if item.link:
        body.append(f"\n{item.link}", style="magenta")
    return Panel(body, title=Text(f"#{item.id} [{item.lang}]", style="bold yellow"), border_style="yellow")


def build_markers_table(markers: Markers) -> Table:
    table = Table(title="Markers")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Lat", style="green")
    table.add_column("Lng", style="green")
    for feature in markers.features:
        geometry = feature.geometry
        table.add_row(
            str(feature.properties.id),
            feature.properties.name,
            "" if geometry.latitude is None else f"{geometry.latitude:.5f}",
            "" if geometry.longitude is None else f"{geometry.longitude:.5f}",
        )
    return table


def build_taxonomies_table(taxonomies: Iterable[Taxonomy]) -> Table:
    table = Table(title="Taxonomies")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Types", style="green")
    for taxonomy in taxonomies:
        table.add_row(taxonomy.name, taxonomy.description or "", ", ".join(taxonomy.types))
    return table


def build_terms_table(terms: Iterable[TaxonomyTerm], *, title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Count", style="green")
    table.add_column("Parent", style="dim")
    for term in terms:
        table.add_row(str(term.id), term.name, str(term.count), "" if term.parent is None else str(term.parent))
    return table


def build_terms_tree(nodes: Iterable[TaxonomyTreeNode], *, title: str) -> Tree:
    """Árbol Rich del bosque de términos (pila explícita, sin recursión)."""

    root = Tree(Text(title, style="bold cyan"))
    stack = [(root, node) for node in reversed(list(nodes))]
    while stack:
        parent, node = stack.pop()
        label = Text.assemble((node.term.name, "white"), (f"  #{node.term.id} ({node.term.count})", "dim"))
        branch = parent.add(label)
        stack.extend((branch, child) for child in reversed(node.children))
    return root
