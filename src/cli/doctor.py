"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.graphql_transport import HttpGraphQLTransport
from cli.ui_components import print_banner
from core.config import DEFAULT_API_URL, AppSettings, write_user_env_vars
from core.domain.language import Language
from core.errors import ContentApiError, ValidationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PING_QUERY = "query {\n    taxonomies {\n        name\n    }\n}"


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        data = await HttpGraphQLTransport(settings).execute(PING_QUERY)
    except ContentApiError as exc:
        return False, str(exc).splitlines()[0]
    taxonomies = data.get("taxonomies")
    count = len(taxonomies) if isinstance(taxonomies, list) else 0
    return True, f"{count} taxonomies"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    print_banner(_console)
    settings = AppSettings()

    table = Table(title="GBGCO Content API Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API URL", "OK", settings.api_url)
    if settings.subscription_key is not None:
        table.add_row("Subscription key", "OK", "Configured")
    else:
        table.add_row("Subscription key", "MISSING", "Set GBGCO_SUBSCRIPTION_KEY or run `doctor setup`")
    table.add_row("Default language", "OK", settings.default_language.label())
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("GraphQL connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    api_url = typer.prompt("API URL", default=DEFAULT_API_URL, show_default=True).strip()
    key = typer.prompt("Subscription key", hide_input=True, confirmation_prompt=False).strip()
    lang = typer.prompt("Default language (sv/en)", default=Language.default().value, show_default=True)

    try:
        language = Language.parse(lang)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if not api_url or not key:
        raise typer.BadParameter("API URL and subscription key are required")

    env_path = write_user_env_vars(
        {
            "GBGCO_API_URL": api_url,
            "GBGCO_SUBSCRIPTION_KEY": key,
            "GBGCO_DEFAULT_LANGUAGE": language.value,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
