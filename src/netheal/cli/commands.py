"""netheal console CLI.

Read-only views over the healing platform API: each list command fetches
one collection, applies search/filter/sort and prints a table with stats.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.text import Text

from netheal.cli import display
from netheal.cli.formatting import status_style
from netheal.client import NethealApi
from netheal.core.logging_config import setup_logging
from netheal.core.settings import Settings, get_settings
from netheal.notify import ConsoleSink
from netheal.store import (
    ActionStore,
    AlertStore,
    DashboardStore,
    DeviceStore,
    HealthStore,
    IncidentStore,
    NetworkMapStore,
    PolicyStore,
    ResourceStore,
    TopologyStore,
)
from netheal.views import (
    ACTION_VIEW,
    ALERT_VIEW,
    DEVICE_VIEW,
    INCIDENT_VIEW,
    POLICY_VIEW,
    QueryDescriptor,
    ViewSpec,
    derive,
)

app = typer.Typer(
    name="netheal",
    help="netheal - Network healing console",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

StoreFactory = Callable[[NethealApi], ResourceStore[Any]]


ServerOption = Annotated[
    str | None,
    typer.Option("--server", help="API base URL (defaults to NETHEAL_API_URL)"),
]
TokenOption = Annotated[
    str | None,
    typer.Option("--token", help="Bearer token (defaults to stored credentials)"),
]
SearchOption = Annotated[str, typer.Option("--search", "-s", help="Case-insensitive text search")]
StatusOption = Annotated[str, typer.Option("--status", help="Status to show, or 'all'")]
SortOption = Annotated[str | None, typer.Option("--sort", help="Field to sort by")]
DescOption = Annotated[bool, typer.Option("--desc", help="Sort descending")]


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose logging")] = False,
) -> None:
    setup_logging(verbose=verbose, level=None if verbose else get_settings().log_level)


def _settings(server: str | None) -> Settings:
    settings = get_settings()
    if server:
        settings = settings.model_copy(update={"api_url": server.rstrip("/")})
    return settings


async def _load(factory: StoreFactory, server: str | None, token: str | None) -> ResourceStore[Any]:
    async with NethealApi.from_settings(_settings(server), auth_token=token, notifier=ConsoleSink()) as api:
        store = factory(api)
        await store.mount()
    return store


def _show(
    factory: StoreFactory,
    view: ViewSpec,
    columns: display.Columns,
    query: QueryDescriptor,
    server: str | None,
    token: str | None,
) -> None:
    store = asyncio.run(_load(factory, server, token))
    if store.error and not store.items:
        raise typer.Exit(code=1)
    display.render_store(console, store, derive(store.items, query, view), columns)


def _query(search: str, status: str, type_: str, sort: str | None, desc: bool) -> QueryDescriptor:
    return QueryDescriptor(
        search_term=search,
        status_filter=status or "all",
        type_filter=type_ or "all",
        sort_key=sort,
        sort_direction="desc" if desc else "asc",
    )


@app.command()
def devices(
    search: SearchOption = "",
    status: StatusOption = "all",
    type_: Annotated[str, typer.Option("--type", help="Device type (router, switch, ...)")] = "all",
    sort: SortOption = "hostname",
    desc: DescOption = False,
    server: ServerOption = None,
    token: TokenOption = None,
) -> None:
    """List managed devices."""
    query = _query(search, status, type_, sort, desc)
    _show(lambda api: DeviceStore(api.devices), DEVICE_VIEW, display.DEVICE_COLUMNS, query, server, token)


@app.command()
def alerts(
    search: SearchOption = "",
    status: StatusOption = "all",
    severity: Annotated[str, typer.Option("--severity", help="Severity to show, or 'all'")] = "all",
    sort: SortOption = None,
    desc: DescOption = False,
    server: ServerOption = None,
    token: TokenOption = None,
) -> None:
    """List alerts."""
    query = _query(search, status, severity, sort, desc)
    _show(lambda api: AlertStore(api.alerts), ALERT_VIEW, display.ALERT_COLUMNS, query, server, token)


@app.command()
def incidents(
    search: SearchOption = "",
    status: StatusOption = "all",
    severity: Annotated[str, typer.Option("--severity", help="Severity to show, or 'all'")] = "all",
    sort: SortOption = None,
    desc: DescOption = False,
    server: ServerOption = None,
    token: TokenOption = None,
) -> None:
    """List incidents."""
    query = _query(search, status, severity, sort, desc)
    _show(lambda api: IncidentStore(api.incidents), INCIDENT_VIEW, display.INCIDENT_COLUMNS, query, server, token)


@app.command()
def actions(
    search: SearchOption = "",
    status: StatusOption = "all",
    category: Annotated[str, typer.Option("--category", help="Action category, or 'all'")] = "all",
    sort: SortOption = None,
    desc: DescOption = False,
    server: ServerOption = None,
    token: TokenOption = None,
) -> None:
    """List remediation actions."""
    query = _query(search, status, category, sort, desc)
    _show(lambda api: ActionStore(api.actions), ACTION_VIEW, display.ACTION_COLUMNS, query, server, token)


@app.command()
def policies(
    search: SearchOption = "",
    status: StatusOption = "all",
    category: Annotated[str, typer.Option("--category", help="Policy category, or 'all'")] = "all",
    sort: SortOption = "name",
    desc: DescOption = False,
    server: ServerOption = None,
    token: TokenOption = None,
) -> None:
    """List automation policies."""
    query = _query(search, status, category, sort, desc)
    _show(lambda api: PolicyStore(api.policies), POLICY_VIEW, display.POLICY_COLUMNS, query, server, token)


@app.command()
def topology(server: ServerOption = None, token: TokenOption = None) -> None:
    """Show the current topology snapshot."""
    store = asyncio.run(_load(lambda api: TopologyStore(api.topology), server, token))
    if store.error and not store.items:
        raise typer.Exit(code=1)
    current = store.current
    if current is None:
        console.print("[dim]No topology discovered yet[/dim]")
        return
    console.print(Text(current.name or current.id, style="bold"))
    display.render_stats(console, store.stats, store.share_buckets)


@app.command()
def summary(server: ServerOption = None, token: TokenOption = None) -> None:
    """Dashboard cards: stats for devices, alerts, incidents and actions."""

    async def _load_all() -> list[ResourceStore[Any]]:
        async with NethealApi.from_settings(_settings(server), auth_token=token, notifier=ConsoleSink()) as api:
            stores: list[ResourceStore[Any]] = [
                DeviceStore(api.devices),
                AlertStore(api.alerts),
                IncidentStore(api.incidents),
                ActionStore(api.actions),
            ]
            await asyncio.gather(*(store.mount() for store in stores))
        return stores

    for store in asyncio.run(_load_all()):
        console.print(f"[bold]{store.kind.title()}[/bold]")
        display.render_stats(console, store.stats, store.share_buckets)


@app.command()
def health(server: ServerOption = None, token: TokenOption = None) -> None:
    """Show overall platform health."""
    store = asyncio.run(_load(lambda api: HealthStore(api.health), server, token))
    current = store.current
    if current is None:
        raise typer.Exit(code=1)
    console.print(Text(f"Platform {current.status.value}", style=status_style(current.status)))
    display.render_stats(console, store.stats, store.share_buckets)
    console.print_json(data=current.model_dump(mode="json", exclude={"id", "created_at", "updated_at"}))


@app.command()
def dashboard(
    limit: Annotated[int, typer.Option("--limit", help="Recent activities to show")] = 10,
    server: ServerOption = None,
    token: TokenOption = None,
) -> None:
    """Show the dashboard overview, network status and recent activities."""
    store = asyncio.run(_load(lambda api: DashboardStore(api.dashboard, activity_limit=limit), server, token))
    current = store.current
    if current is None:
        raise typer.Exit(code=1)
    console.print("[bold]Overview[/bold]")
    console.print_json(data=current.overview)
    console.print("[bold]Network status[/bold]")
    console.print_json(data=current.network_status)
    display.render_stats(console, store.stats, store.share_buckets)


@app.command("network-map")
def network_map(server: ServerOption = None, token: TokenOption = None) -> None:
    """Show node and link counts of the network map."""
    store = asyncio.run(_load(lambda api: NetworkMapStore(api.topology), server, token))
    if store.current is None:
        raise typer.Exit(code=1)
    display.render_stats(console, store.stats, store.share_buckets)
