"""Rich rendering for derived views."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from netheal.cli.formatting import format_percent, format_relative_time, status_style
from netheal.store.resource import ResourceStore
from netheal.views import percentages, resolve_field
from netheal.views.derive import field_text
from netheal.views.stats import TOTAL

# (header, field path) pairs per list view
Columns = Sequence[tuple[str, str]]

DEVICE_COLUMNS: Columns = (
    ("Hostname", "hostname"),
    ("Mgmt IP", "mgmt_ip"),
    ("Type", "device_type"),
    ("Status", "status"),
    ("Location", "location"),
    ("Last seen", "last_seen"),
)
ALERT_COLUMNS: Columns = (
    ("Severity", "severity"),
    ("Status", "status"),
    ("Device", "device"),
    ("Message", "message"),
    ("Created", "created_at"),
)
INCIDENT_COLUMNS: Columns = (
    ("Id", "incident_id"),
    ("Title", "title"),
    ("Severity", "severity"),
    ("Status", "status"),
    ("Created", "created_at"),
)
ACTION_COLUMNS: Columns = (
    ("Type", "type"),
    ("Device", "device"),
    ("Category", "category"),
    ("Status", "status"),
    ("Created", "created_at"),
)
POLICY_COLUMNS: Columns = (
    ("Name", "name"),
    ("Category", "category"),
    ("Enabled", "enabled"),
    ("Status", "status"),
)

_STYLED_FIELDS = {"status", "severity"}


def _cell(record: Any, field: str) -> Text:
    value = resolve_field(record, field)
    if isinstance(value, datetime):
        return Text(format_relative_time(value))
    text = field_text(value)
    if field in _STYLED_FIELDS:
        return Text(text, style=status_style(text))
    return Text(text)


def render_records(console: Console, title: str, records: Sequence[Any], columns: Columns) -> None:
    table = Table(title=title, show_lines=False, header_style="bold")
    for header, _ in columns:
        table.add_column(header)
    for record in records:
        table.add_row(*(_cell(record, field) for _, field in columns))
    console.print(table)


def render_stats(console: Console, stats: dict[str, int], buckets: Sequence[str] | None = None) -> None:
    """One line of counts; keys in ``buckets`` also show their share of the total."""
    shares = percentages(stats, buckets)
    parts = [f"[bold]total[/bold] {stats[TOTAL]}"] if TOTAL in stats else []
    for key, count in stats.items():
        if key == TOTAL:
            continue
        label = f"[{status_style(key)}]{escape(key) or '-'}[/] {count}"
        if key in shares:
            label += f" ({format_percent(shares[key], 0)})"
        parts.append(label)
    console.print("  ".join(parts))


def render_store(console: Console, store: ResourceStore[Any], records: Sequence[Any], columns: Columns) -> None:
    """Table of derived records plus the store's stats and any held error."""
    shown = f"{len(records)} of {len(store.items)}"
    render_records(console, f"{store.kind.title()} ({shown})", records, columns)
    render_stats(console, store.stats, store.share_buckets)
    if store.error:
        console.print(Text(f"Showing last known data: {store.error}", style="yellow"))
