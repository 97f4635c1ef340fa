"""Derived-view engine: search, filter and sort over a fetched collection.

All functions are pure. They return new lists and never modify the
collection or its records.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, TypeVar

from netheal.views.query import ALL, QueryDescriptor

T = TypeVar("T")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")

TIME_RANGES: dict[str, timedelta] = {
    "1h": timedelta(hours=1),
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}


@dataclass(frozen=True)
class ViewSpec:
    """Which record fields a list view searches and filters on."""

    search_fields: tuple[str, ...] = ("name", "description")
    status_field: str = "status"
    type_field: str | None = None


DEVICE_VIEW = ViewSpec(search_fields=("hostname", "mgmt_ip", "description", "location"), type_field="device_type")
ALERT_VIEW = ViewSpec(search_fields=("message", "device"), type_field="severity")
INCIDENT_VIEW = ViewSpec(search_fields=("title", "description"), type_field="severity")
ACTION_VIEW = ViewSpec(search_fields=("type", "device", "description"), type_field="category")
POLICY_VIEW = ViewSpec(search_fields=("name", "description"), type_field="category")


# ============================================
# Field access
# ============================================
def resolve_field(record: Any, path: str) -> Any:
    """Read ``path`` from a mapping or object; dotted paths walk nested values."""
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def field_text(value: Any) -> str:
    """Display text of a field value; missing values read as empty."""
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return ""
    return str(value)


def _as_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and _ISO_DATE.match(value):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sort_value(value: Any) -> tuple[int, Any]:
    """Total-order key: numbers, then dates, then case-folded text."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (int, float)):
        return (0, value)
    when = _as_datetime(value)
    if when is not None:
        return (1, when.timestamp())
    return (2, field_text(value).casefold())


# ============================================
# Pipeline stages
# ============================================
def search_items(items: Sequence[T], term: str, fields: Sequence[str]) -> list[T]:
    """Records where ANY of ``fields`` contains ``term`` (case-insensitive)."""
    if not term:
        return list(items)
    needle = term.lower()
    return [
        item
        for item in items
        if any(needle in field_text(resolve_field(item, f)).lower() for f in fields)
    ]


def filter_by_status(items: Sequence[T], status: str | None, field: str = "status") -> list[T]:
    if not status or status == ALL:
        return list(items)
    wanted = status.lower()
    return [item for item in items if field_text(resolve_field(item, field)).lower() == wanted]


def filter_by_field(items: Sequence[T], field: str | None, value: str | None) -> list[T]:
    """Exact match on a secondary discriminant (device type, severity, ...)."""
    if not field or not value or value == ALL:
        return list(items)
    return [item for item in items if field_text(resolve_field(item, field)) == value]


def sort_by_key(items: Sequence[T], key: str | None, direction: str = "asc") -> list[T]:
    """Stable sort; without a key the input order is kept."""
    if not key:
        return list(items)
    return sorted(
        items,
        key=lambda item: _sort_value(resolve_field(item, key)),
        reverse=direction == "desc",
    )


def filter_by_time_range(
    items: Sequence[T],
    time_range: str | None,
    date_field: str = "created_at",
    now: datetime | None = None,
) -> list[T]:
    """Records whose ``date_field`` falls inside the trailing window.

    Unknown ranges (and ``all``) pass everything; records without a usable
    timestamp are dropped once a window applies.
    """
    window = TIME_RANGES.get(time_range or ALL)
    if window is None:
        return list(items)
    start = (now or datetime.now(timezone.utc)) - window
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)

    selected = []
    for item in items:
        when = _as_datetime(resolve_field(item, date_field))
        if when is not None and when >= start:
            selected.append(item)
    return selected


def derive(collection: Sequence[T], query: QueryDescriptor, view: ViewSpec = ViewSpec()) -> list[T]:
    """Apply search, status filter, type filter and sort, in that order."""
    items = search_items(collection, query.search_term, view.search_fields)
    items = filter_by_status(items, query.status_filter, view.status_field)
    items = filter_by_field(items, view.type_field, query.type_filter)
    return sort_by_key(items, query.sort_key, query.sort_direction)
