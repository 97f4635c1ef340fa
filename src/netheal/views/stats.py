"""Statistic reductions for dashboard cards."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

from netheal.views.derive import field_text, resolve_field

T = TypeVar("T")

TOTAL = "total"


def derive_stats(
    collection: Sequence[Any],
    field: str = "status",
    buckets: Iterable[Any] | None = None,
) -> dict[str, int]:
    """Count records per value of ``field``, plus ``total``.

    With ``buckets`` every listed value is reported, zero counts included;
    values outside the buckets are still counted under their own key.
    """
    counts: dict[str, int] = {}
    for bucket in buckets or ():
        counts[field_text(bucket.value if isinstance(bucket, Enum) else bucket)] = 0

    for record in collection:
        key = field_text(resolve_field(record, field))
        counts[key] = counts.get(key, 0) + 1

    counts[TOTAL] = len(collection)
    return counts


def percentages(stats: dict[str, int], buckets: Iterable[str] | None = None) -> dict[str, float]:
    """Percent of total per bucket; an empty total gives 0.0 everywhere.

    ``buckets`` limits the result to keys that partition the total, so
    derived counts (e.g. ``online`` next to ``up``) are not shared twice.
    """
    total = stats.get(TOTAL, 0)
    keys = [key for key in stats if key != TOTAL] if buckets is None else [key for key in buckets if key in stats]
    return {key: (stats[key] * 100.0 / total if total else 0.0) for key in keys}


def count_where(collection: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for record in collection if predicate(record))
