"""Derived views over fetched collections."""

from netheal.views.derive import (
    ACTION_VIEW,
    ALERT_VIEW,
    DEVICE_VIEW,
    INCIDENT_VIEW,
    POLICY_VIEW,
    ViewSpec,
    derive,
    filter_by_field,
    filter_by_status,
    filter_by_time_range,
    resolve_field,
    search_items,
    sort_by_key,
)
from netheal.views.query import QueryDescriptor
from netheal.views.stats import count_where, derive_stats, percentages

__all__ = [
    "QueryDescriptor",
    "ViewSpec",
    "DEVICE_VIEW",
    "ALERT_VIEW",
    "INCIDENT_VIEW",
    "ACTION_VIEW",
    "POLICY_VIEW",
    "derive",
    "search_items",
    "filter_by_status",
    "filter_by_field",
    "filter_by_time_range",
    "sort_by_key",
    "resolve_field",
    "derive_stats",
    "percentages",
    "count_where",
]
