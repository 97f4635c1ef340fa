"""Data-fetch stores: per-resource collections with fetch lifecycle."""

from netheal.store.resource import FetchState, ResourceStore, unwrap_collection
from netheal.store.stores import (
    ActionStore,
    AlertStore,
    DashboardStore,
    DeviceStore,
    HealthStore,
    IncidentStore,
    NetworkMapStore,
    PolicyStore,
    SnapshotStore,
    TopologyStore,
)

__all__ = [
    "FetchState",
    "ResourceStore",
    "unwrap_collection",
    "SnapshotStore",
    "DeviceStore",
    "AlertStore",
    "IncidentStore",
    "PolicyStore",
    "ActionStore",
    "TopologyStore",
    "HealthStore",
    "DashboardStore",
    "NetworkMapStore",
]
