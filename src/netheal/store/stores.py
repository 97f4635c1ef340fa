"""Resource stores for each kind shown in the console."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from netheal.client.outcome import Failure, Outcome, Success
from netheal.client.resources import (
    ActionClient,
    AlertClient,
    DashboardClient,
    DeviceClient,
    HealthClient,
    IncidentClient,
    PolicyClient,
    TopologyClient,
)
from netheal.models import (
    Action,
    ActionStatus,
    Alert,
    AlertStatus,
    DashboardSnapshot,
    Device,
    DeviceStatus,
    Incident,
    IncidentStatus,
    NetworkMap,
    Policy,
    Severity,
    SystemHealth,
    TopologySnapshot,
)
from netheal.models.base import parse_records
from netheal.store.resource import R, ResourceStore
from netheal.views.stats import TOTAL, count_where, derive_stats


class DeviceStore(ResourceStore[Device]):
    kind = "devices"
    model = Device
    share_buckets = tuple(s.value for s in DeviceStatus)

    def __init__(self, client: DeviceClient) -> None:
        super().__init__(client.get_all)

    def compute_stats(self, items: tuple[Device, ...]) -> dict[str, int]:
        counts = derive_stats(items, "status", DeviceStatus)
        return {
            **counts,
            "online": counts[DeviceStatus.UP.value],
            "offline": counts[DeviceStatus.DOWN.value],
        }


class AlertStore(ResourceStore[Alert]):
    kind = "alerts"
    model = Alert
    share_buckets = tuple(s.value for s in Severity)

    def __init__(self, client: AlertClient, filters: Mapping[str, Any] | None = None) -> None:
        self.filters = dict(filters or {})
        super().__init__(lambda: client.get_all(self.filters))

    def compute_stats(self, items: tuple[Alert, ...]) -> dict[str, int]:
        by_status = derive_stats(items, "status", AlertStatus)
        return {
            **derive_stats(items, "severity", Severity),
            "open": by_status[AlertStatus.OPEN.value],
            "acknowledged": by_status[AlertStatus.ACKNOWLEDGED.value],
        }


class IncidentStore(ResourceStore[Incident]):
    kind = "incidents"
    model = Incident
    envelope_key = "incidents"
    share_buckets = ("open", "investigating", "resolved")

    def __init__(self, client: IncidentClient, filters: Mapping[str, Any] | None = None) -> None:
        self.filters = dict(filters or {})
        super().__init__(lambda: client.get_all(self.filters))

    def compute_stats(self, items: tuple[Incident, ...]) -> dict[str, int]:
        by_status = derive_stats(items, "status", IncidentStatus)
        return {
            TOTAL: len(items),
            "open": by_status[IncidentStatus.OPEN.value],
            "investigating": by_status[IncidentStatus.INVESTIGATING.value],
            "resolved": by_status[IncidentStatus.RESOLVED.value],
            "critical": count_where(items, lambda i: i.severity is Severity.CRITICAL),
        }


class PolicyStore(ResourceStore[Policy]):
    kind = "policies"
    model = Policy
    share_buckets = ("enabled", "disabled")

    def __init__(self, client: PolicyClient) -> None:
        super().__init__(client.get_all)

    def compute_stats(self, items: tuple[Policy, ...]) -> dict[str, int]:
        enabled = count_where(items, lambda p: p.enabled)
        return {
            **derive_stats(items, "category"),
            "enabled": enabled,
            "disabled": len(items) - enabled,
        }


_PENDING = {ActionStatus.PENDING, ActionStatus.PENDING_APPROVAL, ActionStatus.QUEUED}


class ActionStore(ResourceStore[Action]):
    kind = "actions"
    model = Action
    envelope_key = "data"
    share_buckets = ("completed", "failed", "running", "pending")

    def __init__(self, client: ActionClient, filters: Mapping[str, Any] | None = None) -> None:
        self.filters = dict(filters or {})
        super().__init__(lambda: client.get_history(self.filters))

    def compute_stats(self, items: tuple[Action, ...]) -> dict[str, int]:
        return {
            TOTAL: len(items),
            "completed": count_where(items, lambda a: a.status is ActionStatus.COMPLETED),
            "failed": count_where(items, lambda a: a.status is ActionStatus.FAILED),
            "running": count_where(items, lambda a: a.status is ActionStatus.EXECUTING),
            "pending": count_where(items, lambda a: a.status in _PENDING),
        }


class TopologyStore(ResourceStore[TopologySnapshot]):
    kind = "topology"
    model = TopologySnapshot
    share_buckets = ()

    def __init__(self, client: TopologyClient) -> None:
        super().__init__(client.get_all)

    @property
    def current(self) -> TopologySnapshot | None:
        """The console shows a single topology: the first one returned."""
        return self.items[0] if self.items else None

    def compute_stats(self, items: tuple[TopologySnapshot, ...]) -> dict[str, int]:
        current = items[0] if items else None
        return {
            TOTAL: len(items),
            "devices": len(current.devices) if current else 0,
            "links": len(current.links) if current else 0,
            "links_down": current.links_down if current else 0,
        }


class SnapshotStore(ResourceStore[R]):
    """Store for endpoints that return one object rather than a list."""

    share_buckets = ()

    def parse(self, payload: Any) -> tuple[R, ...]:
        if not isinstance(payload, dict):
            return ()
        return tuple(parse_records(self.model, [payload]))  # type: ignore[arg-type]

    @property
    def current(self) -> R | None:
        return self.items[0] if self.items else None


class HealthStore(SnapshotStore[SystemHealth]):
    kind = "health"
    model = SystemHealth

    def __init__(self, client: HealthClient) -> None:
        super().__init__(client.get_health)

    def compute_stats(self, items: tuple[SystemHealth, ...]) -> dict[str, int]:
        current = items[0] if items else None
        return {
            "components": len(current.components) if current else 0,
            "healthy": current.healthy_components if current else 0,
            "services": len(current.services) if current else 0,
        }


class DashboardStore(SnapshotStore[DashboardSnapshot]):
    """Overview, network status and recent activities, refreshed as one unit.

    The three requests run concurrently; the first failure fails the whole
    refresh and the previous snapshot stays on display.
    """

    kind = "dashboard"
    model = DashboardSnapshot

    def __init__(self, client: DashboardClient, activity_limit: int = 10) -> None:
        self.activity_limit = activity_limit
        self._client = client
        super().__init__(self._fetch_all)

    async def _fetch_all(self) -> Outcome:
        overview, network_status, activities = await asyncio.gather(
            self._client.get_overview(),
            self._client.get_network_status(),
            self._client.get_recent_activities(self.activity_limit),
        )
        for outcome in (overview, network_status, activities):
            if isinstance(outcome, Failure):
                return outcome
        return Success(
            {
                "overview": overview.data,
                "network_status": network_status.data,
                "activities": activities.data,
            }
        )

    def compute_stats(self, items: tuple[DashboardSnapshot, ...]) -> dict[str, int]:
        return {"activities": len(items[0].activities) if items else 0}


class NetworkMapStore(SnapshotStore[NetworkMap]):
    kind = "network_map"
    model = NetworkMap

    def __init__(self, client: TopologyClient) -> None:
        super().__init__(client.get_network_map)

    def compute_stats(self, items: tuple[NetworkMap, ...]) -> dict[str, int]:
        current = items[0] if items else None
        return {
            "nodes": len(current.nodes) if current else 0,
            "links": len(current.links) if current else 0,
        }
