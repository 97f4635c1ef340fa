"""Resource clients - one method per server operation.

Every method returns an awaitable ``Outcome``. Methods taking a record id
validate it before any coroutine is created, so a missing id raises
``MissingIdError`` at the call site rather than when awaited.
"""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote

from netheal.client.executor import RequestExecutor
from netheal.client.outcome import Outcome
from netheal.errors import MissingIdError

Params = Mapping[str, Any] | None


def require_id(resource_id: Any, operation: str) -> str:
    """Return the id as a path segment, or raise MissingIdError."""
    if isinstance(resource_id, Enum):
        resource_id = resource_id.value
    if resource_id is None:
        raise MissingIdError(operation)
    text = str(resource_id).strip()
    if not text:
        raise MissingIdError(operation)
    return quote(text, safe="")


class ResourceClient:
    """Base for typed endpoint groups sharing one executor."""

    path: str = ""

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def _item(self, resource_id: Any, operation: str, suffix: str = "") -> str:
        return f"{self.path}/{require_id(resource_id, operation)}{suffix}"

    def get_all(self, params: Params = None) -> Awaitable[Outcome]:
        return self._executor.get(self.path, params)

    def get_by_id(self, resource_id: Any) -> Awaitable[Outcome]:
        return self._executor.get(self._item(resource_id, f"{self.path} get_by_id"))


class DeviceClient(ResourceClient):
    path = "/devices"

    def create(self, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.post(self.path, dict(data))

    def update(self, device_id: Any, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.put(self._item(device_id, "devices update"), dict(data))

    def delete(self, device_id: Any) -> Awaitable[Outcome]:
        return self._executor.delete(self._item(device_id, "devices delete"))

    def get_stats(self) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/stats")

    def test_connectivity(self, device_id: Any) -> Awaitable[Outcome]:
        return self._executor.post(self._item(device_id, "devices test_connectivity", "/test"))


class AlertClient(ResourceClient):
    path = "/alerts"

    def create(self, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.post(self.path, dict(data))

    def update_status(self, alert_id: Any, status: str) -> Awaitable[Outcome]:
        return self._executor.patch(self._item(alert_id, "alerts update_status", "/status"), {"status": status})

    def acknowledge(self, alert_id: Any, user_id: str | None = None) -> Awaitable[Outcome]:
        return self._executor.patch(self._item(alert_id, "alerts acknowledge", "/acknowledge"), {"userId": user_id} if user_id is not None else {})

    def get_stats(self) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/stats")

    def get_by_severity(self, severity: str) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/severity/{require_id(severity, 'alerts get_by_severity')}")


class IncidentClient(ResourceClient):
    path = "/incidents"

    def create(self, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.post(self.path, dict(data))

    def update(self, incident_id: Any, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.put(self._item(incident_id, "incidents update"), dict(data))

    def close(self, incident_id: Any, resolution: str) -> Awaitable[Outcome]:
        return self._executor.patch(self._item(incident_id, "incidents close", "/close"), {"resolution": resolution})

    def get_stats(self) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/stats")

    def trigger_rca(self, incident_id: Any) -> Awaitable[Outcome]:
        return self._executor.post(self._item(incident_id, "incidents trigger_rca", "/rca"))


class PolicyClient(ResourceClient):
    path = "/policies"

    def create(self, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.post(self.path, dict(data))

    def update(self, policy_id: Any, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.put(self._item(policy_id, "policies update"), dict(data))

    def delete(self, policy_id: Any) -> Awaitable[Outcome]:
        return self._executor.delete(self._item(policy_id, "policies delete"))

    def toggle_status(self, policy_id: Any, enabled: bool) -> Awaitable[Outcome]:
        return self._executor.patch(self._item(policy_id, "policies toggle_status", "/status"), {"enabled": enabled})

    def test(self, policy_id: Any, data: Mapping[str, Any] | None = None) -> Awaitable[Outcome]:
        return self._executor.post(self._item(policy_id, "policies test", "/test"), dict(data or {}))


class TopologyClient(ResourceClient):
    path = "/topology"

    def update(self, topology_id: Any, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.put(self._item(topology_id, "topology update"), dict(data))

    def discover(self) -> Awaitable[Outcome]:
        return self._executor.post(f"{self.path}/discover")

    def get_network_map(self) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/network-map")

    def get_service_dependencies(self) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/service-dependencies")

    def validate(self, topology_id: Any) -> Awaitable[Outcome]:
        return self._executor.post(self._item(topology_id, "topology validate", "/validate"))


class ActionClient(ResourceClient):
    path = "/actions"

    def execute(self, data: Mapping[str, Any]) -> Awaitable[Outcome]:
        return self._executor.post(f"{self.path}/execute", dict(data))

    def get_history(self, params: Params = None) -> Awaitable[Outcome]:
        # The server has no separate history listing; all actions are history.
        return self._executor.get(self.path, params)

    def get_action_history(self, action_id: Any) -> Awaitable[Outcome]:
        return self._executor.get(self._item(action_id, "actions get_action_history", "/history"))

    def get_templates(self) -> Awaitable[Outcome]:
        return self._executor.get(f"{self.path}/templates")

    def cancel(self, action_id: Any) -> Awaitable[Outcome]:
        return self._executor.post(self._item(action_id, "actions cancel", "/cancel"))


class HealthClient:
    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def get_health(self) -> Awaitable[Outcome]:
        return self._executor.get("/health")

    def get_metrics(self) -> Awaitable[Outcome]:
        return self._executor.get("/metrics")

    def get_performance(self) -> Awaitable[Outcome]:
        return self._executor.get("/health/performance")

    def get_service_status(self) -> Awaitable[Outcome]:
        return self._executor.get("/health/services")

    def get_component_health(self) -> Awaitable[Outcome]:
        return self._executor.get("/health/components")


class DashboardClient:
    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    def get_overview(self) -> Awaitable[Outcome]:
        return self._executor.get("/dashboard/overview")

    def get_realtime_stats(self) -> Awaitable[Outcome]:
        return self._executor.get("/dashboard/realtime")

    def get_trends(self, time_range: str = "24h") -> Awaitable[Outcome]:
        return self._executor.get("/dashboard/trends", {"range": time_range})

    def get_network_status(self) -> Awaitable[Outcome]:
        return self._executor.get("/dashboard/network-status")

    def get_recent_activities(self, limit: int = 10) -> Awaitable[Outcome]:
        return self._executor.get("/dashboard/activities", {"limit": limit})
