"""Unit tests for resource stores (fetch lifecycle, coalescing, aggregates)."""

import asyncio

import httpx
import pytest

from netheal.client.outcome import Failure, FailureKind, Success
from netheal.models import DeviceStatus, HealthStatus
from netheal.store import (
    ActionStore,
    AlertStore,
    DashboardStore,
    DeviceStore,
    FetchState,
    HealthStore,
    IncidentStore,
    NetworkMapStore,
    PolicyStore,
    ResourceStore,
    TopologyStore,
    unwrap_collection,
)
from netheal.views import QueryDescriptor, ViewSpec, derive, derive_stats, percentages


class FakeFetcher:
    """Scripted "get all" returning queued outcomes, optionally gated."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        return self.outcomes.pop(0)


class DeviceFetchStore(DeviceStore):
    def __init__(self, fetcher):
        ResourceStore.__init__(self, fetcher)


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    def test_starts_idle_and_empty(self):
        store = DeviceFetchStore(FakeFetcher())

        assert store.state is FetchState.IDLE
        assert store.items == ()
        assert store.error is None
        assert not store.loading
        assert store.stats["total"] == 0

    @pytest.mark.asyncio
    async def test_mount_loads_collection(self):
        store = DeviceFetchStore(FakeFetcher(Success([{"id": 1, "status": "up"}, {"id": 2, "status": "down"}])))

        assert await store.mount() is True

        assert store.state is FetchState.READY
        assert [d.id for d in store.items] == ["1", "2"]
        assert store.last_updated is not None

    @pytest.mark.asyncio
    async def test_loading_visible_during_fetch(self):
        fetcher = FakeFetcher(Success([]))
        fetcher.gate = asyncio.Event()
        store = DeviceFetchStore(fetcher)

        task = asyncio.create_task(store.refetch())
        await asyncio.sleep(0)
        assert store.loading
        assert store.state is FetchState.LOADING

        fetcher.gate.set()
        await task
        assert not store.loading

    @pytest.mark.asyncio
    async def test_failure_keeps_last_collection(self):
        store = DeviceFetchStore(
            FakeFetcher(
                Success([{"id": 1, "status": "up"}]),
                Failure(FailureKind.NETWORK, "connection refused"),
                Success([{"id": 9, "status": "down"}]),
            )
        )
        await store.mount()

        await store.refetch()
        assert store.state is FetchState.ERRORED
        assert store.error == "connection refused"
        assert [d.id for d in store.items] == ["1"]

        await store.refetch()
        assert store.state is FetchState.READY
        assert store.error is None
        assert [d.id for d in store.items] == ["9"]

    @pytest.mark.asyncio
    async def test_failure_on_first_fetch_leaves_empty_collection(self):
        store = DeviceFetchStore(FakeFetcher(Failure(FailureKind.TIMEOUT, "Request timed out after 30s")))

        await store.mount()

        assert store.state is FetchState.ERRORED
        assert store.items == ()

    @pytest.mark.asyncio
    async def test_unmount_discards_collection_and_late_response(self):
        fetcher = FakeFetcher(Success([{"id": 1}]), Success([{"id": 2}]))
        store = DeviceFetchStore(fetcher)
        await store.mount()

        fetcher.gate = asyncio.Event()
        task = asyncio.create_task(store.refetch())
        await asyncio.sleep(0)
        store.unmount()
        fetcher.gate.set()
        await task

        assert store.state is FetchState.IDLE
        assert store.items == ()

    @pytest.mark.asyncio
    async def test_exception_in_fetch_restores_state(self):
        async def broken():
            raise RuntimeError("boom")

        store = DeviceFetchStore(broken)

        with pytest.raises(RuntimeError):
            await store.refetch()
        assert store.state is FetchState.IDLE
        assert not store.loading


@pytest.mark.asyncio
async def test_failing_listener_does_not_wedge_store():
    fetcher = FakeFetcher(Success([{"id": 1}]))
    store = DeviceFetchStore(fetcher)
    raised = []

    def listener(s):
        if s.state is FetchState.LOADING and not raised:
            raised.append(True)
            raise RuntimeError("listener failed")

    store.subscribe(listener)

    with pytest.raises(RuntimeError):
        await store.refetch()
    assert not store.loading
    assert fetcher.calls == 0

    assert await store.refetch() is True
    assert store.state is FetchState.READY
    assert [d.id for d in store.items] == ["1"]


# =============================================================================
# Coalescing
# =============================================================================


class TestCoalescing:
    @pytest.mark.asyncio
    async def test_second_refetch_while_loading_is_noop(self):
        fetcher = FakeFetcher(Success([{"id": 1, "status": "up"}]), Success([{"id": 2, "status": "up"}]))
        store = DeviceFetchStore(fetcher)
        replacements = []
        store.subscribe(lambda s: replacements.append(s.items) if s.state is FetchState.READY else None)

        results = await asyncio.gather(store.refetch(), store.refetch())

        assert results == [True, False]
        assert fetcher.calls == 1
        assert len(replacements) == 1
        assert [d.id for d in store.items] == ["1"]

    @pytest.mark.asyncio
    async def test_refetch_allowed_after_completion(self):
        fetcher = FakeFetcher(Success([]), Success([{"id": 3}]))
        store = DeviceFetchStore(fetcher)

        await store.refetch()
        await store.refetch()

        assert fetcher.calls == 2
        assert [d.id for d in store.items] == ["3"]


# =============================================================================
# Subscriptions
# =============================================================================


@pytest.mark.asyncio
async def test_subscribe_and_unsubscribe():
    store = DeviceFetchStore(FakeFetcher(Success([]), Success([])))
    seen = []
    unsubscribe = store.subscribe(lambda s: seen.append(s.state))

    await store.refetch()
    unsubscribe()
    await store.refetch()

    assert seen == [FetchState.LOADING, FetchState.READY]


# =============================================================================
# Per-kind stores over the HTTP stack
# =============================================================================


def _serving(payloads):
    def handler(request):
        return httpx.Response(200, json=payloads[request.url.path.removeprefix("/api")])

    return handler


@pytest.mark.asyncio
async def test_device_scenario(make_api):
    api = make_api(_serving({"/devices": [{"id": 1, "status": "up"}, {"id": 2, "status": "down"}]}))
    store = DeviceStore(api.devices)

    await store.mount()

    assert derive_stats(store.items) == {"up": 1, "down": 1, "total": 2}
    assert store.stats["online"] == 1
    assert store.stats["offline"] == 1
    assert store.stats[DeviceStatus.DEGRADED.value] == 0
    found = derive(store.items, QueryDescriptor(search_term="down"), ViewSpec(search_fields=("status",)))
    assert [d.id for d in found] == ["2"]


@pytest.mark.asyncio
async def test_http_failure_notifies_once_and_holds_error(make_api, sink):
    api = make_api(lambda request: httpx.Response(503, json={"message": "backend offline"}))
    store = DeviceStore(api.devices)

    await store.mount()

    assert store.error == "backend offline"
    assert [n.message for n in sink.history] == ["API Error: backend offline"]


@pytest.mark.asyncio
async def test_alert_store_stats_and_filters(make_api, recorder):
    def handler(request):
        recorder.append(request)
        return httpx.Response(
            200,
            json=[
                {"alert_id": "a1", "severity": "critical", "status": "open"},
                {"alert_id": "a2", "severity": "minor", "status": "acknowledged"},
                {"alert_id": "a3", "severity": "critical", "status": "resolved"},
            ],
        )

    store = AlertStore(make_api(handler).alerts, filters={"device": "r1"})
    await store.mount()

    assert dict(recorder[0].url.params) == {"device": "r1"}
    assert store.stats["total"] == 3
    assert store.stats["critical"] == 2
    assert store.stats["major"] == 0
    assert store.stats["open"] == 1
    assert store.stats["acknowledged"] == 1


@pytest.mark.asyncio
async def test_incident_store_unwraps_envelope(make_api):
    api = make_api(
        _serving(
            {
                "/incidents": {
                    "incidents": [
                        {"incident_id": "i1", "state": "open", "severity": "critical"},
                        {"incident_id": "i2", "status": "resolved", "severity": "minor"},
                    ],
                    "total": 2,
                }
            }
        )
    )
    store = IncidentStore(api.incidents)

    await store.mount()

    assert store.stats == {"total": 2, "open": 1, "investigating": 0, "resolved": 1, "critical": 1}


@pytest.mark.asyncio
async def test_action_store_unwraps_data_envelope(make_api):
    api = make_api(
        _serving(
            {
                "/actions": {
                    "data": [
                        {"action_id": "x1", "status": "completed"},
                        {"action_id": "x2", "status": "running"},
                        {"action_id": "x3", "status": "pending_approval"},
                        {"action_id": "x4", "status": "failed"},
                    ]
                }
            }
        )
    )
    store = ActionStore(api.actions)

    await store.mount()

    assert store.stats == {"total": 4, "completed": 1, "failed": 1, "running": 1, "pending": 1}


@pytest.mark.asyncio
async def test_policy_store_stats(make_api):
    api = make_api(
        _serving(
            {
                "/policies": [
                    {"policy_id": "p1", "name": "a", "enabled": True, "category": "remediation"},
                    {"policy_id": "p2", "name": "b", "enabled": False, "category": "escalation"},
                    {"policy_id": "p3", "name": "c", "enabled": True, "category": "remediation"},
                ]
            }
        )
    )
    store = PolicyStore(api.policies)

    await store.mount()

    assert store.stats["enabled"] == 2
    assert store.stats["disabled"] == 1
    assert store.stats["remediation"] == 2


@pytest.mark.asyncio
async def test_topology_store_current(make_api):
    api = make_api(
        _serving(
            {
                "/topology": [
                    {"topology_id": "main", "name": "Main", "links": [
                        {"source_device": "r1", "destination_device": "r2", "status": "down"}
                    ]},
                    {"topology_id": "lab", "name": "Lab"},
                ]
            }
        )
    )
    store = TopologyStore(api.topology)
    assert store.current is None

    await store.mount()

    assert store.current.id == "main"
    assert store.stats["links_down"] == 1


def test_unwrap_collection():
    assert unwrap_collection([1, 2]) == [1, 2]
    assert unwrap_collection({"data": [1]}, "data") == [1]
    assert unwrap_collection({"data": "nope"}, "data") == []
    assert unwrap_collection({"incidents": [1]}) == []
    assert unwrap_collection(None) == []


@pytest.mark.asyncio
async def test_device_shares_exclude_derived_counts(make_api):
    api = make_api(_serving({"/devices": [{"id": 1, "status": "up"}, {"id": 2, "status": "down"}]}))
    store = DeviceStore(api.devices)
    await store.mount()

    shares = percentages(store.stats, store.share_buckets)

    assert "online" not in shares
    assert "offline" not in shares
    assert sum(shares.values()) == pytest.approx(100.0)


# =============================================================================
# Single-object stores
# =============================================================================


@pytest.mark.asyncio
async def test_health_store(make_api):
    api = make_api(
        _serving(
            {
                "/health": {
                    "overall_status": "Healthy",
                    "timestamp": "2024-05-01T10:00:00Z",
                    "uptime": 42.5,
                    "components": {"rca": "healthy", "telemetry": "degraded"},
                }
            }
        )
    )
    store = HealthStore(api.health)

    await store.mount()

    assert store.current.status is HealthStatus.HEALTHY
    assert store.current.uptime == 42.5
    assert store.stats == {"components": 2, "healthy": 1, "services": 0}


@pytest.mark.asyncio
async def test_health_store_failure_keeps_snapshot(make_api):
    responses = [
        httpx.Response(200, json={"status": "healthy"}),
        httpx.Response(503, json={"status": "unhealthy", "message": "rca engine down"}),
    ]
    store = HealthStore(make_api(lambda request: responses.pop(0)).health)

    await store.mount()
    await store.refetch()

    assert store.state is FetchState.ERRORED
    assert store.error == "rca engine down"
    assert store.current.status is HealthStatus.HEALTHY


@pytest.mark.asyncio
async def test_dashboard_store_combines_three_requests(make_api, recorder):
    def handler(request):
        recorder.append(request)
        payloads = {
            "/api/dashboard/overview": {"devices": 12},
            "/api/dashboard/network-status": {"networkHealth": 97},
            "/api/dashboard/activities": {"data": [{"type": "alert"}, {"type": "action"}]},
        }
        return httpx.Response(200, json=payloads[request.url.path])

    store = DashboardStore(make_api(handler).dashboard, activity_limit=5)

    await store.mount()

    assert store.current.overview == {"devices": 12}
    assert store.current.network_status == {"networkHealth": 97}
    assert len(store.current.activities) == 2
    assert store.stats == {"activities": 2}
    activities = next(r for r in recorder if r.url.path.endswith("/activities"))
    assert dict(activities.url.params) == {"limit": "5"}


@pytest.mark.asyncio
async def test_dashboard_store_fails_when_any_part_fails(make_api):
    def handler(request):
        if request.url.path.endswith("/network-status"):
            return httpx.Response(500, json={"message": "status unavailable"})
        return httpx.Response(200, json={})

    store = DashboardStore(make_api(handler).dashboard)

    await store.mount()

    assert store.state is FetchState.ERRORED
    assert store.error == "status unavailable"
    assert store.current is None


@pytest.mark.asyncio
async def test_network_map_store(make_api):
    api = make_api(_serving({"/topology/network-map": {"nodes": [{"id": "r1"}, {"id": "r2"}], "edges": [{"from": "r1", "to": "r2"}]}}))
    store = NetworkMapStore(api.topology)

    await store.mount()

    assert store.stats == {"nodes": 2, "links": 1}


@pytest.mark.asyncio
async def test_snapshot_store_ignores_non_object_payload(make_api):
    store = HealthStore(make_api(_serving({"/health": ["unexpected"]})).health)

    await store.mount()

    assert store.state is FetchState.READY
    assert store.current is None
