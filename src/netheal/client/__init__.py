"""HTTP client layer: executor, outcomes and resource clients."""

from __future__ import annotations

from netheal.client.executor import RequestExecutor
from netheal.client.outcome import Failure, FailureKind, Outcome, Success
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
from netheal.core.settings import Settings, get_settings, load_auth_token
from netheal.notify import MemorySink, NotificationSink


class NethealApi:
    """All resource clients sharing one executor."""

    def __init__(self, executor: RequestExecutor) -> None:
        self.executor = executor
        self.devices = DeviceClient(executor)
        self.alerts = AlertClient(executor)
        self.incidents = IncidentClient(executor)
        self.policies = PolicyClient(executor)
        self.topology = TopologyClient(executor)
        self.actions = ActionClient(executor)
        self.health = HealthClient(executor)
        self.dashboard = DashboardClient(executor)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        auth_token: str | None = None,
        notifier: NotificationSink | None = None,
    ) -> NethealApi:
        """Build the client stack from settings and the stored credential.

        Without a ``notifier``, failures go to a ``MemorySink`` using the
        configured notification TTL.
        """
        settings = settings or get_settings()
        executor = RequestExecutor(
            settings.api_url,
            auth_token=load_auth_token(settings, auth_token),
            timeout=settings.request_timeout,
            notifier=notifier if notifier is not None else MemorySink(ttl=settings.notification_ttl),
        )
        return cls(executor)

    async def __aenter__(self) -> NethealApi:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.executor.aclose()


__all__ = [
    "NethealApi",
    "RequestExecutor",
    "Outcome",
    "Success",
    "Failure",
    "FailureKind",
    "DeviceClient",
    "AlertClient",
    "IncidentClient",
    "PolicyClient",
    "TopologyClient",
    "ActionClient",
    "HealthClient",
    "DashboardClient",
]
