"""Single-object views: platform health, dashboard overview, network map."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from netheal.models.base import LenientDatetime, ResourceRecord, coerce_enum


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


class SystemHealth(ResourceRecord):
    """Overall platform health as reported by ``GET /health``."""

    status: HealthStatus = Field(
        default=HealthStatus.UNKNOWN,
        validation_alias=AliasChoices("status", "overall_status"),
    )
    timestamp: LenientDatetime = None
    uptime: float | None = None
    services: dict[str, Any] = Field(default_factory=dict)
    components: dict[str, Any] = Field(default_factory=dict)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> HealthStatus:
        return coerce_enum(HealthStatus, value, HealthStatus.UNKNOWN)

    @field_validator("services", "components", mode="before")
    @classmethod
    def _mapping(cls, value: Any) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @property
    def healthy_components(self) -> int:
        return sum(1 for state in self.components.values() if str(state).lower() == HealthStatus.HEALTHY.value)


class DashboardSnapshot(ResourceRecord):
    """Overview, network status and recent activity fetched together."""

    overview: dict[str, Any] = Field(default_factory=dict)
    network_status: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("network_status", "networkStatus"),
    )
    activities: list[Any] = Field(default_factory=list)

    @field_validator("overview", "network_status", mode="before")
    @classmethod
    def _mapping(cls, value: Any) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @field_validator("activities", mode="before")
    @classmethod
    def _activities(cls, value: Any) -> list[Any]:
        if isinstance(value, dict):
            value = value.get("activities", value.get("data"))
        return value if isinstance(value, list) else []


class NetworkMap(ResourceRecord):
    """Node/link graph used to draw the topology view."""

    nodes: list[Any] = Field(default_factory=list, validation_alias=AliasChoices("nodes", "devices"))
    links: list[Any] = Field(default_factory=list, validation_alias=AliasChoices("links", "edges"))

    @field_validator("nodes", "links", mode="before")
    @classmethod
    def _sequence(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []
