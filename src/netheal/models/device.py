from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from netheal.models.base import LenientDatetime, ResourceRecord, coerce_enum


class DeviceStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    DEGRADED = "degraded"
    UNREACHABLE = "unreachable"
    MAINTENANCE = "maintenance"
    UNKNOWN = "unknown"


# Aliases reported by older collectors
_STATUS_ALIASES = {"online": DeviceStatus.UP, "offline": DeviceStatus.DOWN}


class Device(ResourceRecord):
    """Managed network device."""

    natural_key = "hostname"

    hostname: str = ""
    mgmt_ip: str | None = None
    device_type: str = "unknown"  # router, switch, firewall, server, ...
    status: DeviceStatus = DeviceStatus.UNKNOWN
    vendor: str | None = None
    model: str | None = None
    os_version: str | None = None
    site: str | None = None
    location: str | None = None
    description: str | None = None
    cpu: float | None = None
    memory: float | None = None
    temperature: float | None = None
    last_seen: LenientDatetime = None
    automation_enabled: bool = False
    tags: list[str] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> DeviceStatus:
        if isinstance(value, str) and value.strip().lower() in _STATUS_ALIASES:
            return _STATUS_ALIASES[value.strip().lower()]
        return coerce_enum(DeviceStatus, value, DeviceStatus.UNKNOWN)

    @field_validator("device_type", mode="before")
    @classmethod
    def _device_type(cls, value: Any) -> str:
        return str(value).strip().lower() if value else "unknown"
