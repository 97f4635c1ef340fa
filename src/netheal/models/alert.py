from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from netheal.models.base import LenientDatetime, ResourceRecord, coerce_enum


class Severity(str, Enum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    WARNING = "warning"
    INFO = "info"
    UNKNOWN = "unknown"


class AlertStatus(str, Enum):
    OPEN = "open"
    ACKNOWLEDGED = "acknowledged"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    SUPPRESSED = "suppressed"
    UNKNOWN = "unknown"


class Alert(ResourceRecord):
    """Alert raised by a device or monitoring source."""

    natural_key = "alert_id"

    alert_id: str | None = None
    device: str = ""
    device_ip: str | None = None
    type: str = ""
    category: str | None = None
    severity: Severity = Severity.UNKNOWN
    status: AlertStatus = AlertStatus.UNKNOWN
    message: str = ""
    acknowledged_by: str | None = None
    occurrence_count: int = 1
    source_system: str | None = None
    last_occurrence: LenientDatetime = None
    affected_services: list[str] = Field(default_factory=list)

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, value: Any) -> Severity:
        return coerce_enum(Severity, value, Severity.UNKNOWN)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> AlertStatus:
        return coerce_enum(AlertStatus, value, AlertStatus.UNKNOWN)
