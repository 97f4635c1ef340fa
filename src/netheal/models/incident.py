from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from netheal.models.alert import Severity
from netheal.models.base import ResourceRecord, coerce_enum


class IncidentStatus(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    IN_PROGRESS = "in_progress"
    REMEDIATING = "remediating"
    RESOLVED = "resolved"
    CLOSED = "closed"
    ESCALATED = "escalated"
    UNKNOWN = "unknown"


class Incident(ResourceRecord):
    """Group of correlated alerts with its root-cause analysis."""

    natural_key = "incident_id"

    incident_id: str | None = None
    title: str = ""
    description: str | None = None
    # The server stores the lifecycle as ``state``; views call it status
    status: IncidentStatus = Field(
        default=IncidentStatus.UNKNOWN,
        validation_alias=AliasChoices("status", "state"),
    )
    severity: Severity = Severity.UNKNOWN
    priority: str | None = None
    category: str | None = None
    assigned_to: str | None = None
    alert_count: int = 0
    affected_devices: list[str] = Field(default_factory=list)
    final_root_cause: str | None = None
    root_cause_confidence: float | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> IncidentStatus:
        return coerce_enum(IncidentStatus, value, IncidentStatus.UNKNOWN)

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, value: Any) -> Severity:
        return coerce_enum(Severity, value, Severity.UNKNOWN)
