from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from netheal.models.base import LenientDatetime, ResourceRecord, coerce_enum


class ActionStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    QUEUED = "queued"
    PENDING = "pending"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    ROLLED_BACK = "rolled_back"
    UNKNOWN = "unknown"


# The console labels executing actions as running
_STATUS_ALIASES = {"running": ActionStatus.EXECUTING}


class Action(ResourceRecord):
    """Remediation action executed against a device."""

    natural_key = "action_id"

    action_id: str | None = None
    type: str = ""
    category: str | None = None
    device: str = Field(default="", validation_alias=AliasChoices("target_device", "device"))
    description: str | None = None
    status: ActionStatus = ActionStatus.UNKNOWN
    risk_level: str | None = None
    execution_mode: str | None = None
    executed_by: str | None = None
    started_at: LenientDatetime = None
    completed_at: LenientDatetime = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> ActionStatus:
        if isinstance(value, str) and value.strip().lower() in _STATUS_ALIASES:
            return _STATUS_ALIASES[value.strip().lower()]
        return coerce_enum(ActionStatus, value, ActionStatus.UNKNOWN)
