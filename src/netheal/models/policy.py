from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import field_validator

from netheal.models.base import ResourceRecord, coerce_enum


class PolicyStatus(str, Enum):
    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    ACTIVE = "active"
    INACTIVE = "inactive"
    DEPRECATED = "deprecated"
    UNKNOWN = "unknown"


class Policy(ResourceRecord):
    """Automation policy mapping conditions to healing actions."""

    natural_key = "policy_id"

    policy_id: str | None = None
    name: str = ""
    description: str | None = None
    version: str | None = None
    category: str = "unknown"  # remediation, escalation, suppression, notification
    enabled: bool = False
    status: PolicyStatus = PolicyStatus.UNKNOWN
    priority: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> PolicyStatus:
        return coerce_enum(PolicyStatus, value, PolicyStatus.UNKNOWN)

    @field_validator("category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> str:
        return str(value).strip().lower() if value else "unknown"
