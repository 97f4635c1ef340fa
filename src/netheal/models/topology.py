from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from netheal.models.base import ResourceRecord, coerce_enum


class LinkStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    DEGRADED = "degraded"
    UNKNOWN = "unknown"


class TopologyLink(BaseModel):
    model_config = ConfigDict(extra="allow")

    source_device: str
    destination_device: str
    source_interface: str | None = None
    destination_interface: str | None = None
    link_type: str | None = None
    status: LinkStatus = LinkStatus.UNKNOWN

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> LinkStatus:
        return coerce_enum(LinkStatus, value, LinkStatus.UNKNOWN)


class TopologySnapshot(ResourceRecord):
    """Discovered network topology at a point in time."""

    natural_key = "topology_id"

    topology_id: str | None = None
    name: str = ""
    version: str | None = None
    devices: list[Any] = Field(default_factory=list)
    links: list[TopologyLink] = Field(default_factory=list)
    health_score: float | None = None
    validation_status: str | None = None

    @property
    def links_down(self) -> int:
        return sum(1 for link in self.links if link.status is LinkStatus.DOWN)
