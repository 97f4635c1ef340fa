"""Resource record schemas."""

from netheal.models.action import Action, ActionStatus
from netheal.models.alert import Alert, AlertStatus, Severity
from netheal.models.base import ResourceRecord, coerce_enum, parse_records
from netheal.models.device import Device, DeviceStatus
from netheal.models.incident import Incident, IncidentStatus
from netheal.models.platform import DashboardSnapshot, HealthStatus, NetworkMap, SystemHealth
from netheal.models.policy import Policy, PolicyStatus
from netheal.models.topology import LinkStatus, TopologyLink, TopologySnapshot

__all__ = [
    "ResourceRecord",
    "coerce_enum",
    "parse_records",
    "Device",
    "DeviceStatus",
    "Alert",
    "AlertStatus",
    "Severity",
    "Incident",
    "IncidentStatus",
    "Action",
    "ActionStatus",
    "Policy",
    "PolicyStatus",
    "TopologySnapshot",
    "TopologyLink",
    "LinkStatus",
    "SystemHealth",
    "HealthStatus",
    "DashboardSnapshot",
    "NetworkMap",
]
