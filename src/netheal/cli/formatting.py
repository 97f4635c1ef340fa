"""Display formatting helpers for console tables."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any

from netheal.views.derive import field_text

_STATUS_STYLES: dict[str, str] = {
    # Device statuses
    "up": "green",
    "down": "red",
    "degraded": "yellow",
    "unreachable": "red",
    "maintenance": "blue",
    # Alert severities
    "critical": "bold red",
    "major": "dark_orange",
    "minor": "yellow",
    "warning": "yellow",
    "info": "blue",
    # Incident statuses
    "open": "red",
    "investigating": "dark_orange",
    "in_progress": "blue",
    "resolved": "green",
    "closed": "dim",
    # Action statuses
    "pending": "yellow",
    "executing": "blue",
    "completed": "green",
    "failed": "red",
    "cancelled": "dim",
    # Service health
    "healthy": "green",
    "unhealthy": "red",
    "error": "red",
}


def status_style(status: Any) -> str:
    """Rich style for a status or severity value; unknown values are dimmed."""
    return _STATUS_STYLES.get(field_text(status).lower(), "dim")


def format_percent(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{decimals}f}%"


def format_duration(milliseconds: float | None) -> str:
    if not milliseconds:
        return "0ms"
    seconds = int(milliseconds // 1000)
    minutes = seconds // 60
    hours = minutes // 60
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    if seconds > 0:
        return f"{seconds}s"
    return f"{milliseconds:g}ms"


_BYTE_UNITS = ["Bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def format_bytes(size: int | float, decimals: int = 2) -> str:
    if size == 0:
        return "0 Bytes"
    decimals = max(decimals, 0)
    i = min(int(math.floor(math.log(abs(size), 1024))), len(_BYTE_UNITS) - 1)
    value = round(size / 1024**i, decimals)
    return f"{value:g} {_BYTE_UNITS[i]}"


_BANDWIDTH_UNIT = re.compile(r"[gmk]bps", re.IGNORECASE)


def format_bandwidth(bandwidth: str | float | None) -> str:
    """Normalize a raw bits-per-second value; already-labelled values pass through."""
    if bandwidth is None or bandwidth == "":
        return "N/A"
    if isinstance(bandwidth, str) and _BANDWIDTH_UNIT.search(bandwidth):
        return bandwidth
    try:
        bps = float(bandwidth)
    except ValueError:
        return str(bandwidth)
    if bps >= 1_000_000_000:
        return f"{bps / 1_000_000_000:.1f} Gbps"
    if bps >= 1_000_000:
        return f"{bps / 1_000_000:.0f} Mbps"
    if bps >= 1_000:
        return f"{bps / 1_000:.0f} Kbps"
    return f"{bps:g} bps"


def format_relative_time(when: datetime | None, now: datetime | None = None) -> str:
    if when is None:
        return "N/A"
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    sec = int((now - when).total_seconds())
    if sec < 0:
        return "just now"
    if sec < 60:
        return f"{sec}s ago"
    if sec < 3600:
        return f"{sec // 60}m ago"
    if sec < 86400:
        return f"{sec // 3600}h {(sec % 3600) // 60:02d}m ago"
    return f"{sec // 86400}d ago"
