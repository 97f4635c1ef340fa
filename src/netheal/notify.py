"""Notification sinks for user-visible failure messages.

A sink only displays: it never blocks the caller and never retries the
request that failed.
"""

from __future__ import annotations

import logging
import sys
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Literal, Protocol

from rich.console import Console

logger = logging.getLogger(__name__)

Level = Literal["error", "warning", "info", "success"]


@dataclass
class Notification:
    """A transient message shown to the user."""

    message: str
    level: Level = "error"
    created_at: float = field(default_factory=time.monotonic)
    ttl: float = 4.0

    def expired(self, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.created_at >= self.ttl


class NotificationSink(Protocol):
    def notify(self, message: str, level: Level = "error") -> None: ...


class MemorySink:
    """Keeps recent notifications in memory until their TTL runs out."""

    def __init__(self, ttl: float = 4.0, max_items: int = 50) -> None:
        self.ttl = ttl
        self._items: deque[Notification] = deque(maxlen=max_items)

    def notify(self, message: str, level: Level = "error") -> None:
        self._items.append(Notification(message=message, level=level, ttl=self.ttl))

    @property
    def history(self) -> list[Notification]:
        """Every notification still held, expired or not."""
        return list(self._items)

    def active(self, now: float | None = None) -> list[Notification]:
        """Notifications that should still be on screen."""
        return [n for n in self._items if not n.expired(now)]

    def clear(self) -> None:
        self._items.clear()


_LEVEL_STYLES: dict[str, str] = {
    "error": "bold red",
    "warning": "yellow",
    "info": "cyan",
    "success": "green",
}


class ConsoleSink:
    """Prints notifications to stderr through rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(file=sys.stderr)

    def notify(self, message: str, level: Level = "error") -> None:
        self.console.print(message, style=_LEVEL_STYLES.get(level), markup=False, highlight=False)
