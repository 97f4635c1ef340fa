"""Per-resource fetch state machine.

A store owns one collection of records and its fetch lifecycle::

    IDLE -> LOADING -> READY | ERRORED
              ^__________ refetch() ___|

Views read ``items``, ``loading``, ``error`` and ``stats``; they call
``refetch()`` to refresh. A failed fetch keeps the last collection on
display and holds the error until the next successful fetch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from netheal.client.outcome import Failure, Outcome
from netheal.models.base import ResourceRecord, parse_records
from netheal.views.stats import derive_stats

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=ResourceRecord)

Fetcher = Callable[[], Awaitable[Outcome]]
Listener = Callable[["ResourceStore[Any]"], None]


class FetchState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


def unwrap_collection(payload: Any, envelope_key: str | None = None) -> list[Any]:
    """Extract the record list from a bare list or an envelope object."""
    if isinstance(payload, list):
        return payload
    if envelope_key and isinstance(payload, dict) and isinstance(payload.get(envelope_key), list):
        return payload[envelope_key]
    return []


class ResourceStore(Generic[R]):
    """Stateful wrapper around one resource kind's "get all" call."""

    kind: ClassVar[str] = "resource"
    model: ClassVar[type[ResourceRecord]] = ResourceRecord
    envelope_key: ClassVar[str | None] = None
    # Stats keys that split the total; None means every key does
    share_buckets: ClassVar[tuple[str, ...] | None] = None

    def __init__(self, fetch: Fetcher) -> None:
        self._fetch = fetch
        self._items: tuple[R, ...] = ()
        self._stats: dict[str, int] = self.compute_stats(())
        self._state = FetchState.IDLE
        self._error: str | None = None
        self._in_flight = False
        self._epoch = 0
        self._listeners: list[Listener] = []
        self.last_updated: float | None = None

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def items(self) -> tuple[R, ...]:
        return self._items

    @property
    def data(self) -> tuple[R, ...]:
        return self._items

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._in_flight

    @property
    def stats(self) -> dict[str, int]:
        return self._stats

    def compute_stats(self, items: tuple[R, ...]) -> dict[str, int]:
        """Aggregates shown next to the list; recomputed on every replacement."""
        return derive_stats(items, "status")

    def parse(self, payload: Any) -> tuple[R, ...]:
        return tuple(parse_records(self.model, unwrap_collection(payload, self.envelope_key)))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(store)`` on every state change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def mount(self) -> bool:
        return await self.refetch()

    def unmount(self) -> None:
        """Drop the collection; a fetch still in flight is ignored when it lands."""
        self._epoch += 1
        self._listeners.clear()
        self._in_flight = False
        self._items = ()
        self._stats = self.compute_stats(())
        self._error = None
        self._state = FetchState.IDLE
        self.last_updated = None

    async def refetch(self) -> bool:
        """Fetch and replace the collection.

        Returns False without doing anything when a fetch is already in
        flight for this store.
        """
        if self._in_flight:
            logger.debug(f"{self.kind}: fetch already in flight, refetch ignored")
            return False

        epoch = self._epoch
        previous = self._state
        self._in_flight = True
        try:
            self._set_state(FetchState.LOADING)
            outcome = await self._fetch()
        except BaseException:
            if epoch == self._epoch:
                self._in_flight = False
                self._set_state(previous)
            raise

        if epoch != self._epoch:
            logger.debug(f"{self.kind}: store unmounted, discarding response")
            return True

        self._in_flight = False
        if isinstance(outcome, Failure):
            self._error = outcome.message
            self._set_state(FetchState.ERRORED)
        else:
            self._replace(self.parse(outcome.data))
            self._error = None
            self._set_state(FetchState.READY)
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _replace(self, items: tuple[R, ...]) -> None:
        self._items = items
        self._stats = self.compute_stats(items)
        self.last_updated = time.time()
        logger.debug(f"{self.kind}: loaded {len(items)} record(s)")

    def _set_state(self, state: FetchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(self)
