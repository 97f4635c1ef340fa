"""Query descriptor - the view-owned search/filter/sort parameters."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

SortDirection = Literal["asc", "desc"]

ALL = "all"


class QueryDescriptor(BaseModel):
    """Immutable view query; every change produces a new descriptor."""

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    status_filter: str = ALL
    type_filter: str = ALL
    sort_key: str | None = None
    sort_direction: SortDirection = "asc"

    def with_search(self, term: str) -> QueryDescriptor:
        return self.model_copy(update={"search_term": term})

    def with_status(self, status: str) -> QueryDescriptor:
        return self.model_copy(update={"status_filter": status or ALL})

    def with_type(self, type_: str) -> QueryDescriptor:
        return self.model_copy(update={"type_filter": type_ or ALL})

    def toggle_sort(self, key: str) -> QueryDescriptor:
        """Column-header click: flip direction on the same key, else sort ascending."""
        if key == self.sort_key:
            direction: SortDirection = "desc" if self.sort_direction == "asc" else "asc"
            return self.model_copy(update={"sort_direction": direction})
        return self.model_copy(update={"sort_key": key, "sort_direction": "asc"})

    @property
    def is_filtered(self) -> bool:
        return bool(self.search_term) or self.status_filter != ALL or self.type_filter != ALL
