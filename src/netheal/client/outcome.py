"""Request outcome types.

Every call through the executor resolves to exactly one of these; expected
failure modes are never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class FailureKind(str, Enum):
    """Classification of a failed request."""

    TIMEOUT = "timeout"        # Exceeded the executor's duration bound
    NETWORK = "network"        # Unreachable, refused, aborted, malformed body
    HTTP_ERROR = "http_error"  # Server answered with a non-2xx status


@dataclass(frozen=True)
class Success:
    """A 2xx response with its decoded JSON body (None when empty)."""

    data: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """A request that did not produce usable data."""

    kind: FailureKind
    message: str
    status: int | None = None

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        if self.kind is FailureKind.HTTP_ERROR and self.status is not None:
            return f"{self.kind.value}({self.status}): {self.message}"
        return f"{self.kind.value}: {self.message}"


Outcome = Union[Success, Failure]
