"""Exception hierarchy for the netheal client.

Expected request failures are never raised: they come back as
``Failure`` outcomes. Only programmer errors surface as exceptions.
"""


class NethealError(Exception):
    """Base class for all netheal errors."""


class MissingIdError(NethealError, ValueError):
    """A resource operation was called without the record id it needs."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires a non-empty id")
        self.operation = operation
