"""Shared base for resource records.

Records are read-mostly views over loosely-typed server JSON. Known fields
are declared with explicit optionality; unknown fields are kept as extras.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
R = TypeVar("R", bound="ResourceRecord")


def _lenient(value: Any, handler: ValidatorFunctionWrapHandler) -> datetime | None:
    try:
        return handler(value)
    except ValidationError:
        return None


# Unparseable timestamps read as missing rather than rejecting the record
LenientDatetime = Annotated[datetime | None, WrapValidator(_lenient)]


def coerce_enum(enum_cls: type[E], value: Any, default: E) -> E:
    """Map a raw status/severity onto a closed enum, case-insensitively.

    Unrecognized values become ``default`` instead of passing through.
    """
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.debug(f"Unknown {enum_cls.__name__} value {value!r}, using {default.value!r}")
        return default


class ResourceRecord(BaseModel):
    """A server-managed record identified by an opaque id."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Secondary key used as the id when the server omits _id / id
    natural_key: ClassVar[str | None] = None

    id: str = Field(default="", validation_alias=AliasChoices("_id", "id"))
    created_at: LenientDatetime = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: LenientDatetime = Field(default=None, validation_alias=AliasChoices("updatedAt", "updated_at"))

    @model_validator(mode="before")
    @classmethod
    def _fill_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and cls.natural_key:
            if data.get("_id") is None and data.get("id") is None and data.get(cls.natural_key) is not None:
                data = {**data, "id": data[cls.natural_key]}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


def parse_records(model: type[R], items: Iterable[Any]) -> list[R]:
    """Validate raw items, skipping (and logging) the ones that don't fit."""
    records: list[R] = []
    for raw in items:
        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(f"Skipping invalid {model.__name__} record: {e.error_count()} error(s)")
    return records
