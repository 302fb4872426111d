"""Immutable Value Object base classes."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import InvalidArgumentError


class ValueObject(BaseModel):
    """Base class for Value Objects.

    Value objects are immutable and defined by their attributes.
    Equality is structural (all fields compared).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, repr(self.model_dump())))


class StringValueObject(ValueObject):
    """Non-empty string wrapper.

    Any input is coerced with ``str()`` before the length check, so
    ``StringValueObject(42).value == "42"``.
    """

    value: str

    def __init__(self, value: Any = None, /, **data: Any) -> None:
        if "value" not in data:
            data["value"] = value
        super().__init__(**data)

    @field_validator("value", mode="before")
    @classmethod
    def _ensure_not_empty(cls, value: Any) -> str:
        text = "" if value is None else str(value)
        if len(text) < 1:
            raise InvalidArgumentError("String should have a length", argument=value)
        return text

    def __str__(self) -> str:
        return self.value


class FieldName(StringValueObject):
    """Name of the document field a filter applies to."""


class OrderKey(StringValueObject):
    """Name of the document field results are sorted by."""
