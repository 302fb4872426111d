"""
Shape-classified filter values.

A filter value arrives in one of four shapes: a scalar, a list of
primitives, a list of OR conditions or a range object.  ``FilterValue``
classifies the raw payload once, at construction, and exposes narrow
accessors that fail loudly when the caller asks for the wrong shape.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, NamedTuple

from pydantic import field_validator

from .exceptions import FilterValueTypeError, InvalidArgumentError
from .operators import FilterOperator
from .value_object import FieldName, ValueObject

# Accepted spellings for the two bounds of a BETWEEN range
BETWEEN_KEY_PAIRS: tuple[tuple[str, str], ...] = (
    ("start", "end"),
    ("startDate", "endDate"),
    ("from", "to"),
)

_CONDITION_KEYS = ("field", "operator", "value")


class FilterValueKind(str, Enum):
    SCALAR = "scalar"
    PRIMITIVE_ARRAY = "primitive_array"
    OR_CONDITIONS = "or_conditions"
    BETWEEN = "between"


class BetweenRange(NamedTuple):
    start: Any
    end: Any


class OrCondition(ValueObject):
    """A single leaf inside an OR filter: ``{field, operator, value}``."""

    field: str
    operator: FilterOperator
    value: Any

    @field_validator("field", mode="before")
    @classmethod
    def _validate_field(cls, value: Any) -> str:
        return FieldName(value).value

    @field_validator("operator", mode="before")
    @classmethod
    def _validate_operator(cls, value: Any) -> FilterOperator:
        return FilterOperator.from_value(value)

    @classmethod
    def from_values(cls, values: Mapping[str, Any] | OrCondition) -> OrCondition:
        if isinstance(values, OrCondition):
            return values
        if not _is_condition_mapping(values):
            raise InvalidArgumentError(
                "The OR condition is invalid", argument=values
            )
        return cls(
            field=values["field"],
            operator=values["operator"],
            value=values["value"],
        )

    def to_primitives(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "operator": self.operator.value,
            "value": self.value,
        }


def _is_condition_mapping(candidate: Any) -> bool:
    return isinstance(candidate, Mapping) and all(
        key in candidate for key in _CONDITION_KEYS
    )


def _looks_like_conditions(raw: Any) -> bool:
    if not isinstance(raw, (list, tuple)) or not raw:
        return False
    first = raw[0]
    return isinstance(first, OrCondition) or _is_condition_mapping(first)


def _between_keys(raw: Any) -> tuple[str, str] | None:
    if not isinstance(raw, Mapping):
        return None
    for start_key, end_key in BETWEEN_KEY_PAIRS:
        if start_key in raw and end_key in raw:
            return start_key, end_key
    return None


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, OrCondition):
        return value.to_primitives()
    return str(value)


def _freeze(value: Any) -> Any:
    """Read-only deep copy: lists become tuples, mappings become proxies."""
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    return value


def _thaw(value: Any) -> Any:
    """Mutable deep copy of a frozen payload."""
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    return value


def stringify(value: Any) -> str:
    """Natural string form of a scalar filter value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class FilterValue(ValueObject):
    """
    Tagged union over the four filter payload shapes.

    Attributes:
        kind: The shape the raw payload was classified as.
        value: Canonical string form, used by the simple comparison and
            pattern operators.
        raw: Read-only deep copy of the payload (lists as tuples, mappings
            as read-only proxies).  Use the typed accessors or
            :meth:`to_primitives` for mutable copies.
        conditions: Parsed OR conditions (empty unless ``kind`` is
            ``OR_CONDITIONS``).
    """

    kind: FilterValueKind
    value: str
    raw: Any = None
    conditions: tuple[OrCondition, ...] = ()

    def __init__(self, raw: Any = None, /, **data: Any) -> None:
        if not data:
            data = self._classify(raw)
        super().__init__(**data)

    @staticmethod
    def _classify(raw: Any) -> dict[str, Any]:
        if _looks_like_conditions(raw):
            conditions = tuple(OrCondition.from_values(c) for c in raw)
            return {
                "kind": FilterValueKind.OR_CONDITIONS,
                "value": json.dumps(
                    [c.to_primitives() for c in conditions], default=_json_default
                ),
                "raw": _freeze(raw),
                "conditions": conditions,
            }
        if isinstance(raw, (list, tuple)):
            # Comma-joined form kept for string-based consumers
            return {
                "kind": FilterValueKind.PRIMITIVE_ARRAY,
                "value": ",".join(stringify(item) for item in raw),
                "raw": _freeze(raw),
            }
        keys = _between_keys(raw)
        if keys is not None:
            bounds = {key: raw[key] for key in keys}
            return {
                "kind": FilterValueKind.BETWEEN,
                "value": json.dumps(bounds, default=_json_default),
                "raw": _freeze(raw),
            }
        return {
            "kind": FilterValueKind.SCALAR,
            "value": stringify(raw),
            "raw": _freeze(raw),
        }

    # -- shape predicates ----------------------------------------------------

    @property
    def is_or_conditions(self) -> bool:
        return self.kind is FilterValueKind.OR_CONDITIONS

    @property
    def is_between(self) -> bool:
        return self.kind is FilterValueKind.BETWEEN

    @property
    def is_primitive_array(self) -> bool:
        return self.kind is FilterValueKind.PRIMITIVE_ARRAY

    @property
    def is_scalar(self) -> bool:
        return self.kind is FilterValueKind.SCALAR

    # -- typed accessors -----------------------------------------------------

    def as_or_conditions(self) -> list[OrCondition]:
        if not self.is_or_conditions:
            raise FilterValueTypeError("an OrCondition array", self.kind.value)
        return list(self.conditions)

    def as_between(self) -> BetweenRange:
        """Return the range bounds, whichever key spelling was used."""
        keys = _between_keys(self.raw) if self.is_between else None
        if keys is None:
            raise FilterValueTypeError("a between range", self.kind.value)
        start_key, end_key = keys
        return BetweenRange(
            start=_thaw(self.raw[start_key]), end=_thaw(self.raw[end_key])
        )

    def as_primitive_array(self) -> list[Any]:
        if not self.is_primitive_array:
            raise FilterValueTypeError("a primitive array", self.kind.value)
        return _thaw(self.raw)

    def to_primitives(self) -> Any:
        """Mutable deep copy of the payload as it was supplied."""
        return _thaw(self.raw)

    def __str__(self) -> str:
        return self.value
