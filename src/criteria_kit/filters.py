"""Filter (field + operator + value) and the ordered Filters collection."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import InvalidArgumentError
from .filter_value import FilterValue
from .operators import FilterOperator
from .value_object import FieldName

_MISSING = object()


@dataclass(frozen=True)
class Filter:
    """A single condition: ``field`` compared with ``value`` through ``operator``."""

    field: FieldName
    operator: FilterOperator
    value: FilterValue

    @classmethod
    def from_values(cls, values: Mapping[str, Any]) -> Filter:
        """
        Build a filter from a loosely-typed descriptor.

        ``field`` and ``operator`` must be truthy; ``value`` must be present
        and not ``None`` but may be falsy (``0``, ``""``, ``False``).
        """
        field_name = values.get("field")
        operator = values.get("operator")
        value = values.get("value", _MISSING)

        if not field_name or not operator or value is _MISSING or value is None:
            raise InvalidArgumentError("The filter is invalid", argument=dict(values))

        return cls(
            field=FieldName(field_name),
            operator=FilterOperator.from_value(operator),
            value=FilterValue(value),
        )

    def to_primitives(self) -> dict[str, Any]:
        return {
            "field": self.field.value,
            "operator": self.operator.value,
            "value": self.value.to_primitives(),
        }


@dataclass(frozen=True)
class Filters:
    """Ordered, immutable sequence of :class:`Filter`.

    Order is preserved as given; nothing downstream reorders it.
    """

    filters: tuple[Filter, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.filters))

    @classmethod
    def from_values(cls, filters: Sequence[Mapping[str, Any]]) -> Filters:
        return cls(tuple(Filter.from_values(values) for values in filters))

    @classmethod
    def none(cls) -> Filters:
        return cls(())

    def is_empty(self) -> bool:
        return len(self.filters) == 0

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.filters)

    def __len__(self) -> int:
        return len(self.filters)
