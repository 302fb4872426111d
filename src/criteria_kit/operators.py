from __future__ import annotations

from enum import Enum

from .exceptions import InvalidArgumentError


class FilterOperator(str, Enum):
    """Supported filter operators, keyed by their textual token."""

    # Standard comparison
    EQUAL = "="
    NOT_EQUAL = "!="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="

    # Pattern matching
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"

    # Membership
    IN = "IN"
    NOT_IN = "NOT_IN"

    # Composite
    BETWEEN = "BETWEEN"
    OR = "OR"

    @classmethod
    def from_value(cls, value: FilterOperator | str) -> FilterOperator:
        """Resolve an exact token (case-sensitive) to its operator."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        raise InvalidArgumentError(
            f"The filter operator {value} is invalid.",
            argument=value,
            valid_values=[m.value for m in cls],
        )

    @property
    def is_composite(self) -> bool:
        return self not in SIMPLE_OPERATORS


# Operators allowed inside an OR condition
SIMPLE_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.EQUAL,
        FilterOperator.NOT_EQUAL,
        FilterOperator.GT,
        FilterOperator.LT,
        FilterOperator.GTE,
        FilterOperator.LTE,
        FilterOperator.CONTAINS,
        FilterOperator.NOT_CONTAINS,
    }
)
