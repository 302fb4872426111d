"""Standard comparison, membership and range operators for MongoDB."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from criteria_kit.operators import FilterOperator

from ..exceptions import MongoQueryError

if TYPE_CHECKING:
    from criteria_kit.filter_value import FilterValue

COMPARISON_OPERATORS: dict[FilterOperator, str] = {
    FilterOperator.EQUAL: "$eq",
    FilterOperator.NOT_EQUAL: "$ne",
    FilterOperator.GT: "$gt",
    FilterOperator.GTE: "$gte",
    FilterOperator.LT: "$lt",
    FilterOperator.LTE: "$lte",
}

MEMBERSHIP_OPERATORS: dict[FilterOperator, str] = {
    FilterOperator.IN: "$in",
    FilterOperator.NOT_IN: "$nin",
}


def compile_comparison(field: str, op: FilterOperator, val: Any) -> dict[str, Any]:
    """``{field: {$eq|$ne|$gt|$gte|$lt|$lte: val}}``."""
    return {field: {COMPARISON_OPERATORS[op]: val}}


def compile_membership(
    field: str, op: FilterOperator, value: FilterValue
) -> dict[str, Any]:
    """``{field: {$in|$nin: [...]}}`` over the raw list elements."""
    if not value.is_primitive_array:
        raise MongoQueryError(f"{op.name} operator requires an array of values")
    return {field: {MEMBERSHIP_OPERATORS[op]: value.as_primitive_array()}}


def compile_between(field: str, value: FilterValue) -> dict[str, Any]:
    """Inclusive range on both ends: ``{field: {$gte: start, $lte: end}}``."""
    if not value.is_between:
        raise MongoQueryError(
            "BETWEEN operator requires an object with start and end values"
        )
    start, end = value.as_between()
    return {field: {"$gte": start, "$lte": end}}
