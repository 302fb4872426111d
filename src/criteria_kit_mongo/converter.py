"""Compile a :class:`~criteria_kit.Criteria` into a MongoDB query."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, NamedTuple

from criteria_kit.operators import SIMPLE_OPERATORS, FilterOperator

from .exceptions import MongoQueryError, OperatorNotRegisteredError
from .operators import (
    compile_between,
    compile_comparison,
    compile_contains,
    compile_membership,
    compile_not_contains,
)

if TYPE_CHECKING:
    from criteria_kit.criteria import Criteria
    from criteria_kit.filters import Filter, Filters
    from criteria_kit.order import Order

logger = logging.getLogger("criteria_kit.mongo.converter")

FilterCompiler = Callable[["Filter"], dict[str, Any]]


class MongoQuery(NamedTuple):
    """Compiled query, ready for ``find(filter, sort=..., skip=..., limit=...)``.

    ``limit == 0`` means unbounded.
    """

    filter: dict[str, Any]
    sort: dict[str, int]
    skip: int
    limit: int


class MergeStrategy(str, Enum):
    """How per-filter fragments are combined into one filter document.

    ``OVERWRITE`` shallow-merges fragments in order, so a later fragment
    replaces an earlier one with the same top-level key (two filters on
    one field, or two OR filters sharing ``$or``).  ``AND`` keeps every
    fragment under ``$and``.
    """

    OVERWRITE = "overwrite"
    AND = "and"


def compile_condition(field: str, op: FilterOperator, val: Any) -> dict[str, Any]:
    """Compile one simple (non-composite) operator to a query fragment."""
    if op is FilterOperator.CONTAINS:
        return compile_contains(field, val)
    if op is FilterOperator.NOT_CONTAINS:
        return compile_not_contains(field, val)
    return compile_comparison(field, op, val)


# -- per-operator fragment builders -----------------------------------------


def _simple_filter(f: Filter) -> dict[str, Any]:
    return compile_condition(f.field.value, f.operator, f.value.value)


def _membership_filter(f: Filter) -> dict[str, Any]:
    return compile_membership(f.field.value, f.operator, f.value)


def _between_filter(f: Filter) -> dict[str, Any]:
    return compile_between(f.field.value, f.value)


def _or_filter(f: Filter) -> dict[str, Any]:
    # The outer field is a placeholder; each condition names its own.
    if not f.value.is_or_conditions:
        raise MongoQueryError("OR operator requires an array of OrCondition objects")
    compiled = []
    for condition in f.value.as_or_conditions():
        if condition.operator not in SIMPLE_OPERATORS:
            raise MongoQueryError(
                f"Unsupported operator in OR condition: {condition.operator.value}"
            )
        compiled.append(
            compile_condition(condition.field, condition.operator, condition.value)
        )
    return {"$or": compiled}


FILTER_COMPILERS: Mapping[FilterOperator, FilterCompiler] = {
    **{op: _simple_filter for op in SIMPLE_OPERATORS},
    FilterOperator.IN: _membership_filter,
    FilterOperator.NOT_IN: _membership_filter,
    FilterOperator.BETWEEN: _between_filter,
    FilterOperator.OR: _or_filter,
}

_unregistered = set(FilterOperator).difference(FILTER_COMPILERS)
if _unregistered:  # pragma: no cover
    raise OperatorNotRegisteredError(
        f"No Mongo compiler for: {sorted(op.value for op in _unregistered)}"
    )


class MongoCriteriaConverter:
    """
    Compiles :class:`Criteria` into a :class:`MongoQuery`.

    Stateless: the same criteria always yields an equal query.

    Parameters
    ----------
    id_field:
        Logical identifier name callers sort by.
    primary_key:
        Native identifier key it is translated to; also the default sort
        key (descending) when the criteria has no order.
    merge_strategy:
        See :class:`MergeStrategy`.
    compilers:
        Operator dispatch table; defaults to :data:`FILTER_COMPILERS`.
    """

    def __init__(
        self,
        *,
        id_field: str = "id",
        primary_key: str = "_id",
        merge_strategy: MergeStrategy = MergeStrategy.OVERWRITE,
        compilers: Mapping[FilterOperator, FilterCompiler] | None = None,
    ) -> None:
        self._id_field = id_field
        self._primary_key = primary_key
        self._merge_strategy = MergeStrategy(merge_strategy)
        self._compilers = dict(compilers if compilers is not None else FILTER_COMPILERS)

    def convert(self, criteria: Criteria) -> MongoQuery:
        query = MongoQuery(
            filter=self.build_filter(criteria.filters) if criteria.has_filters() else {},
            sort=self.build_sort(criteria.order),
            skip=criteria.offset or 0,
            limit=criteria.limit or 0,
        )
        logger.debug("Compiled criteria to Mongo query %s", query)
        return query

    def build_filter(self, filters: Filters) -> dict[str, Any]:
        fragments = [self._compile_filter(f) for f in filters]
        if self._merge_strategy is MergeStrategy.AND:
            if not fragments:
                return {}
            return fragments[0] if len(fragments) == 1 else {"$and": fragments}
        merged: dict[str, Any] = {}
        for fragment in fragments:
            merged.update(fragment)
        return merged

    def build_sort(self, order: Order) -> dict[str, int]:
        if not order.has_order() or order.order_by is None:
            return {self._primary_key: -1}
        field = order.order_by.value
        if field == self._id_field:
            field = self._primary_key
        return {field: 1 if order.is_asc() else -1}

    def _compile_filter(self, f: Filter) -> dict[str, Any]:
        compiler = self._compilers.get(f.operator)
        if compiler is None:
            raise OperatorNotRegisteredError(
                f"Unexpected operator value {f.operator.value}"
            )
        return compiler(f)
