from .aggregate import AggregateRoot
from .criteria import Criteria
from .exceptions import (
    CriteriaError,
    FilterValueTypeError,
    InfrastructureError,
    InvalidArgumentError,
    PersistenceError,
)
from .filter_value import (
    BETWEEN_KEY_PAIRS,
    BetweenRange,
    FilterValue,
    FilterValueKind,
    OrCondition,
)
from .filters import Filter, Filters
from .operators import SIMPLE_OPERATORS, FilterOperator
from .order import Order, OrderType
from .paginate import Paginate
from .value_object import FieldName, OrderKey, StringValueObject, ValueObject

__all__ = [
    # Core types
    "Criteria",
    "Filter",
    "Filters",
    "FilterOperator",
    "SIMPLE_OPERATORS",
    "FilterValue",
    "FilterValueKind",
    "OrCondition",
    "BetweenRange",
    "BETWEEN_KEY_PAIRS",
    "Order",
    "OrderType",
    # Value objects
    "ValueObject",
    "StringValueObject",
    "FieldName",
    "OrderKey",
    # Results / persistence
    "Paginate",
    "AggregateRoot",
    # Exceptions
    "CriteriaError",
    "InvalidArgumentError",
    "FilterValueTypeError",
    "InfrastructureError",
    "PersistenceError",
]
