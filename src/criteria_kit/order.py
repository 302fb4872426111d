from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import InvalidArgumentError
from .value_object import OrderKey


class OrderType(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_value(cls, value: OrderType | str) -> OrderType:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidArgumentError(
                f"The order type {value} is invalid.",
                argument=value,
                valid_values=[m.value for m in cls],
            ) from None


@dataclass(frozen=True)
class Order:
    """Sort field and direction, or the "no sort" sentinel (both ``None``)."""

    order_by: OrderKey | None = None
    order_type: OrderType | None = None

    def __post_init__(self) -> None:
        if self.order_by is not None and self.order_type is None:
            object.__setattr__(self, "order_type", OrderType.ASC)

    @classmethod
    def from_values(
        cls, order_by: Any = None, order_type: OrderType | str | None = None
    ) -> Order:
        if not order_by:
            return cls.none()
        return cls(
            order_by=OrderKey(order_by),
            order_type=OrderType.from_value(order_type) if order_type else OrderType.ASC,
        )

    @classmethod
    def asc(cls, order_by: Any) -> Order:
        return cls(order_by=OrderKey(order_by), order_type=OrderType.ASC)

    @classmethod
    def desc(cls, order_by: Any) -> Order:
        return cls(order_by=OrderKey(order_by), order_type=OrderType.DESC)

    @classmethod
    def none(cls) -> Order:
        return cls()

    def has_order(self) -> bool:
        return self.order_by is not None

    def is_asc(self) -> bool:
        return self.order_type is OrderType.ASC

    def is_desc(self) -> bool:
        return self.order_type is OrderType.DESC
