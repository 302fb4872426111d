"""
Criteria: filters, order and page window for one listing query.

``Criteria`` bundles the filters (*what* to match), the order and the
page window.  It carries no behaviour of its own beyond the offset
arithmetic; backends compile it into their native query shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .filters import Filters
from .order import Order


@dataclass(frozen=True)
class Criteria:
    """
    Immutable container for filters, order and pagination.

    Attributes:
        filters: Ordered filter collection.
        order: Sort order (may be ``Order.none()``).
        limit: Page size; ``None`` means unbounded.
        current_page: The 1-based page number exactly as supplied.  Kept even
            when ``limit`` is missing so pagination metadata can use it.
        offset: Zero-based skip count, ``(current_page - 1) * limit``, only
            when both ``current_page`` and ``limit`` are given.  Pages below
            1 are not clamped.
    """

    filters: Filters
    order: Order
    limit: int | None = None
    current_page: int | None = None
    offset: int | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.current_page is not None and self.limit is not None:
            object.__setattr__(
                self, "offset", (self.current_page - 1) * self.limit
            )

    @classmethod
    def create(
        cls,
        filters: list[dict[str, Any]] | Filters | None = None,
        *,
        order_by: Any = None,
        order_type: str | None = None,
        limit: int | None = None,
        page: int | None = None,
    ) -> Criteria:
        """Build a criteria straight from request-style primitives."""
        if filters is None:
            parsed = Filters.none()
        elif isinstance(filters, Filters):
            parsed = filters
        else:
            parsed = Filters.from_values(filters)
        return cls(parsed, Order.from_values(order_by, order_type), limit, page)

    def has_filters(self) -> bool:
        return not self.filters.is_empty()
