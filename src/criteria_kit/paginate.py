"""A page of results plus total count and next-page pointer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .criteria import Criteria

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class Paginate(Generic[T]):
    """
    One page of a listing.

    ``next_page`` is the page number to request next, or ``None`` when the
    current page is the last one.
    """

    next_page: int | None
    count: int
    results: list[T] = field(default_factory=list)

    @classmethod
    def from_results(
        cls,
        results: Sequence[T],
        count: int,
        criteria: Criteria,
        *,
        default_limit: int = DEFAULT_PAGE_SIZE,
    ) -> Paginate[T]:
        """
        Assemble pagination metadata for ``results``.

        A next page exists when ``page * limit < count``.  Missing limit and
        page fall back to ``default_limit`` and 1.  An empty page always
        reports a count of 0.
        """
        if not results:
            return cls(next_page=None, count=0, results=[])
        limit = criteria.limit or default_limit
        page = criteria.current_page or 1
        has_next_page = page * limit < count
        return cls(
            next_page=page + 1 if has_next_page else None,
            count=count,
            results=list(results),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "next_page": self.next_page,
            "count": self.count,
            "results": list(self.results),
        }
