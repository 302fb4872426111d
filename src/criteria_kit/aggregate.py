"""Aggregate Root base class for documents persisted through a repository."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

A = TypeVar("A", bound="AggregateRoot")


class AggregateRoot(BaseModel):
    """Base class for all Aggregate Roots.

    Repositories persist ``to_primitives()`` and hydrate stored documents
    back through ``from_primitives()``.

    Usage::

        class User(AggregateRoot):
            name: str
            status: str = "active"

        user = User.from_primitives({"id": "1", "name": "John"})
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    id: str | None = None

    def get_id(self) -> str | None:
        return self.id

    def to_primitives(self) -> dict[str, Any]:
        """Python-mode dump; native types (datetime, UUID) are left for BSON."""
        return self.model_dump(mode="python")

    @classmethod
    def from_primitives(cls: type[A], data: dict[str, Any]) -> A:
        return cls.model_validate(data)
