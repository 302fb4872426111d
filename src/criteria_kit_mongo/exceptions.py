"""MongoDB persistence exceptions."""

from __future__ import annotations

from criteria_kit.exceptions import PersistenceError


class MongoPersistenceError(PersistenceError):
    """Base for MongoDB persistence errors."""


class MongoConnectionError(MongoPersistenceError):
    """Raised when connection to MongoDB fails or is misconfigured."""


class MongoQueryError(MongoPersistenceError):
    """Raised when a filter's operator and value shape do not fit together."""


class OperatorNotRegisteredError(MongoPersistenceError):
    """An operator reached the converter without a registered compiler.

    Signals that ``FilterOperator`` and the converter's dispatch table
    have drifted apart; callers should not try to recover from it.
    """
