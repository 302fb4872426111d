"""
Criteria exception hierarchy.

All exceptions inherit from ``CriteriaError`` and provide ``to_dict()``
for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class CriteriaError(Exception):
    """Root exception for the criteria toolkit."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidArgumentError(CriteriaError):
    """
    Construction-time validation failed.

    Raised for empty identifiers, incomplete filter descriptors and
    unrecognised operator or direction tokens.  When ``valid_values`` is
    given, fuzzy-matched suggestions are attached to the message.
    """

    def __init__(
        self,
        message: str,
        *,
        argument: Any = None,
        valid_values: list[str] | None = None,
    ) -> None:
        self.message = message
        self.argument = argument
        self.suggestions: list[str] = []
        if valid_values and isinstance(argument, str):
            self.suggestions = get_close_matches(
                argument, valid_values, n=3, cutoff=0.6
            )
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_ARGUMENT",
            "message": self.message,
            "argument": self.argument,
            "suggestions": self.suggestions,
        }


class FilterValueTypeError(CriteriaError):
    """A filter value was read through an accessor that does not match its shape."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Value is not {expected} (got {actual})")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_VALUE_TYPE_MISMATCH",
            "expected": self.expected,
            "actual": self.actual,
        }


class InfrastructureError(CriteriaError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""
