"""Pattern operators -> $regex.

Values are passed through as raw patterns; escaping regex metacharacters
is left to the caller.
"""

from __future__ import annotations

from typing import Any


def compile_contains(field: str, val: Any) -> dict[str, Any]:
    return {field: {"$regex": val}}


def compile_not_contains(field: str, val: Any) -> dict[str, Any]:
    return {field: {"$not": {"$regex": val}}}
