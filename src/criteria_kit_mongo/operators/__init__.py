"""MongoDB operator compilers for criteria filters."""

from __future__ import annotations

from .standard import (
    compile_between,
    compile_comparison,
    compile_membership,
)
from .string import compile_contains, compile_not_contains

__all__ = [
    "compile_comparison",
    "compile_membership",
    "compile_between",
    "compile_contains",
    "compile_not_contains",
]
