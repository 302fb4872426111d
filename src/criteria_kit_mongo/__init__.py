"""MongoDB backend for criteria_kit.

Compiles Criteria into Mongo filter/sort/skip/limit queries and runs them
through a Motor-backed repository.
"""

from __future__ import annotations

from .connection import MongoConnectionManager
from .converter import (
    FILTER_COMPILERS,
    MergeStrategy,
    MongoCriteriaConverter,
    MongoQuery,
    compile_condition,
)
from .exceptions import (
    MongoConnectionError,
    MongoPersistenceError,
    MongoQueryError,
    OperatorNotRegisteredError,
)
from .indexes import IndexDefinition, IndexRegistry, create_index
from .repository import MongoRepository
from .settings import MongoSettings

__all__ = [
    # Query compilation
    "MongoCriteriaConverter",
    "MongoQuery",
    "MergeStrategy",
    "FILTER_COMPILERS",
    "compile_condition",
    # Persistence
    "MongoConnectionManager",
    "MongoSettings",
    "MongoRepository",
    "IndexDefinition",
    "IndexRegistry",
    "create_index",
    # Exceptions
    "MongoPersistenceError",
    "MongoConnectionError",
    "MongoQueryError",
    "OperatorNotRegisteredError",
]
