"""Criteria-driven listing and upserts over one collection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from bson import ObjectId

from criteria_kit.aggregate import AggregateRoot
from criteria_kit.paginate import Paginate

from .converter import MongoCriteriaConverter, MongoQuery
from .exceptions import MongoPersistenceError
from .indexes import IndexDefinition, IndexRegistry, create_index, default_index_registry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from criteria_kit.criteria import Criteria

    from .connection import MongoConnectionManager

logger = logging.getLogger("criteria_kit.mongo.repository")

T = TypeVar("T", bound=AggregateRoot)


def _strip_primary_key(doc: dict[str, Any], primary_key: str) -> dict[str, Any]:
    return {k: v for k, v in doc.items() if k != primary_key}


class MongoRepository(Generic[T]):
    """
    Repository over a single MongoDB collection.

    Listing goes through :class:`MongoCriteriaConverter`; returned documents
    never carry the storage-internal ``_id``.  Subclasses declare indexes
    via :meth:`index_definitions`; they are created on first collection
    access, once per process and collection.
    """

    def __init__(
        self,
        connection: MongoConnectionManager,
        collection: str,
        aggregate_cls: type[T],
        *,
        database: str | None = None,
        converter: MongoCriteriaConverter | None = None,
        index_registry: IndexRegistry | None = None,
        primary_key: str = "_id",
    ) -> None:
        self._connection = connection
        self._collection_name = collection
        self._aggregate_cls = aggregate_cls
        self._database = database
        self._converter = converter or MongoCriteriaConverter(primary_key=primary_key)
        self._index_registry = index_registry or default_index_registry
        self._primary_key = primary_key

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def index_definitions(self) -> list[IndexDefinition]:
        """Indexes to create for this collection. Override in subclasses."""
        return []

    async def collection(self) -> Any:
        """Get the Motor collection, creating declared indexes on first use."""
        client = await self._connection.connect()
        database_name = self._database or self._connection.database
        if not database_name:
            raise MongoPersistenceError(
                "Database name must be set on repository or connection"
            )
        coll = client.get_database(database_name).get_collection(
            self._collection_name
        )
        await self._index_registry.ensure(
            f"{database_name}.{self._collection_name}",
            lambda: self._ensure_indexes(coll),
        )
        return coll

    async def _ensure_indexes(self, coll: Any) -> None:
        for definition in self.index_definitions():
            name = await create_index(coll, definition)
            logger.debug("Created index %s on %s", name, self._collection_name)

    # -- reads ---------------------------------------------------------------

    async def one(self, filter: dict[str, Any]) -> T | None:
        """Find a single document and hydrate it as an aggregate."""
        coll = await self.collection()
        doc = await coll.find_one(filter)
        if doc is None:
            return None
        return self._aggregate_cls.from_primitives(
            _strip_primary_key(doc, self._primary_key)
        )

    async def find(
        self,
        criteria: Criteria,
        fields_to_exclude: Sequence[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Run the compiled criteria and return plain documents."""
        query = self._converter.convert(criteria)
        return await self._find(query, fields_to_exclude)

    async def search(
        self,
        criteria: Criteria,
        fields_to_exclude: Sequence[str] | None = None,
    ) -> Paginate[dict[str, Any]]:
        """One page of documents matching ``criteria``, with total count."""
        query = self._converter.convert(criteria)
        documents = await self._find(query, fields_to_exclude)
        coll = await self.collection()
        count = await coll.count_documents(query.filter)
        return Paginate.from_results(documents, count, criteria)

    async def _find(
        self,
        query: MongoQuery,
        fields_to_exclude: Sequence[str] | None,
    ) -> list[dict[str, Any]]:
        coll = await self.collection()
        projection = dict.fromkeys(fields_to_exclude, 0) if fields_to_exclude else None
        logger.debug(
            "find on %s: filter=%s sort=%s skip=%d limit=%d",
            self._collection_name,
            query.filter,
            query.sort,
            query.skip,
            query.limit,
        )
        cursor = coll.find(
            query.filter,
            projection,
            sort=list(query.sort.items()),
            skip=query.skip,
            limit=query.limit,
        )
        return [_strip_primary_key(doc, self._primary_key) async for doc in cursor]

    # -- writes --------------------------------------------------------------

    async def upsert(self, entity: T) -> str:
        """Insert or update ``entity`` keyed by its id. Returns the id.

        Entities without an id get a fresh ObjectId.  Ids that are valid
        ObjectId hex strings are stored as ObjectId under ``_id``; the
        string form is always mirrored in the ``id`` field.
        """
        entity_id = entity.get_id() or str(ObjectId())
        primitives = {**entity.to_primitives(), "id": entity_id}
        await self.update_one(
            {self._primary_key: self._document_id(entity_id)},
            {"$set": primitives},
        )
        return entity_id

    async def update_one(self, filter: dict[str, Any], update: Any) -> None:
        coll = await self.collection()
        await coll.update_one(filter, update, upsert=True)

    @staticmethod
    def _document_id(entity_id: str) -> Any:
        return ObjectId(entity_id) if ObjectId.is_valid(entity_id) else entity_id
