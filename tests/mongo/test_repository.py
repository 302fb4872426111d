"""Integration tests for MongoRepository using mongomock-motor."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId

from criteria_kit.aggregate import AggregateRoot
from criteria_kit.criteria import Criteria
from criteria_kit_mongo.connection import MongoConnectionManager
from criteria_kit_mongo.exceptions import MongoPersistenceError
from criteria_kit_mongo.indexes import (
    IndexDefinition,
    IndexRegistry,
    default_index_registry,
)
from criteria_kit_mongo.repository import MongoRepository


class User(AggregateRoot):
    name: str
    status: str = "active"
    age: int = 0


class IndexedUserRepository(MongoRepository[User]):
    def index_definitions(self) -> list[IndexDefinition]:
        return [
            IndexDefinition([("email", 1)], name="email_1", unique=True),
            IndexDefinition([("status", 1), ("age", -1)]),
        ]


@pytest.fixture
def repository(mock_connection):
    return MongoRepository(
        mock_connection, "users", User, index_registry=IndexRegistry()
    )


async def _seed(repository, docs):
    coll = await repository.collection()
    await coll.insert_many(docs)


def _active(count):
    return [
        {"name": f"user-{i:02d}", "status": "active", "age": 20 + i}
        for i in range(count)
    ]


class TestSearch:
    @pytest.mark.asyncio
    async def test_second_page_has_next(self, repository):
        await _seed(repository, _active(12) + [{"name": "x", "status": "inactive"}])
        criteria = Criteria.create(
            [{"field": "status", "operator": "=", "value": "active"}], limit=5, page=2
        )

        page = await repository.search(criteria)

        assert page.count == 12
        assert len(page.results) == 5
        assert page.next_page == 3

    @pytest.mark.asyncio
    async def test_last_page_has_no_next(self, repository):
        await _seed(repository, _active(12))
        criteria = Criteria.create(
            [{"field": "status", "operator": "=", "value": "active"}], limit=5, page=3
        )

        page = await repository.search(criteria)

        assert len(page.results) == 2
        assert page.next_page is None

    @pytest.mark.asyncio
    async def test_empty_result(self, repository):
        await _seed(repository, _active(3))
        criteria = Criteria.create(
            [{"field": "status", "operator": "=", "value": "deleted"}], limit=5, page=1
        )

        page = await repository.search(criteria)

        assert page.results == []
        assert page.count == 0
        assert page.next_page is None

    @pytest.mark.asyncio
    async def test_documents_never_carry_internal_id(self, repository):
        await _seed(repository, _active(2))
        page = await repository.search(Criteria.create())
        assert page.results
        assert all("_id" not in doc for doc in page.results)

    @pytest.mark.asyncio
    async def test_fields_to_exclude(self, repository):
        await _seed(repository, _active(2))
        page = await repository.search(Criteria.create(), ["age"])
        assert all("age" not in doc and "name" in doc for doc in page.results)

    @pytest.mark.asyncio
    async def test_default_order_is_newest_first(self, repository):
        await _seed(repository, _active(3))
        docs = await repository.find(Criteria.create())
        assert [d["name"] for d in docs] == ["user-02", "user-01", "user-00"]


class TestFind:
    @pytest.mark.asyncio
    async def test_sort_ascending(self, repository):
        await _seed(repository, [{"name": "b", "age": 2}, {"name": "a", "age": 1}])
        docs = await repository.find(Criteria.create(order_by="age", order_type="asc"))
        assert [d["name"] for d in docs] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_contains_filter(self, repository):
        await _seed(repository, [{"name": "john doe"}, {"name": "jane"}])
        docs = await repository.find(
            Criteria.create([{"field": "name", "operator": "CONTAINS", "value": "john"}])
        )
        assert [d["name"] for d in docs] == ["john doe"]

    @pytest.mark.asyncio
    async def test_or_filter(self, repository):
        await _seed(
            repository,
            [
                {"name": "john", "email": "a@x"},
                {"name": "ann", "email": "john@x"},
                {"name": "bob", "email": "b@x"},
            ],
        )
        criteria = Criteria.create(
            [
                {
                    "field": "search",
                    "operator": "OR",
                    "value": [
                        {"field": "name", "operator": "CONTAINS", "value": "john"},
                        {"field": "email", "operator": "CONTAINS", "value": "john"},
                    ],
                }
            ],
            order_by="name",
            order_type="asc",
        )
        docs = await repository.find(criteria)
        assert [d["name"] for d in docs] == ["ann", "john"]

    @pytest.mark.asyncio
    async def test_between_dates(self, repository):
        await _seed(
            repository,
            [
                {"name": "dec", "createdAt": datetime(2023, 12, 31)},
                {"name": "jan", "createdAt": datetime(2024, 1, 15)},
                {"name": "feb", "createdAt": datetime(2024, 2, 1)},
            ],
        )
        criteria = Criteria.create(
            [
                {
                    "field": "createdAt",
                    "operator": "BETWEEN",
                    "value": {
                        "startDate": datetime(2024, 1, 1),
                        "endDate": datetime(2024, 1, 31),
                    },
                }
            ]
        )
        docs = await repository.find(criteria)
        assert [d["name"] for d in docs] == ["jan"]

    @pytest.mark.asyncio
    async def test_in_filter(self, repository):
        await _seed(repository, [{"name": "a", "level": 1}, {"name": "b", "level": 3}])
        docs = await repository.find(
            Criteria.create([{"field": "level", "operator": "IN", "value": [1, 2]}])
        )
        assert [d["name"] for d in docs] == ["a"]


class TestOne:
    @pytest.mark.asyncio
    async def test_hydrates_aggregate(self, repository):
        await _seed(repository, [{"id": "u1", "name": "ann", "status": "active", "age": 30}])
        user = await repository.one({"id": "u1"})
        assert isinstance(user, User)
        assert user.get_id() == "u1"
        assert user.age == 30

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, repository):
        assert await repository.one({"id": "nope"}) is None


class TestUpsert:
    @pytest.mark.asyncio
    async def test_insert_generates_object_id(self, repository):
        user_id = await repository.upsert(User(name="ann"))

        assert ObjectId.is_valid(user_id)
        coll = await repository.collection()
        stored = await coll.find_one({"_id": ObjectId(user_id)})
        assert stored["id"] == user_id
        assert stored["name"] == "ann"

    @pytest.mark.asyncio
    async def test_update_existing(self, repository):
        user_id = await repository.upsert(User(name="ann", age=30))
        await repository.upsert(User(id=user_id, name="ann", age=31))

        coll = await repository.collection()
        assert await coll.count_documents({}) == 1
        user = await repository.one({"id": user_id})
        assert user.age == 31

    @pytest.mark.asyncio
    async def test_non_object_id_string_is_kept(self, repository):
        await repository.upsert(User(id="user-1", name="ann"))
        coll = await repository.collection()
        assert await coll.find_one({"_id": "user-1"}) is not None


class TestCollection:
    @pytest.mark.asyncio
    async def test_indexes_created_once(self, mock_connection, monkeypatch):
        created = AsyncMock(return_value="idx")
        monkeypatch.setattr("criteria_kit_mongo.repository.create_index", created)
        registry = IndexRegistry()
        repository = IndexedUserRepository(
            mock_connection, "users", User, index_registry=registry
        )

        await repository.collection()
        await repository.collection()

        assert created.await_count == 2
        names = [call.args[1].name for call in created.await_args_list]
        assert names == ["email_1", None]
        assert "test_db.users" in registry

    @pytest.mark.asyncio
    async def test_repository_database_overrides_connection(self, mock_connection):
        repository = MongoRepository(
            mock_connection, "users", User, database="other_db",
            index_registry=IndexRegistry(),
        )
        coll = await repository.collection()
        assert coll.full_name == "other_db.users"

    @pytest.mark.asyncio
    async def test_missing_database_raises(self, mock_connection):
        mock_connection._database = None
        repository = MongoRepository(
            mock_connection, "users", User, index_registry=IndexRegistry()
        )
        with pytest.raises(MongoPersistenceError, match="Database name must be set"):
            await repository.collection()

    def test_collection_name(self):
        repository = MongoRepository(MongoConnectionManager(), "users", User)
        assert repository.collection_name == "users"

    @pytest.mark.asyncio
    async def test_default_registry_is_used(self, mock_connection):
        repository = IndexedUserRepository(mock_connection, "default_users", User)
        try:
            await repository.collection()
            assert "test_db.default_users" in default_index_registry
        finally:
            default_index_registry.reset("test_db.default_users")
