"""Test configuration for the MongoDB backend."""

from __future__ import annotations

import pytest

from criteria_kit_mongo import MongoConnectionManager


@pytest.fixture
def mock_connection():
    """Connection manager backed by mongomock-motor instead of a live server."""
    mongomock_motor = pytest.importorskip("mongomock_motor")

    connection = MongoConnectionManager.__new__(MongoConnectionManager)
    connection._client = mongomock_motor.AsyncMongoMockClient()
    connection._database = "test_db"
    connection._url = "mongodb://mock:27017"

    async def _mock_connect():
        return connection._client

    connection.connect = _mock_connect
    return connection
