"""Motor client lifecycle for repositories."""

from __future__ import annotations

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError, PyMongoError

from .exceptions import MongoConnectionError
from .settings import MongoSettings, mask_credentials

logger = logging.getLogger("criteria_kit.mongo.connection")


class MongoConnectionManager:
    """
    Owns one lazily created Motor client and the default database name.

    Repositories call :meth:`connect` on every collection access; the client
    is built on the first call and reused afterwards.  Usable as an async
    context manager::

        async with MongoConnectionManager.from_settings() as connection:
            repository = MongoRepository(connection, "users", User)
    """

    def __init__(
        self,
        url: str = "mongodb://localhost:27017",
        *,
        database: str | None = None,
        server_selection_timeout_ms: int = 5000,
        connect_timeout_ms: int = 10000,
        **client_options: Any,
    ) -> None:
        self._url = url
        self._database = database
        self._client_options = {
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
            "connectTimeoutMS": connect_timeout_ms,
            **client_options,
        }
        self._client: AsyncIOMotorClient[Any] | None = None

    @classmethod
    def from_settings(
        cls, settings: MongoSettings | None = None, **client_options: Any
    ) -> MongoConnectionManager:
        """Build a manager from ``MONGO_*`` environment settings."""
        settings = settings or MongoSettings()
        return cls(
            settings.url,
            database=settings.database,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
            connect_timeout_ms=settings.connect_timeout_ms,
            **client_options,
        )

    @property
    def url_public(self) -> str:
        return mask_credentials(self._url)

    @property
    def database(self) -> str | None:
        """Default database for repositories that do not name their own."""
        return self._database

    @property
    def client(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            raise MongoConnectionError("Not connected; call connect() first")
        return self._client

    async def connect(self) -> AsyncIOMotorClient[Any]:
        if self._client is None:
            try:
                self._client = AsyncIOMotorClient(self._url, **self._client_options)
            except ConfigurationError as e:
                raise MongoConnectionError(
                    f"Invalid MongoDB configuration for {self.url_public}: {e}"
                ) from e
            logger.debug(
                "Created Mongo client for %s (database=%s)",
                self.url_public,
                self._database,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    async def health_check(self) -> bool:
        """Ping the server; False when not connected or unreachable."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("Mongo health check failed for %s: %s", self.url_public, e)
            return False
        return True

    async def __aenter__(self) -> MongoConnectionManager:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()
