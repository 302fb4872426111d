"""Index definitions and the run-once index registry."""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("criteria_kit.mongo.indexes")


class IndexDefinition(NamedTuple):
    """keys: ``[(field, 1|-1|"text"|"2dsphere"), ...]``."""

    keys: list[tuple[str, Any]]
    name: str | None = None
    unique: bool = False
    expire_after_seconds: int | None = None


async def create_index(collection: Any, definition: IndexDefinition) -> str:
    """Create one index on a Motor collection. Returns the index name."""
    options: dict[str, Any] = {"unique": definition.unique}
    if definition.name is not None:
        options["name"] = definition.name
    if definition.expire_after_seconds is not None:
        options["expireAfterSeconds"] = definition.expire_after_seconds
    return await collection.create_index(definition.keys, **options)


class IndexRegistry:
    """
    Process-scoped "run once per key" guard for index creation.

    ``ensure(key, create)`` awaits ``create`` the first time ``key`` is
    seen.  Concurrent callers for the same key wait on a lock and do not
    repeat the work; different keys never wait on each other.  Locks are
    created per running event loop, so one registry can serve several
    consecutive loops.  A failing ``create`` leaves the key unregistered so
    a later call retries it.
    """

    def __init__(self) -> None:
        self._done: set[str] = set()
        self._locks: weakref.WeakKeyDictionary[
            asyncio.AbstractEventLoop, dict[str, asyncio.Lock]
        ] = weakref.WeakKeyDictionary()

    def _lock_for(self, key: str) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        locks = self._locks.setdefault(loop, {})
        if key not in locks:
            locks[key] = asyncio.Lock()
        return locks[key]

    async def ensure(self, key: str, create: Callable[[], Awaitable[Any]]) -> bool:
        """Run ``create`` once for ``key``. Returns True if it ran now."""
        if key in self._done:
            return False
        async with self._lock_for(key):
            if key in self._done:
                return False
            await create()
            self._done.add(key)
        logger.debug("Indexes ensured for %s", key)
        return True

    def reset(self, key: str | None = None) -> None:
        """Forget one key (or all), so the next access recreates indexes."""
        if key is None:
            self._done.clear()
        else:
            self._done.discard(key)

    def __contains__(self, key: object) -> bool:
        return key in self._done


default_index_registry = IndexRegistry()
