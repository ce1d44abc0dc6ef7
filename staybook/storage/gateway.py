"""
Timeout-bounded access to the metadata store.

Every service call into the store goes through here so that a slow or
broken backend surfaces as StoreUnavailable (retryable) instead of hanging
the request or leaking a driver exception.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from staybook.errors import StoreUnavailable
from staybook.storage.base import MetadataStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreGateway:
    """MetadataStorage wrapper that bounds and classifies failures."""

    def __init__(self, metadata: MetadataStorage, timeout: float = 5.0):
        self.metadata = metadata
        self.timeout = timeout

    async def _run(self, operation: str, collection: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Store {operation} on '{collection}' timed out after {self.timeout}s")
            raise StoreUnavailable()
        except (OSError, ConnectionError) as e:
            logger.error(f"Store {operation} on '{collection}' failed: {e}")
            raise StoreUnavailable() from e

    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        await self._run("save", collection, self.metadata.save(collection, id, data))

    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        return await self._run("get", collection, self.metadata.get(collection, id))

    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        return await self._run(
            "query", collection, self.metadata.query(collection, filters, limit, offset)
        )

    async def update(self, collection: str, id: str, updates: dict[str, Any]) -> bool:
        return await self._run("update", collection, self.metadata.update(collection, id, updates))
