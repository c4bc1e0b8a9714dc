"""
In-memory index of the latest parsed listing per (market, location).
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional, Tuple

from app.schemas.product import MarketEntry

IndexKey = Tuple[str, Optional[str]]


class ProductIndex:
    """
    Holds at most one MarketEntry per (market, location) key.

    Callers serialise work on a key with ``lock()``; entries are replaced
    wholesale by ``put()``. A key's lock is kept only while it is held or
    awaited, or while the key has an entry.
    """

    def __init__(self):
        self._entries: Dict[IndexKey, MarketEntry] = {}
        self._locks: Dict[IndexKey, asyncio.Lock] = {}
        self._holders: Dict[IndexKey, int] = {}

    @staticmethod
    def _key(market: str, location: Optional[str]) -> IndexKey:
        return (market, location or None)

    @asynccontextmanager
    async def lock(self, market: str, location: Optional[str] = None) -> AsyncIterator[None]:
        key = self._key(market, location)
        key_lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with key_lock:
                yield
        finally:
            self._holders[key] -= 1
            if not self._holders[key]:
                del self._holders[key]
                if key not in self._entries:
                    self._locks.pop(key, None)

    def get(self, market: str, location: Optional[str] = None) -> Optional[MarketEntry]:
        return self._entries.get(self._key(market, location))

    def put(self, market: str, location: Optional[str], entry: MarketEntry) -> None:
        self._entries[self._key(market, location)] = entry
