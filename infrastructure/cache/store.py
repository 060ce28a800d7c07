import asyncio
from datetime import timedelta
from typing import Protocol


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None: ...


class InMemoryStore:
    """Process-local store. Values are replaced whole, never merged."""

    def __init__(self):
        self._data: dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        # Expiry is decided by the stored timestamp, so ttl is not enforced here
        async with self._lock:
            self._data[key] = value

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._data.pop(key, None)
