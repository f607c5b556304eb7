"""In-memory counter and TTL record repositories for testing."""

from typing import Optional

from newsboard.domain.repository.store import (
    CounterRepository,
    RateLimitRepository,
    RepostWindowRepository,
)
from newsboard.domain.value import ItemId


class InMemoryCounterRepository(CounterRepository):
    """In-memory implementation of CounterRepository for testing."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = {}

    async def increment(self, name: str, by: int = 1) -> int:
        self._counters[name] = self._counters.get(name, 0) + by
        return self._counters[name]

    async def get(self, name: str) -> int:
        return self._counters.get(name, 0)


class InMemoryRateLimitRepository(RateLimitRepository):
    """In-memory implementation of RateLimitRepository for testing."""

    def __init__(self) -> None:
        self._expiries: dict[str, int] = {}

    async def purge_expired(self, now: int) -> int:
        expired = [k for k, exp in self._expiries.items() if exp <= now]
        for key in expired:
            del self._expiries[key]
        return len(expired)

    async def find_expiry(self, key: str) -> Optional[int]:
        return self._expiries.get(key)

    async def upsert(self, key: str, expires_at: int) -> None:
        self._expiries[key] = expires_at


class InMemoryRepostWindowRepository(RepostWindowRepository):
    """In-memory implementation of RepostWindowRepository for testing."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[ItemId, int]] = {}

    async def purge_expired(self, now: int) -> int:
        expired = [url for url, (_, exp) in self._entries.items() if exp <= now]
        for url in expired:
            del self._entries[url]
        return len(expired)

    async def find_item_id(self, url: str, now: int) -> Optional[ItemId]:
        entry = self._entries.get(url)
        if entry is None or entry[1] <= now:
            return None
        return entry[0]

    async def upsert(self, url: str, item_id: ItemId, expires_at: int) -> None:
        self._entries[url] = (item_id, expires_at)

    async def remove_for_item(self, item_id: ItemId) -> None:
        self._entries = {
            url: entry for url, entry in self._entries.items() if entry[0] != item_id
        }
