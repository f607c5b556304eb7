"""Counter and TTL record repository interfaces.

These emulate atomic counters and expiring keys on top of plain tables.
"""

from abc import ABC, abstractmethod
from typing import Optional

from newsboard.domain.value import ItemId


class CounterRepository(ABC):
    """Named monotonically-adjustable integers."""

    @abstractmethod
    async def increment(self, name: str, by: int = 1) -> int:
        """Atomically add ``by`` to a counter, creating it at ``by``.

        Must be a single upsert-and-return so concurrent callers never
        observe the same value.

        Returns:
            The counter value after the increment
        """
        pass

    @abstractmethod
    async def get(self, name: str) -> int:
        """Current value, 0 for unknown counters."""
        pass


class RateLimitRepository(ABC):
    """TTL records: a key is active iff ``expires_at > now``."""

    @abstractmethod
    async def purge_expired(self, now: int) -> int:
        """Delete records with ``expires_at <= now``.

        Returns:
            Number of purged records
        """
        pass

    @abstractmethod
    async def find_expiry(self, key: str) -> Optional[int]:
        """Stored expiry for a key, expired or not."""
        pass

    @abstractmethod
    async def upsert(self, key: str, expires_at: int) -> None:
        """Create or replace the expiry of a key."""
        pass


class RepostWindowRepository(ABC):
    """Recently submitted urls mapped to the item that claimed them."""

    @abstractmethod
    async def purge_expired(self, now: int) -> int:
        """Delete entries with ``expires_at <= now``."""
        pass

    @abstractmethod
    async def find_item_id(self, url: str, now: int) -> Optional[ItemId]:
        """Item that claimed ``url`` within its still-open window."""
        pass

    @abstractmethod
    async def upsert(self, url: str, item_id: ItemId, expires_at: int) -> None:
        """Claim ``url`` for ``item_id`` until ``expires_at``."""
        pass

    @abstractmethod
    async def remove_for_item(self, item_id: ItemId) -> None:
        """Drop every entry claimed by an item."""
        pass
