"""Item repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from newsboard.domain.model.item import Item
from newsboard.domain.value import ItemId, ItemUrl, UserId


class ItemRepository(ABC):
    """Repository for Item aggregate.

    Updates are explicit per-field operations; there is no generic
    "set field by name" entry point.
    """

    @abstractmethod
    async def find_by_id(self, item_id: ItemId) -> Optional[Item]:
        """Find an item by ID, including soft-deleted items.

        Args:
            item_id: The item's identifier

        Returns:
            The item if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, item_ids: Sequence[ItemId]) -> List[Item]:
        """Find several items, preserving the order of ``item_ids``.

        Missing ids are skipped.
        """
        pass

    @abstractmethod
    async def find_top(self, limit: int, offset: int) -> List[Item]:
        """Live items ordered by stored rank, highest first."""
        pass

    @abstractmethod
    async def find_latest(self, limit: int, offset: int) -> List[Item]:
        """Live items ordered by creation time, newest first."""
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> List[Item]:
        """Live items submitted by a user, newest first."""
        pass

    @abstractmethod
    async def find_saved(self, user_id: UserId, limit: int, offset: int) -> List[Item]:
        """Live items the user upvoted, most recent vote first."""
        pass

    @abstractmethod
    async def find_all_live(self) -> List[Item]:
        """Every non-deleted item (used by the recompute sweep)."""
        pass

    @abstractmethod
    async def count(self, author_id: Optional[UserId] = None) -> int:
        """Count live items, optionally restricted to one author."""
        pass

    @abstractmethod
    async def count_saved(self, user_id: UserId) -> int:
        """Count live items the user upvoted."""
        pass

    @abstractmethod
    async def insert(self, item: Item) -> Item:
        """Insert a new item.

        Args:
            item: The item to insert (id already minted)

        Returns:
            The inserted item
        """
        pass

    @abstractmethod
    async def update_content(
        self, item_id: ItemId, title: str, url: ItemUrl
    ) -> Optional[Item]:
        """Replace title and url.

        Returns:
            The updated item, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_score_and_rank(
        self, item_id: ItemId, score: float, rank: float
    ) -> None:
        """Persist a reconciled score and rank."""
        pass

    @abstractmethod
    async def increment_comment_count(self, item_id: ItemId, by: int = 1) -> None:
        """Atomically adjust the denormalized comment count.

        Uses SQL-level increment to avoid race conditions.
        """
        pass

    @abstractmethod
    async def mark_deleted(self, item_id: ItemId) -> bool:
        """Soft-delete an item.

        Returns:
            True if a row was marked, False if the item doesn't exist
        """
        pass
