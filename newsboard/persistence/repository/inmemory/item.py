"""In-memory item repository for testing."""

from typing import Optional, Sequence

from newsboard.domain.model.item import Item
from newsboard.domain.repository.item import ItemRepository
from newsboard.domain.value import (
    ItemId,
    ItemUrl,
    UserId,
    VotableType,
    VoteType,
    item_votable_id,
)
from newsboard.persistence.repository.inmemory.vote import InMemoryVoteRepository


class InMemoryItemRepository(ItemRepository):
    """In-memory implementation of ItemRepository for testing.

    Saved items are derived from the shared vote repository, mirroring the
    items/votes join of the PostgreSQL implementation.
    """

    def __init__(self, votes: Optional[InMemoryVoteRepository] = None) -> None:
        self._items: dict[ItemId, Item] = {}
        self._votes = votes or InMemoryVoteRepository()

    def _live(self) -> list[Item]:
        return [i for i in self._items.values() if not i.deleted]

    def _replace(self, item_id: ItemId, **changes) -> Optional[Item]:
        item = self._items.get(item_id)
        if item is None:
            return None
        updated = item.model_copy(update=changes)
        self._items[item_id] = updated
        return updated

    async def find_by_id(self, item_id: ItemId) -> Optional[Item]:
        """Find an item by ID."""
        return self._items.get(item_id)

    async def find_by_ids(self, item_ids: Sequence[ItemId]) -> list[Item]:
        """Find several items in input order."""
        return [self._items[i] for i in item_ids if i in self._items]

    async def find_top(self, limit: int, offset: int) -> list[Item]:
        """Order by stored rank."""
        items = sorted(self._live(), key=lambda i: (i.rank, i.id), reverse=True)
        return items[offset : offset + limit]

    async def find_latest(self, limit: int, offset: int) -> list[Item]:
        """Order by creation time."""
        items = sorted(self._live(), key=lambda i: (i.created_at, i.id), reverse=True)
        return items[offset : offset + limit]

    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> list[Item]:
        """Items by author, newest first."""
        items = [i for i in self._live() if i.author_id == author_id]
        items.sort(key=lambda i: (i.created_at, i.id), reverse=True)
        return items[offset : offset + limit]

    def _saved(self, user_id: UserId) -> list[Item]:
        upvotes = [
            v
            for v in self._votes.votes
            if v.user_id == user_id
            and v.votable_type == VotableType.ITEM
            and v.vote_type == VoteType.UP
        ]
        upvotes.sort(key=lambda v: v.created_at, reverse=True)
        by_votable = {item_votable_id(i.id): i for i in self._live()}
        return [by_votable[v.votable_id] for v in upvotes if v.votable_id in by_votable]

    async def find_saved(self, user_id: UserId, limit: int, offset: int) -> list[Item]:
        """Items the user upvoted, newest vote first."""
        return self._saved(user_id)[offset : offset + limit]

    async def count_saved(self, user_id: UserId) -> int:
        return len(self._saved(user_id))

    async def find_all_live(self) -> list[Item]:
        return self._live()

    async def count(self, author_id: Optional[UserId] = None) -> int:
        return sum(
            1 for i in self._live() if author_id is None or i.author_id == author_id
        )

    async def insert(self, item: Item) -> Item:
        """Insert an item."""
        self._items[item.id] = item
        return item

    async def update_content(
        self, item_id: ItemId, title: str, url: ItemUrl
    ) -> Optional[Item]:
        """Replace title and url."""
        return self._replace(item_id, title=title, url=url)

    async def update_score_and_rank(
        self, item_id: ItemId, score: float, rank: float
    ) -> None:
        self._replace(item_id, score=score, rank=rank)

    async def increment_comment_count(self, item_id: ItemId, by: int = 1) -> None:
        item = self._items.get(item_id)
        if item is not None:
            self._replace(item_id, comment_count=max(item.comment_count + by, 0))

    async def mark_deleted(self, item_id: ItemId) -> bool:
        return self._replace(item_id, deleted=True) is not None
