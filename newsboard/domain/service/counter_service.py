"""Counter domain service (sequential id allocation)."""

from newsboard.domain.repository import CounterRepository
from newsboard.domain.value import CommentId, ItemId, UserId

from .base import Service

ITEM_COUNTER = "news_count"
USER_COUNTER = "users_count"


def comment_counter(item_id: ItemId) -> str:
    """Per-item comment id counter name."""
    return f"comments:{item_id}"


class CounterService(Service):
    """Mints ids from named counters instead of storage autoincrement."""

    def __init__(self, counter_repository: CounterRepository) -> None:
        self.counter_repository = counter_repository

    async def increment(self, name: str, by: int = 1) -> int:
        """Atomically add ``by`` and return the new value."""
        return await self.counter_repository.increment(name, by)

    async def next_item_id(self) -> ItemId:
        return ItemId(await self.increment(ITEM_COUNTER))

    async def next_user_id(self) -> UserId:
        return UserId(await self.increment(USER_COUNTER))

    async def next_comment_id(self, item_id: ItemId) -> CommentId:
        return CommentId(await self.increment(comment_counter(item_id)))
