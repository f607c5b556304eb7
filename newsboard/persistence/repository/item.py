"""PostgreSQL implementation of Item repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import String, cast, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.model import Item
from newsboard.domain.repository.item import ItemRepository
from newsboard.domain.value import ItemId, ItemUrl, UserId, VotableType, VoteType
from newsboard.persistence.mappers import item_to_dict, row_to_item
from newsboard.persistence.tables import items_table, votes_table


class PostgresItemRepository(ItemRepository):
    """PostgreSQL implementation of ItemRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch(self, stmt) -> List[Item]:
        result = await self.session.execute(stmt)
        return [row_to_item(row._asdict()) for row in result.fetchall()]

    async def find_by_id(self, item_id: ItemId) -> Optional[Item]:
        """Find an item by ID."""
        with logfire.span("item_repository.find_by_id", item_id=item_id):
            stmt = select(items_table).where(items_table.c.id == item_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Item not found", item_id=item_id)
                return None

            return row_to_item(row._asdict())

    async def find_by_ids(self, item_ids: Sequence[ItemId]) -> List[Item]:
        """Find several items, preserving input order."""
        if not item_ids:
            return []

        stmt = select(items_table).where(items_table.c.id.in_(item_ids))
        by_id = {item.id: item for item in await self._fetch(stmt)}
        return [by_id[item_id] for item_id in item_ids if item_id in by_id]

    async def find_top(self, limit: int, offset: int) -> List[Item]:
        """Live items ordered by stored rank."""
        with logfire.span("item_repository.find_top", limit=limit, offset=offset):
            stmt = (
                select(items_table)
                .where(items_table.c.deleted.is_(False))
                .order_by(desc(items_table.c.rank), desc(items_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            items = await self._fetch(stmt)
            logfire.info("Found top items", count=len(items))
            return items

    async def find_latest(self, limit: int, offset: int) -> List[Item]:
        """Live items ordered by creation time."""
        with logfire.span("item_repository.find_latest", limit=limit, offset=offset):
            stmt = (
                select(items_table)
                .where(items_table.c.deleted.is_(False))
                .order_by(desc(items_table.c.created_at), desc(items_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            return await self._fetch(stmt)

    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> List[Item]:
        """Live items submitted by a user."""
        stmt = (
            select(items_table)
            .where(
                items_table.c.author_id == author_id,
                items_table.c.deleted.is_(False),
            )
            .order_by(desc(items_table.c.created_at), desc(items_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch(stmt)

    def _saved_join(self, user_id: UserId):
        # Item votable ids are the decimal item id
        joined = items_table.join(
            votes_table,
            votes_table.c.votable_id == cast(items_table.c.id, String),
        )
        return joined, (
            votes_table.c.user_id == user_id,
            votes_table.c.votable_type == VotableType.ITEM.value,
            votes_table.c.vote_type == VoteType.UP.value,
            items_table.c.deleted.is_(False),
        )

    async def find_saved(self, user_id: UserId, limit: int, offset: int) -> List[Item]:
        """Live items the user upvoted."""
        with logfire.span("item_repository.find_saved", user_id=user_id):
            joined, conditions = self._saved_join(user_id)
            stmt = (
                select(items_table)
                .select_from(joined)
                .where(*conditions)
                .order_by(desc(votes_table.c.created_at), desc(items_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            return await self._fetch(stmt)

    async def count_saved(self, user_id: UserId) -> int:
        """Count live items the user upvoted."""
        joined, conditions = self._saved_join(user_id)
        stmt = select(func.count()).select_from(joined).where(*conditions)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_all_live(self) -> List[Item]:
        """Every non-deleted item."""
        stmt = select(items_table).where(items_table.c.deleted.is_(False))
        return await self._fetch(stmt)

    async def count(self, author_id: Optional[UserId] = None) -> int:
        """Count live items."""
        stmt = (
            select(func.count())
            .select_from(items_table)
            .where(items_table.c.deleted.is_(False))
        )
        if author_id is not None:
            stmt = stmt.where(items_table.c.author_id == author_id)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def insert(self, item: Item) -> Item:
        """Insert a new item."""
        with logfire.span("item_repository.insert", item_id=item.id):
            stmt = insert(items_table).values(**item_to_dict(item))
            await self.session.execute(stmt)
            await self.session.flush()
            return item

    async def update_content(
        self, item_id: ItemId, title: str, url: ItemUrl
    ) -> Optional[Item]:
        """Replace title and url."""
        stmt = (
            update(items_table)
            .where(items_table.c.id == item_id)
            .values(title=title, url=str(url))
            .returning(items_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        await self.session.flush()
        return row_to_item(row._asdict())

    async def update_score_and_rank(
        self, item_id: ItemId, score: float, rank: float
    ) -> None:
        """Persist score and rank."""
        stmt = (
            update(items_table)
            .where(items_table.c.id == item_id)
            .values(score=score, rank=rank)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_comment_count(self, item_id: ItemId, by: int = 1) -> None:
        """Atomically adjust comment_count (never below zero)."""
        stmt = (
            update(items_table)
            .where(items_table.c.id == item_id)
            .values(
                comment_count=func.greatest(items_table.c.comment_count + by, 0)
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_deleted(self, item_id: ItemId) -> bool:
        """Soft-delete an item."""
        stmt = (
            update(items_table)
            .where(items_table.c.id == item_id)
            .values(deleted=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
