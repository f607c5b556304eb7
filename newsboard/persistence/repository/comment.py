"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.model import Comment
from newsboard.domain.repository.comment import CommentRepository
from newsboard.domain.value import CommentId, ItemId, UserId
from newsboard.persistence.mappers import comment_to_dict, row_to_comment
from newsboard.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _key(self, item_id: ItemId, comment_id: CommentId):
        return (
            comments_table.c.item_id == item_id,
            comments_table.c.id == comment_id,
        )

    async def find(self, item_id: ItemId, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by (item, id)."""
        stmt = select(comments_table).where(*self._key(item_id, comment_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_item(self, item_id: ItemId) -> List[Comment]:
        """Find the whole thread of an item, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.item_id == item_id)
            .order_by(comments_table.c.created_at, comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> List[Comment]:
        """Find live comments by a specific author."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.author_id == author_id,
                comments_table.c.deleted.is_(False),
            )
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_author(self, author_id: UserId) -> int:
        """Count live comments by an author."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.author_id == author_id)
            .where(comments_table.c.deleted.is_(False))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def insert(self, comment: Comment) -> Comment:
        """Insert a comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def update_body(
        self, item_id: ItemId, comment_id: CommentId, body: str
    ) -> Optional[Comment]:
        """Update the body of a live comment."""
        stmt = (
            update(comments_table)
            .where(*self._key(item_id, comment_id))
            .where(comments_table.c.deleted.is_(False))
            .values(body=body)
            .returning(comments_table)
        )

        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            # Comment not found or deleted
            return None

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def update_score(
        self, item_id: ItemId, comment_id: CommentId, score: int
    ) -> None:
        """Persist the reconciled score."""
        stmt = (
            update(comments_table)
            .where(*self._key(item_id, comment_id))
            .values(score=score)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def mark_deleted(self, item_id: ItemId, comment_id: CommentId) -> bool:
        """Soft-delete a live comment."""
        stmt = (
            update(comments_table)
            .where(*self._key(item_id, comment_id))
            .where(comments_table.c.deleted.is_(False))
            .values(deleted=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
