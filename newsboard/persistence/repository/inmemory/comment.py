"""In-memory comment repository for testing."""

from typing import Optional

from newsboard.domain.model.comment import Comment
from newsboard.domain.repository.comment import CommentRepository
from newsboard.domain.value import CommentId, ItemId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[tuple[ItemId, CommentId], Comment] = {}

    async def find(self, item_id: ItemId, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by (item, id)."""
        return self._comments.get((item_id, comment_id))

    async def find_by_item(self, item_id: ItemId) -> list[Comment]:
        """Whole thread, oldest first."""
        comments = [c for c in self._comments.values() if c.item_id == item_id]
        comments.sort(key=lambda c: (c.created_at, c.id))
        return comments

    def _by_author(self, author_id: UserId) -> list[Comment]:
        comments = [
            c
            for c in self._comments.values()
            if c.author_id == author_id and not c.deleted
        ]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments

    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> list[Comment]:
        """Live comments by author, newest first."""
        return self._by_author(author_id)[offset : offset + limit]

    async def count_by_author(self, author_id: UserId) -> int:
        return len(self._by_author(author_id))

    async def insert(self, comment: Comment) -> Comment:
        """Insert a comment."""
        self._comments[(comment.item_id, comment.id)] = comment
        return comment

    async def update_body(
        self, item_id: ItemId, comment_id: CommentId, body: str
    ) -> Optional[Comment]:
        """Update body of a live comment."""
        comment = self._comments.get((item_id, comment_id))
        if comment is None or comment.deleted:
            return None

        updated = comment.model_copy(update={"body": body})
        self._comments[(item_id, comment_id)] = updated
        return updated

    async def update_score(
        self, item_id: ItemId, comment_id: CommentId, score: int
    ) -> None:
        comment = self._comments.get((item_id, comment_id))
        if comment is not None:
            self._comments[(item_id, comment_id)] = comment.model_copy(
                update={"score": score}
            )

    async def mark_deleted(self, item_id: ItemId, comment_id: CommentId) -> bool:
        comment = self._comments.get((item_id, comment_id))
        if comment is None or comment.deleted:
            return False

        self._comments[(item_id, comment_id)] = comment.model_copy(
            update={"deleted": True}
        )
        return True
