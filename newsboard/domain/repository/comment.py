"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from newsboard.domain.model.comment import Comment
from newsboard.domain.value import CommentId, ItemId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Comments are addressed by (item_id, comment_id).
    """

    @abstractmethod
    async def find(self, item_id: ItemId, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment, including soft-deleted ones.

        Args:
            item_id: The item the comment belongs to
            comment_id: The per-item comment ID

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_item(self, item_id: ItemId) -> List[Comment]:
        """Every comment of an item (deleted included), oldest first.

        The whole thread is loaded in one query; tree assembly happens in
        the domain.
        """
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int, offset: int
    ) -> List[Comment]:
        """Live comments by a user, newest first."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count live comments by a user."""
        pass

    @abstractmethod
    async def insert(self, comment: Comment) -> Comment:
        """Insert a new comment (id already minted)."""
        pass

    @abstractmethod
    async def update_body(
        self, item_id: ItemId, comment_id: CommentId, body: str
    ) -> Optional[Comment]:
        """Replace the body of a live comment.

        Returns:
            Updated comment, or None if missing or deleted
        """
        pass

    @abstractmethod
    async def update_score(
        self, item_id: ItemId, comment_id: CommentId, score: int
    ) -> None:
        """Persist the denormalized vote score."""
        pass

    @abstractmethod
    async def mark_deleted(self, item_id: ItemId, comment_id: CommentId) -> bool:
        """Soft-delete a comment.

        Returns:
            True if a live comment was marked, False otherwise
        """
        pass
