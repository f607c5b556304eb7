"""Comment entity.

Comments form a forest per item: ``parent_id`` is -1 for top-level
comments. Ids are scoped per item.
"""

from pydantic import Field

from newsboard.domain.model.common import DomainModel
from newsboard.domain.value import ROOT_COMMENT_ID, CommentId, ItemId, UserId


class Comment(DomainModel):
    """Comment entity.

    A deleted comment that still has replies keeps its place in the tree
    and is rendered as a placeholder.
    """

    id: CommentId
    item_id: ItemId
    parent_id: CommentId = ROOT_COMMENT_ID
    author_id: UserId
    body: str
    created_at: int
    score: int = 0
    deleted: bool = False

    @property
    def is_root(self) -> bool:
        """Whether this is a top-level comment."""
        return self.parent_id == ROOT_COMMENT_ID


class ThreadComment(DomainModel):
    """Comment annotated with live vote counts and author name for rendering."""

    comment: Comment
    up: int = Field(default=0, ge=0)
    down: int = Field(default=0, ge=0)
    author_username: str | None = None

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def parent_id(self) -> CommentId:
        return self.comment.parent_id

    @property
    def created_at(self) -> int:
        return self.comment.created_at

    @property
    def deleted(self) -> bool:
        return self.comment.deleted

    @property
    def score(self) -> int:
        """Live score from the vote ledger."""
        return self.up - self.down
