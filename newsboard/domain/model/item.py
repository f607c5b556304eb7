"""Item aggregate root.

An item is a submitted story. Link posts and text posts share one shape:
text posts carry a synthetic ``text://`` url embedding their body.
"""

from pydantic import Field

from newsboard.domain.model.common import DomainModel
from newsboard.domain.model.vote import VoteCounts
from newsboard.domain.value import ItemId, ItemUrl, UserId, VoteType


class Item(DomainModel):
    """Item aggregate root.

    ``score`` and ``rank`` are denormalized and lazily reconciled by the
    ranking service; listings order by the stored values.
    """

    id: ItemId
    title: str = Field(min_length=1)
    url: ItemUrl
    author_id: UserId
    created_at: int
    score: float = 0.0
    rank: float = 0.0
    comment_count: int = Field(default=0, ge=0)
    deleted: bool = False

    @property
    def is_text_post(self) -> bool:
        """Whether the item is a text post."""
        return self.url.is_text

    def age(self, now: int) -> int:
        """Seconds elapsed since creation."""
        return now - self.created_at


class ItemView(DomainModel):
    """Item annotated with live vote counts for listings and the item page."""

    item: Item
    up: int = Field(default=0, ge=0)
    down: int = Field(default=0, ge=0)
    author_username: str | None = None
    user_vote: VoteType | None = None

    @property
    def counts(self) -> VoteCounts:
        return VoteCounts(up=self.up, down=self.down)
