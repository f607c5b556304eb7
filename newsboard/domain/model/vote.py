"""Vote entity.

Votes are immutable: one row per (user, votable type, votable id), never
updated or deleted.
"""

from newsboard.domain.model.common import DomainModel
from newsboard.domain.value import UserId, VotableType, VoteType
from newsboard.domain.value.common import ValueObject


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - At most one vote per user per votable (database unique constraint)
    - A cast vote cannot be switched or retracted
    """

    user_id: UserId
    votable_type: VotableType
    votable_id: str  # item_votable_id() or comment_votable_id()
    vote_type: VoteType
    created_at: int


class VoteCounts(ValueObject):
    """Aggregate up/down counts for one votable."""

    up: int = 0
    down: int = 0

    @property
    def total(self) -> int:
        return self.up + self.down

    @property
    def difference(self) -> int:
        return self.up - self.down
