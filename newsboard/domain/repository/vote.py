"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from newsboard.domain.model.vote import Vote, VoteCounts
from newsboard.domain.value import UserId, VotableType, VoteType


class VoteRepository(ABC):
    """Repository for the append-only vote ledger.

    Votes are only ever inserted. The (user, votable_type, votable_id)
    unique constraint is the authoritative duplicate guard.
    """

    @abstractmethod
    async def insert(self, vote: Vote) -> bool:
        """Insert a vote.

        Args:
            vote: The vote to record

        Returns:
            True if inserted, False if the user already voted on this
            votable (unique constraint violation)
        """
        pass

    @abstractmethod
    async def find_vote_type(
        self, user_id: UserId, votable_type: VotableType, votable_id: str
    ) -> Optional[VoteType]:
        """Find the type of a user's vote on a votable, if any."""
        pass

    @abstractmethod
    async def find_vote_types(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[str],
    ) -> Dict[str, VoteType]:
        """Batch variant of ``find_vote_type``; absent ids are omitted."""
        pass

    @abstractmethod
    async def count(self, votable_type: VotableType, votable_id: str) -> VoteCounts:
        """Aggregate up/down counts for one votable (scan, no caching)."""
        pass

    @abstractmethod
    async def count_many(
        self, votable_type: VotableType, votable_ids: Sequence[str]
    ) -> Dict[str, VoteCounts]:
        """Aggregate counts for many votables in one query.

        Every requested id is present in the result.
        """
        pass
