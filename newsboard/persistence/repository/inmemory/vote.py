"""In-memory vote repository for testing."""

from typing import Dict, Optional, Sequence

from newsboard.domain.model.vote import Vote, VoteCounts
from newsboard.domain.repository.vote import VoteRepository
from newsboard.domain.value import UserId, VotableType, VoteType


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    def _find(
        self, user_id: UserId, votable_type: VotableType, votable_id: str
    ) -> Optional[Vote]:
        for vote in self._votes:
            if (
                vote.user_id == user_id
                and vote.votable_type == votable_type
                and vote.votable_id == votable_id
            ):
                return vote
        return None

    @property
    def votes(self) -> list[Vote]:
        """Ledger rows in insertion order."""
        return list(self._votes)

    async def insert(self, vote: Vote) -> bool:
        """Insert a vote; False on (user, type, id) collision."""
        if self._find(vote.user_id, vote.votable_type, vote.votable_id):
            return False

        self._votes.append(vote)
        return True

    async def find_vote_type(
        self, user_id: UserId, votable_type: VotableType, votable_id: str
    ) -> Optional[VoteType]:
        """Find a user's vote type on a votable."""
        vote = self._find(user_id, votable_type, votable_id)
        return vote.vote_type if vote else None

    async def find_vote_types(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[str],
    ) -> Dict[str, VoteType]:
        """Find a user's votes on multiple votables (batch query)."""
        wanted = set(votable_ids)
        return {
            v.votable_id: v.vote_type
            for v in self._votes
            if v.user_id == user_id
            and v.votable_type == votable_type
            and v.votable_id in wanted
        }

    async def count(self, votable_type: VotableType, votable_id: str) -> VoteCounts:
        """Count votes for one votable."""
        counts = await self.count_many(votable_type, [votable_id])
        return counts[votable_id]

    async def count_many(
        self, votable_type: VotableType, votable_ids: Sequence[str]
    ) -> Dict[str, VoteCounts]:
        """Count votes for several votables."""
        result = {}
        for votable_id in votable_ids:
            matching = [
                v
                for v in self._votes
                if v.votable_type == votable_type and v.votable_id == votable_id
            ]
            up = sum(1 for v in matching if v.vote_type == VoteType.UP)
            result[votable_id] = VoteCounts(up=up, down=len(matching) - up)
        return result
