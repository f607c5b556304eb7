"""Vote ledger domain service."""

from typing import Dict, Optional, Sequence

import logfire

from newsboard.domain.model.vote import Vote, VoteCounts
from newsboard.domain.repository import VoteRepository
from newsboard.domain.value import UserId, VotableType, VoteType
from newsboard.util.clock import Clock

from .base import Service


class VoteService(Service):
    """Domain service for the append-only vote ledger.

    A user casts at most one vote per votable. Votes can't be switched or
    retracted once cast.
    """

    def __init__(self, vote_repository: VoteRepository, clock: Clock) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            clock: Time source
        """
        self.vote_repository = vote_repository
        self.clock = clock

    async def cast_vote(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: str,
        vote_type: VoteType,
    ) -> bool:
        """Record a vote.

        The lookup is only a shortcut; the unique constraint behind
        ``VoteRepository.insert`` is what guarantees a single vote under
        concurrency.

        Args:
            user_id: Voter
            votable_type: Item or comment
            votable_id: Ledger key of the votable
            vote_type: Up or down

        Returns:
            True if the vote was recorded, False if the user had already
            voted on this votable (with any vote type)
        """
        with logfire.span(
            "vote_service.cast_vote",
            user_id=user_id,
            votable_type=votable_type.value,
            votable_id=votable_id,
            vote_type=vote_type.value,
        ):
            existing = await self.vote_repository.find_vote_type(
                user_id, votable_type, votable_id
            )
            if existing is not None:
                logfire.warn(
                    "Duplicate vote attempt",
                    user_id=user_id,
                    votable_id=votable_id,
                    existing=existing.value,
                )
                return False

            vote = Vote(
                user_id=user_id,
                votable_type=votable_type,
                votable_id=votable_id,
                vote_type=vote_type,
                created_at=self.clock.now(),
            )
            inserted = await self.vote_repository.insert(vote)
            if inserted:
                logfire.info("Vote cast", user_id=user_id, votable_id=votable_id)
            return inserted

    async def get_vote_counts(
        self, votable_type: VotableType, votable_id: str
    ) -> VoteCounts:
        """Aggregate up/down counts (no caching)."""
        return await self.vote_repository.count(votable_type, votable_id)

    async def get_vote_counts_many(
        self, votable_type: VotableType, votable_ids: Sequence[str]
    ) -> Dict[str, VoteCounts]:
        """Aggregate counts for several votables in one query."""
        return await self.vote_repository.count_many(votable_type, votable_ids)

    async def get_user_vote(
        self, user_id: UserId, votable_type: VotableType, votable_id: str
    ) -> Optional[VoteType]:
        """The user's vote on a votable, if any."""
        return await self.vote_repository.find_vote_type(
            user_id, votable_type, votable_id
        )

    async def get_user_votes(
        self, user_id: UserId, votable_type: VotableType, votable_ids: Sequence[str]
    ) -> Dict[str, VoteType]:
        """The user's votes on several votables (batch query, avoids N+1)."""
        if not votable_ids:
            return {}
        return await self.vote_repository.find_vote_types(
            user_id, votable_type, votable_ids
        )
