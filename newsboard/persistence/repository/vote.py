"""PostgreSQL implementation of Vote repository."""

from typing import Dict, Optional, Sequence

import logfire
from sqlalchemy import and_, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.model import Vote, VoteCounts
from newsboard.domain.repository import VoteRepository
from newsboard.domain.value import UserId, VotableType, VoteType
from newsboard.persistence.mappers import vote_to_dict
from newsboard.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, vote: Vote) -> bool:
        """Insert a vote inside a SAVEPOINT.

        A unique violation only rolls back the savepoint, so the request
        transaction stays usable.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError:
            logfire.info(
                "Duplicate vote rejected",
                user_id=vote.user_id,
                votable_type=vote.votable_type.value,
                votable_id=vote.votable_id,
            )
            return False
        return True

    async def find_vote_type(
        self, user_id: UserId, votable_type: VotableType, votable_id: str
    ) -> Optional[VoteType]:
        """Find a user's vote type on a specific votable."""
        stmt = select(votes_table.c.vote_type).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        value = result.scalar()
        return VoteType(value) if value else None

    async def find_vote_types(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[str],
    ) -> Dict[str, VoteType]:
        """Find a user's votes on multiple votables (batch query)."""
        if not votable_ids:
            return {}

        stmt = select(votes_table.c.votable_id, votes_table.c.vote_type).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {row.votable_id: VoteType(row.vote_type) for row in result.fetchall()}

    async def count(self, votable_type: VotableType, votable_id: str) -> VoteCounts:
        """Aggregate up/down counts for one votable."""
        counts = await self.count_many(votable_type, [votable_id])
        return counts[votable_id]

    async def count_many(
        self, votable_type: VotableType, votable_ids: Sequence[str]
    ) -> Dict[str, VoteCounts]:
        """Aggregate counts grouped by votable id and vote type."""
        if not votable_ids:
            return {}

        totals: Dict[str, Dict[str, int]] = {
            votable_id: {"up": 0, "down": 0} for votable_id in votable_ids
        }

        stmt = (
            select(
                votes_table.c.votable_id,
                votes_table.c.vote_type,
                func.count().label("n"),
            )
            .where(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
            .group_by(votes_table.c.votable_id, votes_table.c.vote_type)
        )
        result = await self.session.execute(stmt)
        for row in result.fetchall():
            totals[row.votable_id][row.vote_type] = row.n

        return {
            votable_id: VoteCounts(up=counts["up"], down=counts["down"])
            for votable_id, counts in totals.items()
        }
