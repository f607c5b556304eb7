"""Scoring and ranking domain service.

SCORE = (UP - DOWN) + log(TOTAL - log_start) * log_boost   (TOTAL > log_start)
RANK  = SCORE * scale / (AGE + age_padding) ^ aging_factor
RANK  = -AGE                                                 (AGE > age_limit)

Listings order by the stored rank. The stored value is corrected lazily
whenever a single item is viewed, and by the admin recompute sweep.
"""

import math

import logfire

from newsboard.config import RankingSettings, Settings
from newsboard.domain.model import Item, VoteCounts
from newsboard.domain.repository import ItemRepository
from newsboard.domain.value import ItemId, VotableType, item_votable_id
from newsboard.util.clock import Clock

from .base import Service
from .vote_service import VoteService


def compute_score(counts: VoteCounts, settings: RankingSettings) -> float:
    """Vote difference plus a logarithmic bonus for high vote volume."""
    score = float(counts.difference)
    if counts.total > settings.log_start:
        score += math.log(counts.total - settings.log_start) * settings.log_boost
    return score


def compute_rank(score: float, age: int, settings: RankingSettings) -> float:
    """Time-decayed rank.

    Past ``age_limit`` the rank is ``-age`` regardless of score, so aged-out
    items sink below every in-window item and older ones sink further.
    """
    if age > settings.age_limit:
        return float(-age)
    return score * settings.scale / (age + settings.age_padding) ** settings.aging_factor


class RankingService(Service):
    """Domain service that reconciles stored score and rank with the ledger."""

    def __init__(
        self,
        item_repository: ItemRepository,
        vote_service: VoteService,
        settings: Settings,
        clock: Clock,
    ) -> None:
        """Initialize ranking service.

        Args:
            item_repository: Item repository
            vote_service: Vote ledger service
            settings: Application settings
            clock: Time source
        """
        self.item_repository = item_repository
        self.vote_service = vote_service
        self.settings = settings.ranking
        self.clock = clock

    def score_and_rank(self, item: Item, counts: VoteCounts) -> tuple[float, float]:
        """True score and rank of ``item`` right now."""
        score = compute_score(counts, self.settings)
        rank = compute_rank(score, item.age(self.clock.now()), self.settings)
        return score, rank

    async def update_rank_if_needed(
        self, item: Item, counts: VoteCounts | None = None
    ) -> Item:
        """Persist the true score and rank if the stored rank has drifted.

        Near ``age_limit`` the result flips between the decayed rank and
        ``-age`` depending on when the item is viewed. That oscillation is
        kept as is.

        Args:
            item: Item as loaded from the store
            counts: Live vote counts, fetched when not given

        Returns:
            The item, with corrected score and rank when they were rewritten
        """
        with logfire.span("ranking_service.update_rank_if_needed", item_id=item.id):
            if counts is None:
                counts = await self.vote_service.get_vote_counts(
                    VotableType.ITEM, item_votable_id(item.id)
                )

            score, rank = self.score_and_rank(item, counts)
            if abs(rank - item.rank) <= self.settings.rank_epsilon:
                return item

            await self.item_repository.update_score_and_rank(item.id, score, rank)
            logfire.info(
                "Item rank corrected",
                item_id=item.id,
                stored_rank=item.rank,
                rank=rank,
            )
            return item.model_copy(update={"score": score, "rank": rank})

    async def refresh(self, item_id: ItemId) -> Item | None:
        """Unconditionally recompute and persist score and rank (after a vote).

        Returns:
            Updated item, or None if it doesn't exist
        """
        with logfire.span("ranking_service.refresh", item_id=item_id):
            item = await self.item_repository.find_by_id(item_id)
            if item is None:
                return None

            counts = await self.vote_service.get_vote_counts(
                VotableType.ITEM, item_votable_id(item_id)
            )
            score, rank = self.score_and_rank(item, counts)
            await self.item_repository.update_score_and_rank(item_id, score, rank)
            return item.model_copy(update={"score": score, "rank": rank})

    async def recompute_all(self) -> int:
        """Recompute every live item. Idempotent.

        Returns:
            Number of items whose stored rank was rewritten
        """
        with logfire.span("ranking_service.recompute_all"):
            items = await self.item_repository.find_all_live()
            counts = await self.vote_service.get_vote_counts_many(
                VotableType.ITEM, [item_votable_id(item.id) for item in items]
            )

            updated = 0
            for item in items:
                refreshed = await self.update_rank_if_needed(
                    item, counts[item_votable_id(item.id)]
                )
                if refreshed is not item:
                    updated += 1

            logfire.info("Ranks recomputed", items=len(items), updated=updated)
            return updated
