"""Unit tests for scoring, ranking and RankingService."""

import math

import pytest

from newsboard.config import RankingSettings
from newsboard.domain.model import VoteCounts
from newsboard.domain.repository import ItemRepository, VoteRepository
from newsboard.domain.service import RankingService, compute_rank, compute_score
from newsboard.domain.model.vote import Vote
from newsboard.domain.value import ItemId, UserId, VotableType, VoteType, item_votable_id
from tests.conftest import make_item
from tests.di import FrozenClock
from tests.di.clock import DEFAULT_NOW
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class TestComputeScore:
    """Tests for the vote-derived score."""

    def test_score_is_difference_below_log_start(self):
        """Few votes: score is just up minus down."""
        settings = RankingSettings(log_start=10)

        assert compute_score(VoteCounts(up=4, down=1), settings) == 3.0

    def test_score_at_log_start_has_no_bonus(self):
        """The bonus only starts once the total exceeds log_start."""
        settings = RankingSettings(log_start=10)

        assert compute_score(VoteCounts(up=5, down=5), settings) == 0.0

    def test_balanced_votes_above_log_start(self):
        """50 up / 50 down scores log(95) * boost with log_start=5."""
        # Arrange
        settings = RankingSettings(log_start=5, log_boost=2.0)

        # Act
        score = compute_score(VoteCounts(up=50, down=50), settings)

        # Assert
        assert abs(score - math.log(95) * 2.0) < 1e-6


class TestComputeRank:
    """Tests for the time-decayed rank."""

    def test_reference_rank(self):
        """Rank matches the reference formula for a one hour old item."""
        # Arrange
        settings = RankingSettings(
            log_start=5, log_boost=2.0, age_padding=3600, aging_factor=1.5
        )
        score = compute_score(VoteCounts(up=50, down=50), settings)

        # Act
        rank = compute_rank(score, 3600, settings)

        # Assert
        expected = math.log(95) * 2.0 * 1_000_000 / (3600 + 3600) ** 1.5
        assert abs(rank - expected) < 1e-6

    def test_rank_decreases_with_age(self):
        """For a fixed positive score, older means lower rank."""
        settings = RankingSettings()
        ages = [0, 60, 3600, 3600 * 6, 3600 * 24, settings.age_limit]

        ranks = [compute_rank(5.0, age, settings) for age in ages]

        assert ranks == sorted(ranks, reverse=True)
        assert len(set(ranks)) == len(ranks)

    def test_rank_is_negative_age_past_limit(self):
        """Past age_limit the rank ignores the score."""
        settings = RankingSettings()
        age = settings.age_limit + 1

        assert compute_rank(1000.0, age, settings) == -age

    def test_cutoff_rank_below_in_window_rank(self):
        """Crossing the cutoff always lands below the in-window rank."""
        settings = RankingSettings()

        inside = compute_rank(0.5, settings.age_limit, settings)
        outside = compute_rank(0.5, settings.age_limit + 1, settings)

        assert outside < inside
        assert outside < 0


class TestRankingService:
    """Tests for stored rank reconciliation."""

    @pytest.mark.asyncio
    async def test_update_rank_if_needed_rewrites_drifted_rank(self, unit_env):
        """A stale stored rank is corrected and persisted."""
        # Arrange
        ranking_service = await unit_env.get(RankingService)
        item_repo = await unit_env.get(ItemRepository)
        clock = await unit_env.get(FrozenClock)

        item = make_item(item_id=1, created_at=DEFAULT_NOW, rank=123.0)
        await item_repo.insert(item)
        clock.advance(600)

        # Act
        updated = await ranking_service.update_rank_if_needed(
            item, VoteCounts(up=3, down=0)
        )

        # Assert
        _, expected_rank = ranking_service.score_and_rank(item, VoteCounts(up=3))
        assert updated.rank == pytest.approx(expected_rank)
        assert updated.score == 3.0
        stored = await item_repo.find_by_id(ItemId(1))
        assert stored.rank == pytest.approx(expected_rank)

    @pytest.mark.asyncio
    async def test_update_rank_if_needed_keeps_accurate_rank(self, unit_env):
        """A rank within epsilon is left untouched."""
        # Arrange
        ranking_service = await unit_env.get(RankingService)
        item = make_item(item_id=1)
        counts = VoteCounts(up=2, down=0)
        score, rank = ranking_service.score_and_rank(item, counts)
        item = item.model_copy(update={"score": score, "rank": rank})

        # Act
        result = await ranking_service.update_rank_if_needed(item, counts)

        # Assert
        assert result is item

    @pytest.mark.asyncio
    async def test_recompute_all_is_idempotent(self, unit_env):
        """Second sweep right after the first changes nothing."""
        # Arrange
        ranking_service = await unit_env.get(RankingService)
        item_repo = await unit_env.get(ItemRepository)
        vote_repo = await unit_env.get(VoteRepository)

        for item_id in (1, 2, 3):
            await item_repo.insert(make_item(item_id=item_id))
            await vote_repo.insert(
                Vote(
                    user_id=UserId(10),
                    votable_type=VotableType.ITEM,
                    votable_id=item_votable_id(ItemId(item_id)),
                    vote_type=VoteType.UP,
                    created_at=DEFAULT_NOW,
                )
            )

        # Act
        first = await ranking_service.recompute_all()
        second = await ranking_service.recompute_all()

        # Assert
        assert first == 3
        assert second == 0
        top = await item_repo.find_top(10, 0)
        assert all(item.score == 1.0 for item in top)

    @pytest.mark.asyncio
    async def test_recompute_all_skips_deleted_items(self, unit_env):
        """Deleted items keep whatever rank they had."""
        # Arrange
        ranking_service = await unit_env.get(RankingService)
        item_repo = await unit_env.get(ItemRepository)
        await item_repo.insert(make_item(item_id=1, rank=42.0, deleted=True))

        # Act
        updated = await ranking_service.recompute_all()

        # Assert
        assert updated == 0
        stored = await item_repo.find_by_id(ItemId(1))
        assert stored.rank == 42.0

    @pytest.mark.asyncio
    async def test_refresh_missing_item_returns_none(self, unit_env):
        """Refreshing an unknown id is a no-op."""
        ranking_service = await unit_env.get(RankingService)

        assert await ranking_service.refresh(ItemId(404)) is None
