"""Integration tests for the PostgreSQL repositories.

Skipped unless NEWSBOARD_TEST_DATABASE_URL points at a disposable database;
the schema is dropped and recreated for every test.
"""

import pytest

from newsboard.domain.model import Comment, Vote
from newsboard.domain.repository import (
    CommentRepository,
    CounterRepository,
    ItemRepository,
    RateLimitRepository,
    RepostWindowRepository,
    UserRepository,
    VoteRepository,
)
from newsboard.domain.value import (
    CommentId,
    ItemId,
    ItemUrl,
    UserId,
    VotableType,
    VoteType,
    item_votable_id,
)
from tests.conftest import make_item, make_user
from tests.di.clock import DEFAULT_NOW
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_find_by_username_ignores_case(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.insert(make_user(1, "Alice"))

        # Act
        found = await user_repo.find_by_username("aLICE")

        # Assert
        assert found is not None
        assert found.id == 1
        assert str(found.username) == "Alice"

    @pytest.mark.asyncio
    async def test_karma_and_replies_increment_in_sql(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        await user_repo.insert(make_user(1, "alice"))

        # Act
        await user_repo.increment_karma(UserId(1), 3)
        await user_repo.increment_replies(UserId(1))

        # Assert
        user = await user_repo.find_by_id(UserId(1))
        assert user.karma == 4
        assert user.replies == 1


class TestVoteRepositoryIntegration:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_duplicate_vote_rejected_by_constraint(self, integration_env):
        """The unique constraint rejects a second vote without aborting the transaction."""
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        vote_repo = await integration_env.get(VoteRepository)
        await user_repo.insert(make_user(1, "alice"))
        vote = Vote(
            user_id=UserId(1),
            votable_type=VotableType.ITEM,
            votable_id="1",
            vote_type=VoteType.UP,
            created_at=DEFAULT_NOW,
        )

        # Act
        first = await vote_repo.insert(vote)
        second = await vote_repo.insert(vote.model_copy(update={"vote_type": VoteType.DOWN}))

        # Assert
        assert first is True
        assert second is False
        counts = await vote_repo.count(VotableType.ITEM, "1")
        assert (counts.up, counts.down) == (1, 0)


class TestItemRepositoryIntegration:
    """Integration tests for PostgresItemRepository."""

    @pytest.mark.asyncio
    async def test_top_saved_and_counts(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        item_repo = await integration_env.get(ItemRepository)
        vote_repo = await integration_env.get(VoteRepository)
        await user_repo.insert(make_user(1, "alice"))
        await item_repo.insert(make_item(item_id=1, rank=1.0))
        await item_repo.insert(make_item(item_id=2, rank=2.0))
        await item_repo.insert(make_item(item_id=3, rank=3.0, deleted=True))
        await vote_repo.insert(
            Vote(
                user_id=UserId(1),
                votable_type=VotableType.ITEM,
                votable_id=item_votable_id(ItemId(1)),
                vote_type=VoteType.UP,
                created_at=DEFAULT_NOW,
            )
        )

        # Act
        top = await item_repo.find_top(10, 0)
        saved = await item_repo.find_saved(UserId(1), 10, 0)

        # Assert
        assert [item.id for item in top] == [2, 1]
        assert [item.id for item in saved] == [1]
        assert await item_repo.count() == 2
        assert await item_repo.count_saved(UserId(1)) == 1

    @pytest.mark.asyncio
    async def test_update_content_and_comment_count(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        item_repo = await integration_env.get(ItemRepository)
        await user_repo.insert(make_user(1, "alice"))
        await item_repo.insert(make_item(item_id=1))

        # Act
        updated = await item_repo.update_content(
            ItemId(1), "New title", ItemUrl("https://example.com/new")
        )
        await item_repo.increment_comment_count(ItemId(1), 2)
        await item_repo.increment_comment_count(ItemId(1), -1)

        # Assert
        assert updated.title == "New title"
        stored = await item_repo.find_by_id(ItemId(1))
        assert str(stored.url) == "https://example.com/new"
        assert stored.comment_count == 1


class TestCommentRepositoryIntegration:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_thread_round_trip(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        item_repo = await integration_env.get(ItemRepository)
        comment_repo = await integration_env.get(CommentRepository)
        await user_repo.insert(make_user(1, "alice"))
        await item_repo.insert(make_item(item_id=1))
        for comment_id, parent_id in ((1, -1), (2, 1)):
            await comment_repo.insert(
                Comment(
                    id=CommentId(comment_id),
                    item_id=ItemId(1),
                    parent_id=CommentId(parent_id),
                    author_id=UserId(1),
                    body=f"comment {comment_id}",
                    created_at=DEFAULT_NOW + comment_id,
                )
            )

        # Act
        deleted = await comment_repo.mark_deleted(ItemId(1), CommentId(1))
        thread = await comment_repo.find_by_item(ItemId(1))

        # Assert
        assert deleted is True
        assert [(c.id, c.parent_id, c.deleted) for c in thread] == [
            (1, -1, True),
            (2, 1, False),
        ]
        assert await comment_repo.count_by_author(UserId(1)) == 1


class TestStoreRepositoriesIntegration:
    """Integration tests for counters and TTL records."""

    @pytest.mark.asyncio
    async def test_counter_increment_returns_new_value(self, integration_env):
        counter_repo = await integration_env.get(CounterRepository)

        assert await counter_repo.increment("news_count") == 1
        assert await counter_repo.increment("news_count") == 2
        assert await counter_repo.increment("news_count", 5) == 7
        assert await counter_repo.get("users_count") == 0

    @pytest.mark.asyncio
    async def test_rate_limit_upsert_and_purge(self, integration_env):
        # Arrange
        rate_limit_repo = await integration_env.get(RateLimitRepository)
        await rate_limit_repo.upsert("limit:a", 100)
        await rate_limit_repo.upsert("limit:a", 200)
        await rate_limit_repo.upsert("limit:b", 50)

        # Act
        purged = await rate_limit_repo.purge_expired(100)

        # Assert
        assert purged == 1
        assert await rate_limit_repo.find_expiry("limit:a") == 200
        assert await rate_limit_repo.find_expiry("limit:b") is None

    @pytest.mark.asyncio
    async def test_repost_window(self, integration_env):
        # Arrange
        user_repo = await integration_env.get(UserRepository)
        item_repo = await integration_env.get(ItemRepository)
        repost_repo = await integration_env.get(RepostWindowRepository)
        await user_repo.insert(make_user(1, "alice"))
        await item_repo.insert(make_item(item_id=1))
        await repost_repo.upsert("https://example.com/a", ItemId(1), 1000)

        # Act & Assert
        assert await repost_repo.find_item_id("https://example.com/a", 999) == 1
        assert await repost_repo.find_item_id("https://example.com/a", 1000) is None

        await repost_repo.remove_for_item(ItemId(1))
        assert await repost_repo.find_item_id("https://example.com/a", 0) is None
