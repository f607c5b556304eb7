"""Unit tests for CommentService."""

import pytest

from newsboard.domain.error import (
    ContentDeletedException,
    NotAuthorizedError,
    ValidationError,
)
from newsboard.domain.repository import (
    CommentRepository,
    ItemRepository,
    UserRepository,
)
from newsboard.domain.service import CommentService, VoteService
from newsboard.domain.value import (
    CommentId,
    ItemId,
    UserId,
    VotableType,
    VoteType,
    comment_votable_id,
)
from tests.conftest import make_item, make_user
from tests.di import FrozenClock
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def setup_thread(env):
    """Two users and one item by the first."""
    user_repo = await env.get(UserRepository)
    item_repo = await env.get(ItemRepository)
    alice = await user_repo.insert(make_user(1, "alice"))
    bob = await user_repo.insert(make_user(2, "bob"))
    item = await item_repo.insert(make_item(item_id=1, author_id=1))
    return alice, bob, item


class TestInsertComment:
    """Tests for insert_comment method."""

    @pytest.mark.asyncio
    async def test_insert_top_level_comment(self, unit_env):
        """New comment gets an id, an author upvote and bumps the item count."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        vote_service = await unit_env.get(VoteService)
        item_repo = await unit_env.get(ItemRepository)
        alice, _, item = await setup_thread(unit_env)

        # Act
        comment = await comment_service.insert_comment(alice, item, "First!")

        # Assert
        assert comment.id == 1
        assert comment.is_root
        assert comment.score == 1
        counts = await vote_service.get_vote_counts(
            VotableType.COMMENT, comment_votable_id(item.id, comment.id)
        )
        assert counts.up == 1
        assert (await item_repo.find_by_id(item.id)).comment_count == 1

    @pytest.mark.asyncio
    async def test_comment_ids_are_per_item(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        item_repo = await unit_env.get(ItemRepository)
        alice, _, item = await setup_thread(unit_env)
        other = await item_repo.insert(make_item(item_id=2, author_id=1))

        # Act
        a = await comment_service.insert_comment(alice, item, "on one")
        b = await comment_service.insert_comment(alice, other, "on two")
        c = await comment_service.insert_comment(alice, item, "on one again")

        # Assert
        assert (a.id, b.id, c.id) == (1, 1, 2)

    @pytest.mark.asyncio
    async def test_reply_bumps_parent_author_replies(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, item = await setup_thread(unit_env)
        parent = await comment_service.insert_comment(alice, item, "Question?")

        # Act
        reply = await comment_service.insert_comment(bob, item, "Answer.", parent.id)

        # Assert
        assert reply.parent_id == parent.id
        assert (await user_repo.find_by_id(UserId(1))).replies == 1

    @pytest.mark.asyncio
    async def test_self_reply_does_not_bump_replies(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        user_repo = await unit_env.get(UserRepository)
        alice, _, item = await setup_thread(unit_env)
        parent = await comment_service.insert_comment(alice, item, "Question?")

        # Act
        await comment_service.insert_comment(alice, item, "Also...", parent.id)

        # Assert
        assert (await user_repo.find_by_id(UserId(1))).replies == 0

    @pytest.mark.asyncio
    async def test_unknown_parent_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)

        with pytest.raises(ValidationError):
            await comment_service.insert_comment(alice, item, "Orphan", CommentId(42))

    @pytest.mark.asyncio
    async def test_deleted_item_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)

        with pytest.raises(ContentDeletedException):
            await comment_service.insert_comment(
                alice, item.model_copy(update={"deleted": True}), "Too late"
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["", " a ", "x" * 4097])
    async def test_body_length_enforced(self, unit_env, body):
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)

        with pytest.raises(ValidationError):
            await comment_service.insert_comment(alice, item, body)


class TestEditAndDelete:
    """Tests for edit_comment and delete_comment."""

    @pytest.mark.asyncio
    async def test_owner_edits_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)
        comment = await comment_service.insert_comment(alice, item, "Tpyo")

        updated = await comment_service.edit_comment(alice, item.id, comment.id, "Typo")

        assert updated.body == "Typo"

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        alice, bob, item = await setup_thread(unit_env)
        comment = await comment_service.insert_comment(alice, item, "Mine")

        with pytest.raises(NotAuthorizedError):
            await comment_service.edit_comment(bob, item.id, comment.id, "Yours")

    @pytest.mark.asyncio
    async def test_delete_decrements_item_count(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        item_repo = await unit_env.get(ItemRepository)
        comment_repo = await unit_env.get(CommentRepository)
        alice, _, item = await setup_thread(unit_env)
        comment = await comment_service.insert_comment(alice, item, "Oops")

        # Act
        deleted = await comment_service.delete_comment(alice, item.id, comment.id)
        again = await comment_service.delete_comment(alice, item.id, comment.id)

        # Assert
        assert deleted is True
        assert again is False
        assert (await item_repo.find_by_id(item.id)).comment_count == 0
        assert (await comment_repo.find(item.id, comment.id)).deleted

    @pytest.mark.asyncio
    async def test_edit_deleted_comment_fails(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)
        comment = await comment_service.insert_comment(alice, item, "Gone")
        await comment_service.delete_comment(alice, item.id, comment.id)

        with pytest.raises(ContentDeletedException):
            await comment_service.edit_comment(alice, item.id, comment.id, "Back")

    @pytest.mark.asyncio
    async def test_edit_missing_comment_returns_none(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)

        assert await comment_service.edit_comment(alice, item.id, CommentId(5), "x y") is None


class TestVoteComment:
    """Tests for vote_comment method."""

    @pytest.mark.asyncio
    async def test_vote_reconciles_score_and_rewards_author(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        user_repo = await unit_env.get(UserRepository)
        alice, bob, item = await setup_thread(unit_env)
        comment = await comment_service.insert_comment(alice, item, "Good point")

        # Act
        voted = await comment_service.vote_comment(bob, comment, VoteType.UP)
        duplicate = await comment_service.vote_comment(bob, comment, VoteType.DOWN)

        # Assert
        assert voted is True
        assert duplicate is False
        assert (await comment_repo.find(item.id, comment.id)).score == 2
        assert (await user_repo.find_by_id(UserId(1))).karma == alice.karma + 1


class TestRender:
    """Tests for thread rendering."""

    @pytest.mark.asyncio
    async def test_render_uses_live_scores(self, unit_env):
        """Thread order follows ledger counts, ties newest first."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        clock = await unit_env.get(FrozenClock)
        alice, bob, item = await setup_thread(unit_env)
        older = await comment_service.insert_comment(alice, item, "Older")
        clock.advance(10)
        newer = await comment_service.insert_comment(bob, item, "Newer")
        reply = await comment_service.insert_comment(alice, item, "Reply", older.id)

        # Act
        thread = [
            (c.id, level) for c, level in await comment_service.render(item.id)
        ]

        # Assert
        assert thread == [(newer.id, 0), (older.id, 0), (reply.id, 1)]

    @pytest.mark.asyncio
    async def test_fetch_annotates_author(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        alice, _, item = await setup_thread(unit_env)
        comment = await comment_service.insert_comment(alice, item, "Hello")

        # Act
        fetched = await comment_service.fetch(item.id, comment.id)

        # Assert
        assert fetched.author_username == "alice"
        assert fetched.score == 1
        assert await comment_service.fetch(ItemId(1), CommentId(99)) is None

    @pytest.mark.asyncio
    async def test_user_comments_newest_first(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        clock = await unit_env.get(FrozenClock)
        alice, _, item = await setup_thread(unit_env)
        for body in ("one", "two", "three"):
            await comment_service.insert_comment(alice, item, body)
            clock.advance(1)

        # Act
        comments, total = await comment_service.get_user_comments(alice.id, 0, 2)

        # Assert
        assert total == 3
        assert [c.comment.body for c in comments] == ["three", "two"]
