"""Unit tests for the comment read use cases."""

import pytest

from newsboard.application.usecase.comment import (
    GetCommentRequest,
    GetCommentUseCase,
    GetRepliesRequest,
    GetRepliesUseCase,
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
)
from newsboard.domain.model import RequestContext
from newsboard.domain.repository import ItemRepository, UserRepository
from newsboard.domain.service import CommentService
from newsboard.domain.value import UserId
from tests.conftest import make_item, make_user
from tests.di import FrozenClock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def setup(env):
    """alice comments, bob replies twice, alice replies to bob."""
    user_repo = await env.get(UserRepository)
    item_repo = await env.get(ItemRepository)
    comment_service = await env.get(CommentService)
    clock = await env.get(FrozenClock)

    alice = await user_repo.insert(make_user(1, "alice"))
    bob = await user_repo.insert(make_user(2, "bob"))
    item = await item_repo.insert(make_item(item_id=1, author_id=1))

    root = await comment_service.insert_comment(alice, item, "Root")
    clock.advance(1)
    first = await comment_service.insert_comment(bob, item, "Reply one", root.id)
    clock.advance(1)
    await comment_service.insert_comment(bob, item, "Reply two", root.id)
    clock.advance(1)
    await comment_service.insert_comment(alice, item, "Nested", first.id)
    return alice, bob, root


class TestGetRepliesUseCase:
    """Tests for GetRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_replies_page_resets_unread_counter(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetRepliesUseCase)
        user_repo = await unit_env.get(UserRepository)
        alice, _, _ = await setup(unit_env)
        assert (await user_repo.find_by_id(UserId(1))).replies == 2

        # Act
        response = await use_case.execute(
            GetRepliesRequest(context=RequestContext(user=alice))
        )

        # Assert
        assert [t.comment.comment.body for t in response.threads] == ["Nested", "Root"]
        root_thread = response.threads[1]
        assert [(e.comment.comment.body, e.level) for e in root_thread.replies] == [
            ("Reply two", 0),
            ("Reply one", 0),
            ("Nested", 1),
        ]
        assert (await user_repo.find_by_id(UserId(1))).replies == 0


class TestGetCommentUseCase:
    """Tests for GetCommentUseCase."""

    @pytest.mark.asyncio
    async def test_comment_with_subthread(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCommentUseCase)
        _, _, root = await setup(unit_env)

        # Act
        response = await use_case.execute(
            GetCommentRequest(context=RequestContext(), item_id=1, comment_id=root.id)
        )

        # Assert
        assert response.thread.comment.id == root.id
        assert len(response.thread.replies) == 3
        assert response.item.item.id == 1

    @pytest.mark.asyncio
    async def test_missing_comment(self, unit_env):
        use_case = await unit_env.get(GetCommentUseCase)
        await setup(unit_env)

        response = await use_case.execute(
            GetCommentRequest(context=RequestContext(), item_id=1, comment_id=99)
        )

        assert response is None


class TestListUserCommentsUseCase:
    """Tests for ListUserCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_newest_first(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListUserCommentsUseCase)
        await setup(unit_env)

        # Act
        page = await use_case.execute(
            ListUserCommentsRequest(context=RequestContext(), username="bob")
        )

        # Assert
        assert [c.comment.body for c in page.items] == ["Reply two", "Reply one"]
        assert page.total == 2
        assert page.next_link is None
