"""Unit tests for the user profile use cases."""

import pytest

from newsboard.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileUseCase,
    UpdateUserProfileRequest,
    UpdateUserProfileUseCase,
)
from newsboard.domain.error import NotAuthorizedError, ValidationError
from newsboard.domain.model import RequestContext
from newsboard.domain.repository import ItemRepository, UserRepository
from newsboard.domain.service import CommentService
from tests.conftest import make_item, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetUserProfileUseCase:
    """Tests for GetUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_profile_counts_and_private_email(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        item_repo = await unit_env.get(ItemRepository)
        comment_service = await unit_env.get(CommentService)
        alice = await user_repo.insert(make_user(1, "alice", email="a@example.com"))
        bob = await user_repo.insert(make_user(2, "bob"))
        item = await item_repo.insert(make_item(item_id=1, author_id=1))
        await item_repo.insert(make_item(item_id=2, author_id=1, deleted=True))
        await comment_service.insert_comment(alice, item, "Mine")

        # Act
        own = await use_case.execute(
            GetUserProfileRequest(context=RequestContext(user=alice), username="alice")
        )
        other = await use_case.execute(
            GetUserProfileRequest(context=RequestContext(user=bob), username="alice")
        )

        # Assert
        assert own.posted_items == 1
        assert own.posted_comments == 1
        assert own.email == "a@example.com"
        assert other.email is None

    @pytest.mark.asyncio
    async def test_unknown_user(self, unit_env):
        use_case = await unit_env.get(GetUserProfileUseCase)

        result = await use_case.execute(
            GetUserProfileRequest(context=RequestContext(), username="ghost")
        )

        assert result is None


class TestUpdateUserProfileUseCase:
    """Tests for UpdateUserProfileUseCase."""

    @pytest.mark.asyncio
    async def test_update_profile(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.insert(make_user(1, "alice"))

        # Act
        await use_case.execute(
            UpdateUserProfileRequest(
                context=RequestContext(user=alice), email="a@example.com", about="Hi"
            )
        )

        # Assert
        stored = await user_repo.find_by_id(alice.id)
        assert stored.about == "Hi"
        assert stored.email == "a@example.com"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["x", "a@b..c"])
    async def test_bad_email(self, unit_env, email):
        use_case = await unit_env.get(UpdateUserProfileUseCase)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.insert(make_user(1, "alice"))

        with pytest.raises(ValidationError):
            await use_case.execute(
                UpdateUserProfileRequest(context=RequestContext(user=alice), email=email)
            )

    @pytest.mark.asyncio
    async def test_anonymous(self, unit_env):
        use_case = await unit_env.get(UpdateUserProfileUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(UpdateUserProfileRequest(context=RequestContext()))
