"""Unit tests for SubmitItemUseCase."""

import pytest

from newsboard.application.usecase.item import SubmitItemRequest, SubmitItemUseCase
from newsboard.domain.error import NotAuthorizedError, NotFoundError, RateLimitedError
from newsboard.domain.model import RequestContext
from newsboard.domain.repository import ItemRepository, UserRepository
from tests.conftest import make_user
from tests.di import FrozenClock
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestSubmitItemUseCase:
    """Tests for SubmitItemUseCase."""

    @pytest.mark.asyncio
    async def test_submit_new_item(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SubmitItemUseCase)
        item_repo = await unit_env.get(ItemRepository)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.insert(make_user(1, "alice"))

        request = SubmitItemRequest(
            context=RequestContext(user=user),
            title="Show: my project",
            url="https://example.com/project",
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.created is True
        saved = await item_repo.find_by_id(response.item_id)
        assert saved.title == "Show: my project"

    @pytest.mark.asyncio
    async def test_submission_cooldown(self, unit_env):
        """A second submission right after the first is rate limited."""
        # Arrange
        use_case = await unit_env.get(SubmitItemUseCase)
        user_repo = await unit_env.get(UserRepository)
        clock = await unit_env.get(FrozenClock)
        user = await user_repo.insert(make_user(1, "alice"))
        ctx = RequestContext(user=user)

        await use_case.execute(
            SubmitItemRequest(context=ctx, title="One", url="https://example.com/1")
        )
        clock.advance(60)

        # Act & Assert
        with pytest.raises(RateLimitedError) as exc_info:
            await use_case.execute(
                SubmitItemRequest(context=ctx, title="Two", url="https://example.com/2")
            )
        assert exc_info.value.retry_after == 15 * 60 - 60

    @pytest.mark.asyncio
    async def test_admin_skips_cooldown(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SubmitItemUseCase)
        user_repo = await unit_env.get(UserRepository)
        admin = await user_repo.insert(make_user(1, "root", flags="a"))
        ctx = RequestContext(user=admin)

        # Act
        first = await use_case.execute(
            SubmitItemRequest(context=ctx, title="One", url="https://example.com/1")
        )
        second = await use_case.execute(
            SubmitItemRequest(context=ctx, title="Two", url="https://example.com/2")
        )

        # Assert
        assert first.item_id != second.item_id

    @pytest.mark.asyncio
    async def test_edit_existing_item(self, unit_env):
        # Arrange
        use_case = await unit_env.get(SubmitItemUseCase)
        item_repo = await unit_env.get(ItemRepository)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.insert(make_user(1, "alice"))
        ctx = RequestContext(user=user)
        created = await use_case.execute(
            SubmitItemRequest(context=ctx, title="Draft", text="Some text")
        )

        # Act
        response = await use_case.execute(
            SubmitItemRequest(
                context=ctx,
                item_id=created.item_id,
                title="Final",
                text="Better text",
            )
        )

        # Assert
        assert response.created is False
        saved = await item_repo.find_by_id(created.item_id)
        assert saved.title == "Final"
        assert saved.url.text == "Better text"

    @pytest.mark.asyncio
    async def test_edit_missing_item(self, unit_env):
        use_case = await unit_env.get(SubmitItemUseCase)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.insert(make_user(1, "alice"))

        with pytest.raises(NotFoundError):
            await use_case.execute(
                SubmitItemRequest(
                    context=RequestContext(user=user),
                    item_id=404,
                    title="Nothing",
                    url="https://example.com",
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_cannot_submit(self, unit_env):
        use_case = await unit_env.get(SubmitItemUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                SubmitItemRequest(
                    context=RequestContext.anonymous(),
                    title="Spam",
                    url="https://example.com",
                )
            )
