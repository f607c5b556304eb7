"""Integration test for the submit, vote and view flow against PostgreSQL."""

import pytest

from newsboard.application.usecase.auth import (
    CreateAccountRequest,
    CreateAccountUseCase,
)
from newsboard.application.usecase.item import (
    GetItemRequest,
    GetItemUseCase,
    SubmitItemRequest,
    SubmitItemUseCase,
)
from newsboard.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from newsboard.domain.model import RequestContext
from newsboard.domain.repository import UserRepository
from newsboard.domain.value import UserId, VotableType, VoteType
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


class TestItemFlowIntegration:
    """End-to-end item flow through the use cases."""

    @pytest.mark.asyncio
    async def test_submit_vote_and_view(self, integration_env):
        # Arrange
        create_account = await integration_env.get(CreateAccountUseCase)
        submit_item = await integration_env.get(SubmitItemUseCase)
        cast_vote = await integration_env.get(CastVoteUseCase)
        get_item = await integration_env.get(GetItemUseCase)
        user_repo = await integration_env.get(UserRepository)

        alice_account = await create_account.execute(
            CreateAccountRequest(username="alice", password_hash="h", client_key="a")
        )
        bob_account = await create_account.execute(
            CreateAccountRequest(username="bob", password_hash="h", client_key="b")
        )
        alice = await user_repo.find_by_id(UserId(alice_account.user_id))
        bob = await user_repo.find_by_id(UserId(bob_account.user_id))

        # Act
        submitted = await submit_item.execute(
            SubmitItemRequest(
                context=RequestContext(user=alice),
                title="Postgres-backed story",
                url="https://example.com/pg",
            )
        )
        voted = await cast_vote.execute(
            CastVoteRequest(
                context=RequestContext(user=bob),
                votable_type=VotableType.ITEM,
                item_id=submitted.item_id,
                vote_type=VoteType.UP,
            )
        )
        viewed = await get_item.execute(
            GetItemRequest(context=RequestContext(user=bob), item_id=submitted.item_id)
        )

        # Assert
        assert submitted.created is True
        assert voted.voted is True
        assert viewed is not None
        assert (viewed.item.up, viewed.item.down) == (2, 0)
        assert viewed.item.user_vote == VoteType.UP
        assert viewed.item.author_username == "alice"
        assert viewed.comments == []
