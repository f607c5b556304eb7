"""Cast vote use case."""

import logfire
from pydantic import BaseModel, model_validator

from newsboard.domain.error import NotAuthorizedError, NotFoundError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import CommentService, ItemService
from newsboard.domain.value import CommentId, ItemId, VotableType, VoteType


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    context: RequestContext
    votable_type: VotableType
    item_id: int
    comment_id: int | None = None  # Required when voting on a comment
    vote_type: VoteType

    @model_validator(mode="after")
    def check_comment_id(self) -> "CastVoteRequest":
        if self.votable_type == VotableType.COMMENT and self.comment_id is None:
            raise ValueError("comment_id is required to vote on a comment")
        return self


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``voted`` is False when the user had already voted on the target; that
    is an expected outcome, not an error.
    """

    voted: bool
    votable_type: VotableType
    item_id: int
    comment_id: int | None = None


class CastVoteUseCase:
    """Use case for voting on an item or a comment."""

    def __init__(self, item_service: ItemService, comment_service: CommentService) -> None:
        """Initialize cast vote use case.

        Args:
            item_service: Item domain service
            comment_service: Comment domain service
        """
        self.item_service = item_service
        self.comment_service = comment_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute vote flow.

        Raises:
            NotAuthorizedError: Anonymous context
            NotFoundError: Target missing or deleted
        """
        user = request.context.user
        item_id = ItemId(request.item_id)
        with logfire.span(
            "cast_vote.execute",
            votable_type=request.votable_type.value,
            item_id=item_id,
            comment_id=request.comment_id,
        ):
            if user is None:
                raise NotAuthorizedError(request.votable_type.value, str(item_id), None)

            if request.votable_type == VotableType.ITEM:
                item = await self.item_service.get_item(item_id)
                if item is None or item.deleted:
                    raise NotFoundError("Item", str(item_id))
                voted = await self.item_service.vote_item(user, item, request.vote_type)
            else:
                comment_id = CommentId(request.comment_id)
                thread_comment = await self.comment_service.fetch(item_id, comment_id)
                if thread_comment is None or thread_comment.deleted:
                    raise NotFoundError("Comment", f"{item_id}-{comment_id}")
                voted = await self.comment_service.vote_comment(
                    user, thread_comment.comment, request.vote_type
                )

            return CastVoteResponse(
                voted=voted,
                votable_type=request.votable_type,
                item_id=item_id,
                comment_id=request.comment_id,
            )
