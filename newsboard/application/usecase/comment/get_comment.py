"""Get comment use case (a comment with its subthread)."""

from pydantic import BaseModel

from newsboard.application.usecase.comment.common import Subthread, to_entries
from newsboard.domain.model import ItemView, RequestContext
from newsboard.domain.service import CommentService, ItemService
from newsboard.domain.value import CommentId, ItemId


class GetCommentRequest(BaseModel):
    """Get comment request."""

    context: RequestContext
    item_id: int
    comment_id: int


class GetCommentResponse(BaseModel):
    """Get comment response."""

    item: ItemView
    thread: Subthread


class GetCommentUseCase:
    """Use case for the single comment view.

    The comment score comes straight from the vote ledger.
    """

    def __init__(self, comment_service: CommentService, item_service: ItemService) -> None:
        self.comment_service = comment_service
        self.item_service = item_service

    async def execute(self, request: GetCommentRequest) -> GetCommentResponse | None:
        """Execute get comment flow.

        Returns:
            Item, comment and replies; None if the item is missing or
            deleted, or the comment is missing
        """
        item_id = ItemId(request.item_id)
        item = await self.item_service.get_item(item_id)
        if item is None or item.deleted:
            return None

        comment = await self.comment_service.fetch(item_id, CommentId(request.comment_id))
        if comment is None:
            return None

        [view] = await self.item_service.annotate([item], request.context.user_id)
        replies = await self.comment_service.render(item_id, root=comment.id)
        return GetCommentResponse(
            item=view,
            thread=Subthread(comment=comment, replies=to_entries(replies)),
        )
