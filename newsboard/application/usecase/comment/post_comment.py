"""Post comment use case (create, edit or delete)."""

from enum import Enum

import logfire
from pydantic import BaseModel

from newsboard.domain.error import NotAuthorizedError, NotFoundError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import CommentService, ItemService
from newsboard.domain.value import NEW_ID, ROOT_COMMENT_ID, CommentId, ItemId


class CommentOperation(str, Enum):
    """What a post-comment request ended up doing."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class PostCommentRequest(BaseModel):
    """Post comment request.

    ``comment_id == -1`` creates a reply to ``parent_id`` (-1 for top
    level). Any other ``comment_id`` edits that comment; an empty body
    deletes it.
    """

    context: RequestContext
    item_id: int
    body: str
    parent_id: int = ROOT_COMMENT_ID
    comment_id: int = NEW_ID


class PostCommentResponse(BaseModel):
    """Post comment response."""

    op: CommentOperation
    item_id: int
    comment_id: int
    parent_id: int


class PostCommentUseCase:
    """Use case for writing to a thread."""

    def __init__(self, comment_service: CommentService, item_service: ItemService) -> None:
        """Initialize post comment use case.

        Args:
            comment_service: Comment domain service
            item_service: Item domain service
        """
        self.comment_service = comment_service
        self.item_service = item_service

    async def execute(self, request: PostCommentRequest) -> PostCommentResponse:
        """Execute post comment flow.

        Args:
            request: Comment write with the request context

        Returns:
            Operation performed and the affected comment

        Raises:
            NotAuthorizedError: Anonymous context, or not the comment author
            NotFoundError: Item or edited comment doesn't exist
            ContentDeletedException: Item or edited comment is deleted
            ValidationError: Body length or unknown parent
        """
        user = request.context.user
        item_id = ItemId(request.item_id)
        with logfire.span(
            "post_comment.execute", item_id=item_id, comment_id=request.comment_id
        ):
            if user is None:
                raise NotAuthorizedError("comment", str(request.comment_id), None)

            if request.comment_id == NEW_ID:
                item = await self.item_service.get_item(item_id)
                if item is None:
                    raise NotFoundError("Item", str(item_id))

                comment = await self.comment_service.insert_comment(
                    user, item, request.body, CommentId(request.parent_id)
                )
                return PostCommentResponse(
                    op=CommentOperation.INSERT,
                    item_id=item_id,
                    comment_id=comment.id,
                    parent_id=comment.parent_id,
                )

            comment_id = CommentId(request.comment_id)
            if not request.body.strip():
                deleted = await self.comment_service.delete_comment(
                    user, item_id, comment_id
                )
                if not deleted:
                    raise NotFoundError("Comment", f"{item_id}-{comment_id}")
                return PostCommentResponse(
                    op=CommentOperation.DELETE,
                    item_id=item_id,
                    comment_id=comment_id,
                    parent_id=request.parent_id,
                )

            updated = await self.comment_service.edit_comment(
                user, item_id, comment_id, request.body
            )
            if updated is None:
                raise NotFoundError("Comment", f"{item_id}-{comment_id}")
            return PostCommentResponse(
                op=CommentOperation.UPDATE,
                item_id=item_id,
                comment_id=comment_id,
                parent_id=updated.parent_id,
            )
