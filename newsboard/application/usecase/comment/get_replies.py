"""Get replies use case."""

import logfire
from pydantic import BaseModel

from newsboard.application.usecase.comment.common import Subthread, to_entries
from newsboard.config import Settings
from newsboard.domain.error import NotAuthorizedError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import CommentService, UserService


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    context: RequestContext


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    threads: list[Subthread]


class GetRepliesUseCase:
    """Use case for the replies page.

    Shows the user's latest comments with every reply below them, then marks
    replies as read.
    """

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
        settings: Settings,
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service
        self.per_page = settings.pagination.replies_per_page

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow.

        Raises:
            NotAuthorizedError: Anonymous context
        """
        user = request.context.user
        if user is None:
            raise NotAuthorizedError("replies", "self", None)

        with logfire.span("get_replies.execute", user_id=user.id):
            comments, _ = await self.comment_service.get_user_comments(
                user.id, 0, self.per_page
            )

            threads = []
            for comment in comments:
                replies = await self.comment_service.render(
                    comment.comment.item_id, root=comment.id
                )
                threads.append(Subthread(comment=comment, replies=to_entries(replies)))

            await self.user_service.reset_replies(user.id)
            return GetRepliesResponse(threads=threads)
