"""List user comments use case."""

from pydantic import BaseModel

from newsboard.application.pagination import Page, Paginator
from newsboard.config import Settings
from newsboard.domain.model import RequestContext, ThreadComment
from newsboard.domain.service import CommentService, UserService


class ListUserCommentsRequest(BaseModel):
    """List user comments request."""

    context: RequestContext
    username: str
    start: int = 0
    link_template: str = "/usercomments/{username}/$"


class ListUserCommentsUseCase:
    """Use case for a user's comment history, newest first."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
        settings: Settings,
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service
        self.per_page = settings.pagination.user_comments_per_page

    async def execute(
        self, request: ListUserCommentsRequest
    ) -> Page[ThreadComment] | None:
        """Execute list user comments flow.

        Returns:
            Page of annotated comments, None for an unknown user
        """
        user = await self.user_service.get_by_username(request.username)
        if user is None:
            return None

        async def fetch(start: int, count: int) -> tuple[list[ThreadComment], int]:
            return await self.comment_service.get_user_comments(user.id, start, count)

        link = request.link_template.replace("{username}", str(user.username))
        return await Paginator(fetch, link, self.per_page).page(request.start)
