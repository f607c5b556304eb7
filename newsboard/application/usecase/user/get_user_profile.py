"""Get user profile use case."""

from pydantic import BaseModel

from newsboard.domain.model import RequestContext
from newsboard.domain.service import UserService


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    context: RequestContext
    username: str


class GetUserProfileResponse(BaseModel):
    """Get user profile response.

    ``email`` is only included when the context user views their own
    profile.
    """

    user_id: int
    username: str
    karma: int
    about: str
    created_at: int
    posted_items: int
    posted_comments: int
    email: str | None = None
    is_admin: bool


class GetUserProfileUseCase:
    """Use case for getting a user's public profile by username."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(
        self, request: GetUserProfileRequest
    ) -> GetUserProfileResponse | None:
        """Execute get user profile flow.

        Returns:
            User profile information if user exists, None otherwise
        """
        user = await self.user_service.get_by_username(request.username)

        if not user:
            return None

        posted_items, posted_comments = await self.user_service.user_counts(user.id)
        own_profile = request.context.user_id == user.id

        return GetUserProfileResponse(
            user_id=user.id,
            username=str(user.username),
            karma=user.karma,
            about=user.about,
            created_at=user.created_at,
            posted_items=posted_items,
            posted_comments=posted_comments,
            email=user.email if own_profile else None,
            is_admin=user.is_admin,
        )
