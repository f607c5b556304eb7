"""Update user profile use case."""

from pydantic import BaseModel, Field

from newsboard.domain.error import NotAuthorizedError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import UserService


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request."""

    context: RequestContext
    email: str | None = None
    about: str = Field(default="", max_length=4096)


class UpdateUserProfileUseCase:
    """Use case for editing the context user's email and about text."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateUserProfileRequest) -> None:
        """Execute update profile flow.

        Raises:
            NotAuthorizedError: Anonymous context
            ValidationError: Malformed email
        """
        user_id = request.context.user_id
        if user_id is None:
            raise NotAuthorizedError("user", "profile", None)
        await self.user_service.update_profile(user_id, request.email, request.about)
