"""Logout use case."""

from pydantic import BaseModel

from newsboard.domain.error import NotAuthorizedError
from newsboard.domain.model import RequestContext
from newsboard.domain.service import UserService


class LogoutRequest(BaseModel):
    """Logout request."""

    context: RequestContext


class LogoutUseCase:
    """Use case for invalidating every session of the context user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: LogoutRequest) -> None:
        """Rotate the auth token.

        Raises:
            NotAuthorizedError: Anonymous context
        """
        user_id = request.context.user_id
        if user_id is None:
            raise NotAuthorizedError("session", "logout", None)
        await self.user_service.logout(user_id)
