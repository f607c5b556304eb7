"""Authenticate use case."""

from pydantic import BaseModel

from newsboard.domain.model import RequestContext
from newsboard.domain.service import UserService


class AuthenticateRequest(BaseModel):
    """Authenticate request."""

    auth_token: str | None = None  # Session token, if any
    client_key: str = "anonymous"  # Client identity (e.g. remote address)


class AuthenticateResponse(BaseModel):
    """Authenticate response."""

    context: RequestContext


class AuthenticateUseCase:
    """Use case for building the per-request context.

    Runs once per request; the resulting context is passed explicitly to
    every other use case.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize authenticate use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: AuthenticateRequest) -> AuthenticateResponse:
        """Resolve the token; unknown tokens yield an anonymous context."""
        context = await self.user_service.authenticate(
            request.auth_token, request.client_key
        )
        return AuthenticateResponse(context=context)
