"""Password reset use cases."""

from pydantic import BaseModel

from newsboard.domain.service import PasswordResetService


class RequestPasswordResetRequest(BaseModel):
    """Request password reset request."""

    username: str
    email: str


class RequestPasswordResetResponse(BaseModel):
    """Request password reset response.

    The caller delivers ``token`` to ``email``; it must never be shown to
    the requester directly.
    """

    user_id: int
    email: str
    token: str
    expires_at: int


class RequestPasswordResetUseCase:
    """Use case for issuing a reset token."""

    def __init__(self, password_reset_service: PasswordResetService) -> None:
        self.password_reset_service = password_reset_service

    async def execute(
        self, request: RequestPasswordResetRequest
    ) -> RequestPasswordResetResponse:
        """Issue a token.

        Raises:
            ValidationError: No account matches the pair
            RateLimitedError: Reset requested too recently
        """
        token = await self.password_reset_service.request_reset(
            request.username, request.email
        )
        return RequestPasswordResetResponse(
            user_id=token.user_id,
            email=request.email,
            token=token.token,
            expires_at=token.expires_at,
        )


class CompletePasswordResetRequest(BaseModel):
    """Complete password reset request."""

    token: str
    password_hash: str


class CompletePasswordResetResponse(BaseModel):
    """Complete password reset response: the fresh session credentials."""

    user_id: int
    auth_token: str
    api_secret: str


class CompletePasswordResetUseCase:
    """Use case for redeeming a reset token.

    Runs in a single transaction, so the password, the consumed token and
    the rotated session credentials change together.
    """

    def __init__(self, password_reset_service: PasswordResetService) -> None:
        self.password_reset_service = password_reset_service

    async def execute(
        self, request: CompletePasswordResetRequest
    ) -> CompletePasswordResetResponse:
        """Redeem the token.

        Raises:
            ValidationError: Unknown, used or expired token
        """
        user = await self.password_reset_service.complete_reset(
            request.token, request.password_hash
        )
        return CompletePasswordResetResponse(
            user_id=user.id,
            auth_token=user.auth_token,
            api_secret=user.api_secret,
        )
