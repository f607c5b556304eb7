"""Create account use case."""

from pydantic import BaseModel

from newsboard.domain.service import UserService


class CreateAccountRequest(BaseModel):
    """Create account request.

    The password is hashed by the credential collaborator before it
    reaches the core.
    """

    username: str
    password_hash: str
    email: str | None = None
    client_key: str = "anonymous"


class CreateAccountResponse(BaseModel):
    """Create account response."""

    user_id: int
    username: str
    auth_token: str
    api_secret: str


class CreateAccountUseCase:
    """Use case for registering a user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: CreateAccountRequest) -> CreateAccountResponse:
        """Execute create account flow.

        Raises:
            ValidationError: Bad or taken username, bad email
            RateLimitedError: Creation throttle active for this client
        """
        user = await self.user_service.create_user(
            username=request.username,
            password_hash=request.password_hash,
            client_key=request.client_key,
            email=request.email,
        )
        return CreateAccountResponse(
            user_id=user.id,
            username=str(user.username),
            auth_token=user.auth_token,
            api_secret=user.api_secret,
        )
