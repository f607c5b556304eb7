"""Password reset domain service."""

import secrets

import logfire

from newsboard.config import Settings
from newsboard.domain.error import RateLimitedError, ValidationError
from newsboard.domain.model import PasswordResetToken, User
from newsboard.domain.repository import PasswordResetRepository, UserRepository
from newsboard.util.clock import Clock

from .base import Service
from .rate_limit_service import RateLimitService
from .user_service import generate_token


def password_reset_key(user: User) -> str:
    return f"user:{user.id}:password_reset"


class PasswordResetService(Service):
    """Issues and redeems single-use password reset tokens.

    Delivering the token (email) is left to the caller.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_reset_repository: PasswordResetRepository,
        rate_limit_service: RateLimitService,
        settings: Settings,
        clock: Clock,
    ) -> None:
        self.user_repository = user_repository
        self.password_reset_repository = password_reset_repository
        self.rate_limit_service = rate_limit_service
        self.delay = settings.accounts.password_reset_delay
        self.clock = clock

    async def request_reset(self, username: str, email: str) -> PasswordResetToken:
        """Issue a reset token for a username/email pair.

        Args:
            username: Account username
            email: Email address on file for the account

        Returns:
            The issued token (64 hex characters)

        Raises:
            ValidationError: No account matches the pair
            RateLimitedError: A reset was requested for this user recently
        """
        with logfire.span("password_reset_service.request_reset", username=username):
            user = await self.user_repository.find_by_username(username)
            if user is None or not user.email or user.email != email:
                logfire.warn("Password reset for unknown pair", username=username)
                raise ValidationError("No match for the specified username / email pair")

            key = password_reset_key(user)
            if await self.rate_limit_service.is_limited(key):
                raise RateLimitedError(
                    "password_reset", await self.rate_limit_service.ttl(key)
                )

            now = self.clock.now()
            token = PasswordResetToken(
                token=secrets.token_hex(32),
                user_id=user.id,
                created_at=now,
                expires_at=now + self.delay,
            )
            await self.password_reset_repository.insert(token)
            await self.rate_limit_service.set(key, self.delay)
            logfire.info("Password reset issued", user_id=user.id)
            return token

    async def complete_reset(self, token: str, password_hash: str) -> User:
        """Redeem a token and set the new password.

        The new hash, the consumed token and the rotated auth token and api
        secret are written in the caller's transaction, so either all of them
        apply or none does.

        Args:
            token: Token issued by ``request_reset``
            password_hash: New hash from the credential collaborator

        Returns:
            The user with rotated credentials

        Raises:
            ValidationError: Unknown, used or expired token
        """
        with logfire.span("password_reset_service.complete_reset"):
            now = self.clock.now()
            await self.password_reset_repository.purge_expired(now)

            reset = await self.password_reset_repository.find_valid(token, now)
            if reset is None:
                raise ValidationError("Invalid or expired password reset token")

            user = await self.user_repository.find_by_id(reset.user_id)
            if user is None:
                raise ValidationError("Invalid or expired password reset token")

            auth_token = generate_token()
            api_secret = generate_token()
            await self.user_repository.update_credentials(
                user.id,
                auth_token=auth_token,
                api_secret=api_secret,
                password_hash=password_hash,
            )
            await self.password_reset_repository.mark_used(token)
            logfire.info("Password reset completed", user_id=user.id)
            return user.model_copy(
                update={
                    "auth_token": auth_token,
                    "api_secret": api_secret,
                    "password_hash": password_hash,
                }
            )
