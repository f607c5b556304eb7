"""User domain service."""

import secrets

import logfire
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from newsboard.config import Settings
from newsboard.domain.error import RateLimitedError, ValidationError
from newsboard.domain.model import RequestContext, User
from newsboard.domain.repository import CommentRepository, ItemRepository, UserRepository
from newsboard.domain.value import UserId, Username
from newsboard.util.clock import Clock

from .base import Service
from .counter_service import CounterService
from .rate_limit_service import RateLimitService, throttle_key

_email_adapter = TypeAdapter(EmailStr)


def normalize_email(email: str | None) -> str | None:
    """Validated, normalized address; None for an empty value.

    Raises:
        ValidationError: Malformed email
    """
    if not email:
        return None
    try:
        return _email_adapter.validate_python(email)
    except PydanticValidationError as e:
        raise ValidationError("Invalid email address") from e


def generate_token() -> str:
    """40 hex characters, used for auth tokens and api secrets."""
    return secrets.token_hex(20)


class UserService(Service):
    """Domain service for user operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        item_repository: ItemRepository,
        comment_repository: CommentRepository,
        counter_service: CounterService,
        rate_limit_service: RateLimitService,
        settings: Settings,
        clock: Clock,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            item_repository: Item repository (for user counts)
            comment_repository: Comment repository (for user counts)
            counter_service: Id allocation
            rate_limit_service: Account creation throttle
            settings: Application settings
            clock: Time source
        """
        self.user_repository = user_repository
        self.item_repository = item_repository
        self.comment_repository = comment_repository
        self.counter_service = counter_service
        self.rate_limit_service = rate_limit_service
        self.settings = settings
        self.clock = clock

    async def create_user(
        self,
        username: str,
        password_hash: str,
        client_key: str,
        email: str | None = None,
    ) -> User:
        """Create an account.

        Args:
            username: Requested username
            password_hash: Hash produced by the credential collaborator
            client_key: Client identity for the creation throttle
            email: Optional email address

        Returns:
            The created user

        Raises:
            ValidationError: Malformed or taken username, malformed email
            RateLimitedError: This client created an account recently
        """
        with logfire.span("user_service.create_user", username=username):
            try:
                name = Username(username)
            except PydanticValidationError as e:
                raise ValidationError(
                    "Username must start with a letter and contain 2-21 "
                    "letters, digits, underscores or hyphens"
                ) from e

            email = normalize_email(email)

            if await self.user_repository.find_by_username(username):
                logfire.warn("Username already taken", username=username)
                raise ValidationError("Username is busy, please try a different one")

            delay = self.settings.accounts.creation_throttle
            if await self.rate_limit_service.throttle(delay, "create_user", client_key):
                retry_after = await self.rate_limit_service.ttl(
                    throttle_key("create_user", client_key)
                )
                raise RateLimitedError("create_user", retry_after)

            now = self.clock.now()
            user = User(
                id=await self.counter_service.next_user_id(),
                username=name,
                password_hash=password_hash,
                created_at=now,
                karma=self.settings.karma.initial,
                email=email or None,
                auth_token=generate_token(),
                api_secret=generate_token(),
                karma_incr_time=now,
            )
            saved = await self.user_repository.insert(user)
            logfire.info("User created", user_id=saved.id, username=username)
            return saved

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Get user by ID."""
        return await self.user_repository.find_by_id(user_id)

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username (case-insensitive)."""
        with logfire.span("user_service.get_by_username", username=username):
            user = await self.user_repository.find_by_username(username)
            if not user:
                logfire.warn("User not found", username=username)
            return user

    async def get_usernames(self, user_ids: list[UserId]) -> dict[UserId, str]:
        """Map ids to usernames for rendering."""
        users = await self.user_repository.find_by_ids(list(set(user_ids)))
        return {user.id: str(user.username) for user in users}

    async def authenticate(self, auth_token: str | None, client_key: str) -> RequestContext:
        """Build the request context from a session token.

        An authenticated visit grants ``karma.increment_amount`` karma at most
        once per ``karma.increment_interval`` seconds.

        Args:
            auth_token: Token from the session cookie or api call
            client_key: Client identity used for throttling

        Returns:
            Authenticated context, or an anonymous one for unknown tokens
        """
        with logfire.span("user_service.authenticate", client_key=client_key):
            if not auth_token:
                return RequestContext.anonymous(client_key)

            user = await self.user_repository.find_by_auth_token(auth_token)
            if user is None:
                logfire.warn("Unknown auth token", client_key=client_key)
                return RequestContext.anonymous(client_key)

            user = await self._increment_karma_if_needed(user)
            return RequestContext(user=user, client_key=client_key)

    async def _increment_karma_if_needed(self, user: User) -> User:
        karma = self.settings.karma
        now = self.clock.now()
        if user.karma_incr_time >= now - karma.increment_interval:
            return user

        await self.user_repository.set_karma_incr_time(user.id, now)
        await self.user_repository.increment_karma(user.id, karma.increment_amount)
        logfire.info("Visit karma granted", user_id=user.id)
        return user.model_copy(
            update={
                "karma": user.karma + karma.increment_amount,
                "karma_incr_time": now,
            }
        )

    async def logout(self, user_id: UserId) -> str:
        """Rotate the auth token, invalidating every session.

        Returns:
            The new token
        """
        token = generate_token()
        await self.user_repository.update_credentials(user_id, auth_token=token)
        logfire.info("User logged out", user_id=user_id)
        return token

    async def add_flags(self, user_id: UserId, flags: str) -> bool:
        """Add flag characters to a user.

        Returns:
            False if the user doesn't exist
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            return False

        merged = user.flags + "".join(f for f in dict.fromkeys(flags) if f not in user.flags)
        await self.user_repository.set_flags(user_id, merged)
        return True

    async def update_profile(
        self, user_id: UserId, email: str | None, about: str
    ) -> None:
        """Update email and about text.

        Raises:
            ValidationError: Malformed email
        """
        await self.user_repository.update_profile(user_id, normalize_email(email), about)

    async def user_counts(self, user_id: UserId) -> tuple[int, int]:
        """Number of live items and comments posted by a user."""
        items = await self.item_repository.count(author_id=user_id)
        comments = await self.comment_repository.count_by_author(user_id)
        return items, comments

    async def transfer_karma(self, user_id: UserId, amount: int) -> None:
        """Atomically add karma to a content author.

        Uses SQL-level increment to avoid race conditions.
        """
        with logfire.span("user_service.transfer_karma", user_id=user_id, amount=amount):
            await self.user_repository.increment_karma(user_id, amount)

    async def increment_replies(self, user_id: UserId) -> None:
        await self.user_repository.increment_replies(user_id)

    async def reset_replies(self, user_id: UserId) -> None:
        await self.user_repository.reset_replies(user_id)
