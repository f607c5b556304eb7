"""In-memory user repository for testing."""

from typing import Optional, Sequence

from newsboard.domain.model.user import User
from newsboard.domain.repository.user import UserRepository
from newsboard.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _replace(self, user_id: UserId, **changes) -> None:
        user = self._users.get(user_id)
        if user is not None:
            self._users[user_id] = user.model_copy(update=changes)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[i] for i in user_ids if i in self._users]

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, ignoring case."""
        for user in self._users.values():
            if str(user.username).lower() == username.lower():
                return user
        return None

    async def find_by_auth_token(self, auth_token: str) -> Optional[User]:
        for user in self._users.values():
            if user.auth_token == auth_token:
                return user
        return None

    async def insert(self, user: User) -> User:
        """Insert a user."""
        self._users[user.id] = user
        return user

    async def increment_karma(self, user_id: UserId, amount: int) -> None:
        user = self._users.get(user_id)
        if user is not None:
            self._replace(user_id, karma=user.karma + amount)

    async def set_karma_incr_time(self, user_id: UserId, timestamp: int) -> None:
        self._replace(user_id, karma_incr_time=timestamp)

    async def update_credentials(
        self,
        user_id: UserId,
        auth_token: str,
        api_secret: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> None:
        changes: dict[str, str] = {"auth_token": auth_token}
        if api_secret is not None:
            changes["api_secret"] = api_secret
        if password_hash is not None:
            changes["password_hash"] = password_hash
        self._replace(user_id, **changes)

    async def update_profile(
        self, user_id: UserId, email: Optional[str], about: str
    ) -> None:
        self._replace(user_id, email=email, about=about)

    async def set_flags(self, user_id: UserId, flags: str) -> None:
        self._replace(user_id, flags=flags)

    async def increment_replies(self, user_id: UserId) -> None:
        user = self._users.get(user_id)
        if user is not None:
            self._replace(user_id, replies=user.replies + 1)

    async def reset_replies(self, user_id: UserId) -> None:
        self._replace(user_id, replies=0)
