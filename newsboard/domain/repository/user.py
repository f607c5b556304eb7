"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from newsboard.domain.model.user import User
from newsboard.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users; missing ids are skipped."""
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username, case-insensitively."""
        pass

    @abstractmethod
    async def find_by_auth_token(self, auth_token: str) -> Optional[User]:
        """Find the user owning a session token."""
        pass

    @abstractmethod
    async def insert(self, user: User) -> User:
        """Insert a new user (id already minted)."""
        pass

    @abstractmethod
    async def increment_karma(self, user_id: UserId, amount: int) -> None:
        """Atomically add ``amount`` karma."""
        pass

    @abstractmethod
    async def set_karma_incr_time(self, user_id: UserId, timestamp: int) -> None:
        """Stamp the last visit-karma increment."""
        pass

    @abstractmethod
    async def update_credentials(
        self,
        user_id: UserId,
        auth_token: str,
        api_secret: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> None:
        """Rotate the session token and optionally api secret / password."""
        pass

    @abstractmethod
    async def update_profile(
        self, user_id: UserId, email: Optional[str], about: str
    ) -> None:
        """Update email and about text."""
        pass

    @abstractmethod
    async def set_flags(self, user_id: UserId, flags: str) -> None:
        """Replace the flag string."""
        pass

    @abstractmethod
    async def increment_replies(self, user_id: UserId) -> None:
        """Atomically bump the unread replies counter."""
        pass

    @abstractmethod
    async def reset_replies(self, user_id: UserId) -> None:
        """Zero the unread replies counter."""
        pass
