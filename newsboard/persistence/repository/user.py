"""PostgreSQL implementation of User repository."""

from typing import List, Optional, Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.model import User
from newsboard.domain.repository.user import UserRepository
from newsboard.domain.value import UserId
from newsboard.persistence.mappers import row_to_user, user_to_dict
from newsboard.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, condition) -> Optional[User]:
        stmt = select(users_table).where(condition)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def _update(self, user_id: UserId, **values) -> None:
        stmt = update(users_table).where(users_table.c.id == user_id).values(**values)
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find users by IDs."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        return [row_to_user(row._asdict()) for row in result.fetchall()]

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username (case-insensitive)."""
        return await self._find_one(
            func.lower(users_table.c.username) == username.lower()
        )

    async def find_by_auth_token(self, auth_token: str) -> Optional[User]:
        """Find a user by session token."""
        return await self._find_one(users_table.c.auth_token == auth_token)

    async def insert(self, user: User) -> User:
        """Insert a user."""
        stmt = insert(users_table).values(**user_to_dict(user))
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def increment_karma(self, user_id: UserId, amount: int) -> None:
        """Atomically add karma."""
        await self._update(user_id, karma=users_table.c.karma + amount)

    async def set_karma_incr_time(self, user_id: UserId, timestamp: int) -> None:
        """Stamp the last visit-karma increment."""
        await self._update(user_id, karma_incr_time=timestamp)

    async def update_credentials(
        self,
        user_id: UserId,
        auth_token: str,
        api_secret: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> None:
        """Rotate credentials."""
        values = {"auth_token": auth_token}
        if api_secret is not None:
            values["api_secret"] = api_secret
        if password_hash is not None:
            values["password_hash"] = password_hash
        await self._update(user_id, **values)

    async def update_profile(
        self, user_id: UserId, email: Optional[str], about: str
    ) -> None:
        """Update email and about."""
        await self._update(user_id, email=email, about=about)

    async def set_flags(self, user_id: UserId, flags: str) -> None:
        """Replace flags."""
        await self._update(user_id, flags=flags)

    async def increment_replies(self, user_id: UserId) -> None:
        """Atomically bump unread replies."""
        await self._update(user_id, replies=users_table.c.replies + 1)

    async def reset_replies(self, user_id: UserId) -> None:
        """Zero unread replies."""
        await self._update(user_id, replies=0)
