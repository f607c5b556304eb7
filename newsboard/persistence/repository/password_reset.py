"""PostgreSQL implementation of PasswordReset repository."""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from newsboard.domain.model import PasswordResetToken
from newsboard.domain.repository import PasswordResetRepository
from newsboard.persistence.mappers import (
    password_reset_token_to_dict,
    row_to_password_reset_token,
)
from newsboard.persistence.tables import password_reset_tokens_table


class PostgresPasswordResetRepository(PasswordResetRepository):
    """PostgreSQL implementation of PasswordResetRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert(self, token: PasswordResetToken) -> PasswordResetToken:
        """Persist a reset token."""
        stmt = insert(password_reset_tokens_table).values(
            **password_reset_token_to_dict(token)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return token

    async def find_valid(self, token: str, now: int) -> Optional[PasswordResetToken]:
        """Find an unused, unexpired token."""
        stmt = select(password_reset_tokens_table).where(
            password_reset_tokens_table.c.token == token,
            password_reset_tokens_table.c.used.is_(False),
            password_reset_tokens_table.c.expires_at > now,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_password_reset_token(row._asdict()) if row else None

    async def mark_used(self, token: str) -> None:
        """Flag a token as consumed."""
        stmt = (
            update(password_reset_tokens_table)
            .where(password_reset_tokens_table.c.token == token)
            .values(used=True)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def purge_expired(self, now: int) -> int:
        """Delete expired tokens."""
        stmt = delete(password_reset_tokens_table).where(
            password_reset_tokens_table.c.expires_at <= now
        )
        result = await self.session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]
