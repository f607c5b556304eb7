"""Password reset token repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from newsboard.domain.model.password_reset import PasswordResetToken


class PasswordResetRepository(ABC):
    """Repository for single-use password reset tokens."""

    @abstractmethod
    async def insert(self, token: PasswordResetToken) -> PasswordResetToken:
        """Persist a freshly generated token."""
        pass

    @abstractmethod
    async def find_valid(self, token: str, now: int) -> Optional[PasswordResetToken]:
        """Find an unused, unexpired token."""
        pass

    @abstractmethod
    async def mark_used(self, token: str) -> None:
        """Flag a token as consumed."""
        pass

    @abstractmethod
    async def purge_expired(self, now: int) -> int:
        """Delete tokens whose expiry has passed."""
        pass
