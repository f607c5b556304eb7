"""Password reset token entity."""

from newsboard.domain.model.common import DomainModel
from newsboard.domain.value import UserId


class PasswordResetToken(DomainModel):
    """Single-use password reset token."""

    token: str
    user_id: UserId
    created_at: int
    expires_at: int
    used: bool = False

    def is_valid(self, now: int) -> bool:
        """Unused and not yet expired."""
        return not self.used and self.expires_at > now
