"""User aggregate root.

Credentials are opaque here: the password hash is produced and verified by
the external credential collaborator.
"""

from typing import Optional

from pydantic import Field

from newsboard.domain.model.common import DomainModel
from newsboard.domain.value import UserFlag, UserId, Username


class User(DomainModel):
    """User aggregate root."""

    id: UserId
    username: Username
    password_hash: str
    created_at: int
    karma: int = 1
    about: str = ""
    email: Optional[str] = None
    auth_token: str
    api_secret: str
    flags: str = ""
    karma_incr_time: int = 0
    replies: int = Field(default=0, ge=0)

    def has_flags(self, flags: str) -> bool:
        """Check the user has all the given flag characters."""
        return all(flag in self.flags for flag in flags)

    @property
    def is_admin(self) -> bool:
        return self.has_flags(UserFlag.ADMIN.value)
