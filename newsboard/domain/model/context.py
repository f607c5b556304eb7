"""Request-scoped context.

Built once per request from the auth token lookup and passed explicitly to
every use case. Read-only after construction.
"""

from typing import Optional

from newsboard.domain.model.common import DomainModel
from newsboard.domain.model.user import User
from newsboard.domain.value import UserId


class RequestContext(DomainModel):
    """Current user (if any) and the client identity used for throttling."""

    user: Optional[User] = None
    client_key: str = "anonymous"

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    @property
    def user_id(self) -> UserId | None:
        return self.user.id if self.user else None

    @classmethod
    def anonymous(cls, client_key: str = "anonymous") -> "RequestContext":
        return cls(user=None, client_key=client_key)
