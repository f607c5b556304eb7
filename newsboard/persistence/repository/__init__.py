"""PostgreSQL repository implementations."""

from newsboard.persistence.repository.comment import PostgresCommentRepository
from newsboard.persistence.repository.item import PostgresItemRepository
from newsboard.persistence.repository.password_reset import (
    PostgresPasswordResetRepository,
)
from newsboard.persistence.repository.store import (
    PostgresCounterRepository,
    PostgresRateLimitRepository,
    PostgresRepostWindowRepository,
)
from newsboard.persistence.repository.user import PostgresUserRepository
from newsboard.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresItemRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresCounterRepository",
    "PostgresRateLimitRepository",
    "PostgresRepostWindowRepository",
    "PostgresPasswordResetRepository",
]
