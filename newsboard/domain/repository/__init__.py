"""Repository interfaces for the newsboard domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from newsboard.domain.repository.comment import CommentRepository
from newsboard.domain.repository.item import ItemRepository
from newsboard.domain.repository.password_reset import PasswordResetRepository
from newsboard.domain.repository.store import (
    CounterRepository,
    RateLimitRepository,
    RepostWindowRepository,
)
from newsboard.domain.repository.user import UserRepository
from newsboard.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "ItemRepository",
    "CommentRepository",
    "VoteRepository",
    "CounterRepository",
    "RateLimitRepository",
    "RepostWindowRepository",
    "PasswordResetRepository",
]
