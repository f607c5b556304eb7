"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .item import InMemoryItemRepository
from .password_reset import InMemoryPasswordResetRepository
from .store import (
    InMemoryCounterRepository,
    InMemoryRateLimitRepository,
    InMemoryRepostWindowRepository,
)
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCounterRepository",
    "InMemoryItemRepository",
    "InMemoryPasswordResetRepository",
    "InMemoryRateLimitRepository",
    "InMemoryRepostWindowRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
