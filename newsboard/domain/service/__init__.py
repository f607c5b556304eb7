"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentTree, Ordering, default_ordering
from .counter_service import CounterService
from .item_service import ItemService
from .password_reset_service import PasswordResetService
from .ranking_service import RankingService, compute_rank, compute_score
from .rate_limit_service import RateLimitService, throttle_key
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "CommentTree",
    "CounterService",
    "ItemService",
    "Ordering",
    "PasswordResetService",
    "RankingService",
    "RateLimitService",
    "Service",
    "UserService",
    "VoteService",
    "compute_rank",
    "compute_score",
    "default_ordering",
    "throttle_key",
]
