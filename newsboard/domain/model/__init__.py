"""Domain model entities for newsboard."""

from newsboard.domain.model.comment import Comment, ThreadComment
from newsboard.domain.model.context import RequestContext
from newsboard.domain.model.item import Item, ItemView
from newsboard.domain.model.password_reset import PasswordResetToken
from newsboard.domain.model.user import User
from newsboard.domain.model.vote import Vote, VoteCounts

__all__ = [
    "User",
    "Item",
    "ItemView",
    "Comment",
    "ThreadComment",
    "Vote",
    "VoteCounts",
    "PasswordResetToken",
    "RequestContext",
]
